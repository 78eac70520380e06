from typing import Any, Dict, List

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError, UnknownType
from referencing.exceptions import Unresolvable

# Raised when the schema itself is unusable, not the instance.
SCHEMA_ENGINE_ERRORS = (SchemaError, UnknownType, Unresolvable)


def schema_violations(schema: Dict[str, Any], instance: Any) -> List[str]:
    """Check ``instance`` against a draft-07 schema.

    Returns one ``"<instance path>: <message>"`` entry per violated constraint,
    ordered by instance path. The root is written as ``/``.

    Raises:
        SchemaError: If ``schema`` is not a valid draft-07 schema.
        UnknownType: If the schema names a type the validator does not know.
        Unresolvable: If a ``$ref`` cannot be resolved.
    """
    Draft7Validator.check_schema(schema)
    validator = Draft7Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.absolute_path])
    return [f"/{'/'.join(str(p) for p in error.absolute_path)}: {error.message}" for error in errors]
