"""YAML loading and dumping in the dialect GitHub reads.

PyYAML implements YAML 1.1, where ``on``, ``off``, ``yes`` and ``no`` are
booleans. GitHub treats them as strings, so both the loader and the dumper
here only resolve ``true``/``false`` as booleans. Without this, a workflow's
``on:`` key would load as ``True``.
"""

import re
from typing import Any

import yaml

_BOOL_TAG = "tag:yaml.org,2002:bool"
_BOOL_PATTERN = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")


def _without_yaml11_bools(resolvers):
    return {
        first: [(tag, regexp) for tag, regexp in entries if tag != _BOOL_TAG]
        for first, entries in resolvers.items()
    }


class ActionsLoader(yaml.SafeLoader):
    """Safe loader that keeps ``on``/``off``/``yes``/``no`` as strings."""


ActionsLoader.yaml_implicit_resolvers = _without_yaml11_bools(yaml.SafeLoader.yaml_implicit_resolvers)
ActionsLoader.add_implicit_resolver(_BOOL_TAG, _BOOL_PATTERN, list("tTfF"))


class ActionsDumper(yaml.SafeDumper):
    """Safe dumper that writes ``on:`` unquoted and indents block sequences."""

    def increase_indent(self, flow: bool = False, indentless: bool = False):
        return super().increase_indent(flow, False)


ActionsDumper.yaml_implicit_resolvers = _without_yaml11_bools(yaml.SafeDumper.yaml_implicit_resolvers)
ActionsDumper.add_implicit_resolver(_BOOL_TAG, _BOOL_PATTERN, list("tTfF"))


def _represent_str(dumper: yaml.SafeDumper, data: str) -> yaml.ScalarNode:
    if "\n" in data:
        return dumper.represent_scalar("tag:yaml.org,2002:str", data, style="|")
    return dumper.represent_scalar("tag:yaml.org,2002:str", data)


def _represent_none(dumper: yaml.SafeDumper, _data: None) -> yaml.ScalarNode:
    return dumper.represent_scalar("tag:yaml.org,2002:null", "")


ActionsDumper.add_representer(str, _represent_str)
ActionsDumper.add_representer(type(None), _represent_none)


def load_yaml(text: str) -> Any:
    """Parse YAML text. Raises ``yaml.YAMLError`` on malformed input."""
    return yaml.load(text, Loader=ActionsLoader)


def dump_yaml(data: Any) -> str:
    """Serialize ``data`` keeping key order and without wrapping long lines."""
    return yaml.dump(
        data,
        Dumper=ActionsDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=2**31 - 1,
    )
