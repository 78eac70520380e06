"""Tokenizer for GitHub Actions ``${{ }}`` expressions.

The parser is deliberately permissive: any string yields an
:class:`ExpressionComponents`, and malformed fragments simply produce fewer
contexts or functions. Errors are the validator's business.

Quoted string contents are masked out before contexts, functions and
operators are searched, so ``'a foo.bar b'`` is a literal and not a reference
to a ``foo`` context.
"""

import re
from typing import List, Tuple

from flughafen.expressions.types import (
    ContextReference,
    ExpressionComponents,
    FunctionCall,
    LiteralValue,
)

KNOWN_CONTEXTS = (
    "github",
    "env",
    "job",
    "runner",
    "steps",
    "needs",
    "strategy",
    "matrix",
    "secrets",
    "vars",
    "inputs",
)

# A reference only starts at an expression boundary, never after ``-`` as in
# ``steps.build-foo.outputs``.
_BOUNDARY = r"(?:^|[\s(,|&!=<>])\s*"
KNOWN_CONTEXT_PATTERN = re.compile(_BOUNDARY + r"(" + "|".join(KNOWN_CONTEXTS) + r")\.([\w.\-\[\]'\"]+)")
POTENTIAL_CONTEXT_PATTERN = re.compile(_BOUNDARY + r"([a-zA-Z_][a-zA-Z0-9_]*)\.([a-zA-Z_][\w.\-\[\]'\"]*)")
FUNCTION_PATTERN = re.compile(r"\b(\w+)\s*\(")
OPERATOR_PATTERN = re.compile(r"\|\||&&|==|!=|<=|>=|<|>|!")
STRING_PATTERN = re.compile(r"'((?:[^']|'')*)'|\"([^\"]*)\"")
NUMBER_PATTERN = re.compile(r"\b\d+(?:\.\d+)?\b")
KEYWORD_PATTERN = re.compile(r"\b(true|false|null)\b")

_KEYWORDS = {"true": True, "false": False, "null": None}


def _clean(expression: str) -> str:
    trimmed = expression.strip()
    if trimmed.startswith("${{") and trimmed.endswith("}}"):
        return trimmed[3:-2].strip()
    return trimmed


def _mask(text: str, spans: List[Tuple[int, int]]) -> str:
    """Replace each span with spaces, keeping offsets intact."""
    chars = list(text)
    for start, end in spans:
        chars[start:end] = " " * (end - start)
    return "".join(chars)


def _mask_strings(text: str) -> str:
    # keep the quotes so string boundaries still separate tokens
    return _mask(text, [(m.start() + 1, m.end() - 1) for m in STRING_PATTERN.finditer(text)])


def _split_arguments(text: str, open_paren: int) -> List[str]:
    """Split the arguments of the call whose ``(`` is at ``open_paren``.

    Returns an empty list when the parentheses never balance.
    """
    depth = 0
    quote = None
    current: List[str] = []
    args: List[str] = []
    for char in text[open_paren + 1 :]:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
            continue
        if char in ("'", '"'):
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            if depth == 0:
                args.append("".join(current).strip())
                if args == [""]:
                    return []
                return args
            depth -= 1
        elif char == "," and depth == 0:
            args.append("".join(current).strip())
            current = []
            continue
        current.append(char)
    return []


def _references(pattern: re.Pattern, text: str) -> List[ContextReference]:
    refs = []
    for match in pattern.finditer(text):
        name, path_str = match.group(1), match.group(2)
        refs.append(
            ContextReference(
                name=name,
                path=[segment for segment in path_str.split(".") if segment],
                full_path=f"{name}.{path_str}",
            )
        )
    return refs


class ExpressionParser:
    """Splits an expression into context references, calls, operators and literals."""

    def parse_expression(self, expression: str) -> ExpressionComponents:
        cleaned = _clean(expression)
        masked = _mask_strings(cleaned)
        return ExpressionComponents(
            original=expression,
            cleaned=cleaned,
            contexts=_references(KNOWN_CONTEXT_PATTERN, masked),
            functions=self._extract_functions(cleaned, masked),
            operators=OPERATOR_PATTERN.findall(masked),
            literals=self._extract_literals(cleaned, masked),
        )

    def extract_context_references(self, expression: str) -> List[ContextReference]:
        return self.parse_expression(expression).contexts

    def extract_all_potential_contexts(self, expression: str) -> List[ContextReference]:
        """Find every ``identifier.path`` reference, known namespace or not."""
        return _references(POTENTIAL_CONTEXT_PATTERN, _mask_strings(_clean(expression)))

    def _extract_functions(self, cleaned: str, masked: str) -> List[FunctionCall]:
        return [
            FunctionCall(
                name=match.group(1),
                args=_split_arguments(cleaned, match.end() - 1),
                position=match.start(1),
            )
            for match in FUNCTION_PATTERN.finditer(masked)
        ]

    def _extract_literals(self, cleaned: str, masked: str) -> List[LiteralValue]:
        found: List[Tuple[int, LiteralValue]] = []

        for match in STRING_PATTERN.finditer(cleaned):
            if match.group(1) is not None:
                value = match.group(1).replace("''", "'")
            else:
                value = match.group(2)
            found.append((match.start(), LiteralValue("string", value, match.group(0))))

        # numbers and keywords never come from context paths or function names
        hidden = [(m.start(1), m.end(2)) for m in POTENTIAL_CONTEXT_PATTERN.finditer(masked)]
        hidden += [(m.start(1), m.end(1)) for m in FUNCTION_PATTERN.finditer(masked)]
        bare = _mask(masked, hidden)

        for match in NUMBER_PATTERN.finditer(bare):
            raw = match.group(0)
            number = float(raw) if "." in raw else int(raw)
            found.append((match.start(), LiteralValue("number", number, raw)))

        for match in KEYWORD_PATTERN.finditer(bare):
            raw = match.group(1)
            kind = "null" if raw == "null" else "boolean"
            found.append((match.start(), LiteralValue(kind, _KEYWORDS[raw], raw)))

        found.sort(key=lambda item: item[0])
        return [literal for _, literal in found]


def parse_expression(expression: str) -> ExpressionComponents:
    return ExpressionParser().parse_expression(expression)
