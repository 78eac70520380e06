"""Helpers for writing generated Python modules.

Generated modules assign each top-level builder to a variable:

    workflow = (
        WorkflowBuilder()
        .name("CI")
        .step(lambda step: step.name("Checkout").uses("actions/checkout@v4"))
    )

Chained calls live at one indentation level inside the parentheses. A
callback that does not fit on its line is wrapped inside its own call.
"""

import keyword
import math
import pprint
import re
from collections.abc import Mapping
from typing import Any, Iterable, List, Sequence, Set

MAX_LINE = 88
INDENT = "    "


def check_renderable(value: Any, where: str = "value") -> None:
    """Raise ``ValueError`` unless ``value`` is made of plain literals only."""
    if value is None or isinstance(value, (bool, int, str)):
        return
    if isinstance(value, float):
        if math.isinf(value) or math.isnan(value):
            raise ValueError(f"Cannot express {value!r} at {where}")
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            check_renderable(key, where)
            check_renderable(item, f"{where}.{key}")
        return
    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            check_renderable(item, f"{where}[{index}]")
        return
    raise ValueError(f"Cannot express value of type {type(value).__name__} at {where}")


def literal(value: Any, where: str = "value", width: int = 10**9) -> str:
    """Python source for a plain literal. Single line unless ``width`` is small."""
    check_renderable(value, where)
    if isinstance(value, Mapping) and not isinstance(value, dict):
        value = dict(value)
    return pprint.pformat(value, width=width, sort_dicts=False)


def identifier(name: Any, suffix: str, taken: Set[str]) -> str:
    """A fresh Python identifier derived from ``name``, registered in ``taken``."""
    base = re.sub(r"[^0-9a-zA-Z_]+", "_", str(name)).strip("_").lower() or "item"
    if base[0].isdigit():
        base = f"_{base}"
    candidate = f"{base}_{suffix}"
    counter = 2
    while candidate in taken or keyword.iskeyword(candidate):
        candidate = f"{base}_{suffix}_{counter}"
        counter += 1
    taken.add(candidate)
    return candidate


def method_name(key: str) -> str:
    """Builder method for a YAML key: ``runs-on`` -> ``runs_on``, ``if`` -> ``if_``."""
    name = key.replace("-", "_")
    return f"{name}_" if keyword.iskeyword(name) else name


def call(method: str, *args: Any, where: str = "value") -> str:
    """A chained method call such as ``.name('CI')``."""
    return f".{method}({', '.join(literal(arg, where) for arg in args)})"


def callback_call(method: str, param: str, calls: Sequence[str], indent: str = INDENT) -> str:
    """A chained call taking a builder callback, e.g. ``.step(lambda step: step.run('make'))``.

    ``indent`` is the indentation of the line the call starts on.
    """
    body = f"lambda {param}: {param}" + "".join(calls)
    one_line = f".{method}({body})"
    if len(indent) + len(one_line) <= MAX_LINE:
        return one_line
    inner = indent + INDENT
    lines = [f".{method}(", f"{inner}lambda {param}: {param}{calls[0] if calls else ''}"]
    lines += [f"{inner}{c}" for c in calls[1:]]
    lines.append(f"{indent})")
    return "\n".join(lines)


def assignment(name: str, receiver: str, calls: Sequence[str]) -> str:
    """``name = receiver.call()...``, parenthesized over several lines when long."""
    one_line = f"{name} = {receiver}" + "".join(calls)
    if len(one_line) <= MAX_LINE and "\n" not in one_line:
        return one_line
    lines = [f"{name} = (", f"{INDENT}{receiver}"] + [f"{INDENT}{c}" for c in calls] + [")"]
    return "\n".join(lines)


def module(source: str, imports: Iterable[str], body: List[str]) -> str:
    """Assemble a generated module: header comment, imports and top-level statements."""
    origin = source.replace("\n", " ")
    lines = [f"# Generated by flughafen from {origin}", "# Run `flughafen synth` on this file to write the YAML back.", ""]
    names = sorted(set(imports))
    if names:
        lines += [f"from flughafen import {', '.join(names)}", "", ""]
    lines.append("\n\n\n".join(body))
    return "\n".join(lines).rstrip() + "\n"
