"""
Serialization helpers for builder objects (Operation, Memory, CodeBuilder).

Provides JSON/YAML round-trip via an intermediate dict representation.
Saved snapshot libraries (Memory) can be kept on disk and shared between
generators this way.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

import yaml

from codebuilder.builder import CodeBuilder, Memory
from codebuilder.config import BuilderConfig
from codebuilder.model import Attribution, Indent, Operation


_DIRECTIVE_NAMES = {
    Indent.NONE: "none",
    Indent.OPEN: "open",
    Indent.CLOSE: "close",
    Indent.CLOSE_THEN_OPEN: "close_then_open",
}
_DIRECTIVES_BY_NAME = {name: directive for directive, name in _DIRECTIVE_NAMES.items()}


def operation_to_dict(op: Operation) -> Dict[str, Any]:
    d: Dict[str, Any] = {
        "text": op.text,
        "directive": _DIRECTIVE_NAMES[op.directive],
        "raw": op.raw,
    }
    if op.attribution is not None:
        d["attribution"] = {"file": op.attribution.file, "line": op.attribution.line}
    return d


def operation_from_dict(d: Any) -> Operation:
    if not isinstance(d, dict) or "directive" not in d:
        raise TypeError(f"Unsupported operation dict: {d!r}")
    name = d["directive"]
    if name not in _DIRECTIVES_BY_NAME:
        raise TypeError(f"Unsupported directive: {name!r}")
    attribution = d.get("attribution")
    return Operation(
        text=d.get("text"),
        directive=_DIRECTIVES_BY_NAME[name],
        raw=bool(d.get("raw", False)),
        attribution=Attribution(file=attribution["file"], line=attribution["line"]) if attribution else None,
    )


def operations_to_list(ops: Sequence[Operation]) -> List[Dict[str, Any]]:
    return [operation_to_dict(op) for op in ops]


def operations_from_list(items: Sequence[Any] | None) -> List[Operation]:
    return [operation_from_dict(item) for item in items or []]


def memory_to_dict(m: Memory) -> Dict[str, Any]:
    return {name: operations_to_list(ops) for name, ops in m.saved.items()}


def memory_from_dict(d: Dict[str, Any] | None) -> Memory:
    return Memory(saved={name: tuple(operations_from_list(ops)) for name, ops in (d or {}).items()})


def memory_to_yaml(m: Memory) -> str:
    return yaml.safe_dump(memory_to_dict(m))


def memory_from_yaml(s: str) -> Memory:
    return memory_from_dict(yaml.safe_load(s))


def builder_to_dict(b: CodeBuilder) -> Dict[str, Any]:
    return {
        "indent_base": b.indent_base,
        "indentation": b.indentation,
        "log": operations_to_list(b.log),
        "stack": [operations_to_list(group) for group in b.pending],
        "staging": operations_to_list(b.staged),
        "snapshots": memory_to_dict(b.memory()),
    }


def builder_from_dict(d: Dict[str, Any]) -> CodeBuilder:
    """
    Rebuild a CodeBuilder, including its pending stack and staging.

    The log is restored exactly as stored.
    """
    config = BuilderConfig(
        indentation=d.get("indentation", BuilderConfig.indentation),
        initial_indent=d.get("indent_base", 0),
    )
    b = CodeBuilder(config=config)
    for op in operations_from_list(d.get("log")):
        b.append(op.text, op.directive, op.raw, op.attribution)
    for group in d.get("stack", []):
        for op in operations_from_list(group):
            b.stage(op.text, op.directive, op.raw, op.attribution)
        b.commit_stage_to_stack()
    for op in operations_from_list(d.get("staging")):
        b.stage(op.text, op.directive, op.raw, op.attribution)
    b.use_memory(memory_from_dict(d.get("snapshots")))
    return b


def builder_to_json(b: CodeBuilder) -> str:
    return json.dumps(builder_to_dict(b), sort_keys=True)


def builder_from_json(s: str) -> CodeBuilder:
    d = json.loads(s)
    return builder_from_dict(d)


def builder_to_yaml(b: CodeBuilder) -> str:
    return yaml.safe_dump(builder_to_dict(b))


def builder_from_yaml(s: str) -> CodeBuilder:
    d = yaml.safe_load(s)
    return builder_from_dict(d)
