"""Read an extractor's model file (JSON) into a SchemaModel."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from gqlforge.errors import Diagnostic, GenerationError, Severity
from gqlforge.model import (
    Argument,
    Field,
    Import,
    Modifier,
    Object,
    SchemaModel,
    Type,
)


def _malformed(message: str, location: str = "") -> GenerationError:
    return GenerationError([Diagnostic(Severity.ERROR, "G000", message, location)])


def _require(data: dict[str, Any], key: str, location: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise _malformed(f"missing '{key}'", location) from None
    except TypeError:
        raise _malformed("expected an object", location) from None


def type_from_dict(data: dict[str, Any], location: str = "") -> Type:
    name = _require(data, "name", location)
    modifiers = []
    for mod in data.get("modifiers", []):
        try:
            modifiers.append(Modifier(mod))
        except ValueError:
            raise _malformed(f"unknown modifier '{mod}'", location) from None
    return Type(
        name=name,
        graphql_name=data.get("graphql_name", name),
        basic=bool(data.get("basic", False)),
        modifiers=tuple(modifiers),
        implementors=tuple(
            type_from_dict(impl, location) for impl in data.get("implementors", [])
        ),
    )


def field_from_dict(data: dict[str, Any], location: str = "") -> Field:
    key = _require(data, "graphql_name", location)
    loc = f"{location}.{key}"
    return Field(
        graphql_name=key,
        type=type_from_dict(_require(data, "type", loc), loc),
        var_name=data.get("var_name") or "",
        method_name=data.get("method_name") or "",
        args=tuple(
            Argument(
                _require(arg, "name", loc),
                type_from_dict(_require(arg, "type", loc), loc),
            )
            for arg in data.get("args", [])
        ),
        no_err=bool(data.get("no_err", False)),
    )


def object_from_dict(data: dict[str, Any]) -> Object:
    name = _require(data, "name", "")
    return Object(
        name=name,
        type=type_from_dict(_require(data, "type", name), name),
        fields=tuple(field_from_dict(f, name) for f in data.get("fields", [])),
        satisfies=tuple(data.get("satisfies", [])),
    )


def model_from_dict(data: dict[str, Any]) -> SchemaModel:
    if not isinstance(data, dict):
        raise _malformed("model must be a JSON object")
    return SchemaModel(
        objects=tuple(object_from_dict(o) for o in data.get("objects", [])),
        namespace=data.get("namespace", ""),
        imports=tuple(
            Import(_require(i, "alias", "imports"), _require(i, "path", "imports"))
            for i in data.get("imports", [])
        ),
        schema_raw=data.get("schema", ""),
    )


def load_model(path: Path) -> SchemaModel:
    """Parse a model file. Raises GenerationError (G000) if it is malformed."""
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise _malformed(f"invalid JSON: {e.msg}", f"{path}:{e.lineno}:{e.colno}") from None
    return model_from_dict(data)
