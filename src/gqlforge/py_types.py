"""Schema type -> Python host mapping and generated-name helpers."""

from __future__ import annotations

import keyword
from collections.abc import Mapping

from gqlforge.encoders import BUILTIN_ENCODERS, DEFAULT_SCALARS
from gqlforge.model import Field, Object, Type

# Module-level names every generated module defines or imports itself.
SCHEMA_CONSTANT = "SCHEMA"
INTERFACE_NAME = "Resolvers"
RESERVED_NAMES: tuple[str, ...] = (
    "annotations", "abc", INTERFACE_NAME, SCHEMA_CONSTANT, *BUILTIN_ENCODERS,
)

# ── Scalar encoders ──────────────────────────────────────────────

# Each scalar kind has exactly one encoder expression.


def scalar_table(overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    """Merge configured scalar encoders over the built-in ones."""
    table = dict(DEFAULT_SCALARS)
    if overrides:
        table.update(overrides)
    return table


def scalar_encoder(ty: Type, scalars: Mapping[str, str]) -> str | None:
    """Return the encoder expression for a basic type, or None if unknown."""
    return scalars.get(ty.graphql_name)


# ── Naming ───────────────────────────────────────────────────────


def lc_first(s: str) -> str:
    return s[:1].lower() + s[1:]


def dispatcher_name(ty: Type) -> str:
    """Name of the generated field dispatcher for an object type."""
    return f"_{lc_first(ty.graphql_name)}"


def satisfies_name(ty: Type) -> str:
    return f"{lc_first(ty.graphql_name)}_satisfies"


def implementors_name(ty: Type) -> str:
    return f"{lc_first(ty.graphql_name)}_implementors"


def resolver_method_name(obj: Object, fld: Field) -> str:
    return f"{obj.name}_{fld.graphql_name}"


def is_identifier(name: str) -> bool:
    """True if *name* can be used as a Python name in generated code."""
    return name.isidentifier() and not keyword.iskeyword(name)


def quote(s: str) -> str:
    """Python string literal for *s*."""
    return repr(s)
