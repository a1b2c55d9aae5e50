"""Resolved schema model consumed by the generator.

These are produced by an extractor from a parsed schema and are only read
during generation. Nothing here knows about the emitted source text except
``Type.annotation``, which renders the host-side annotation of a type
occurrence.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

# Host type of the synthetic root object. Objects of this type get no
# receiver parameter in resolver signatures.
ANY_TYPE_NAME = "object"


class Modifier(Enum):
    OPTIONAL = "OPTIONAL"
    LIST = "LIST"


class Binding(Enum):
    BOUND = "bound"
    DELEGATED = "delegated"
    ABSTRACT = "abstract"


# ── Types ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Type:
    """A single type occurrence: a named type under a modifier stack."""

    name: str
    graphql_name: str
    basic: bool = False
    modifiers: tuple[Modifier, ...] = ()
    implementors: tuple[Type, ...] = ()

    @property
    def is_polymorphic(self) -> bool:
        return bool(self.implementors)

    @property
    def is_root(self) -> bool:
        return self.name == ANY_TYPE_NAME

    def unwrapped(self) -> Type:
        """The same named type with every modifier removed."""
        if not self.modifiers:
            return self
        return replace(self, modifiers=())

    def wrap(self, *modifiers: Modifier) -> Type:
        """Return this type with *modifiers* added outside the existing ones."""
        return replace(self, modifiers=tuple(modifiers) + self.modifiers)

    def annotation(self) -> str:
        """Host annotation, e.g. ``list[int | None] | None``."""
        return _annotate(self.name, self.modifiers)


def _annotate(name: str, modifiers: tuple[Modifier, ...]) -> str:
    if not modifiers:
        return name
    inner = _annotate(name, modifiers[1:])
    if modifiers[0] is Modifier.OPTIONAL:
        return f"{inner} | None"
    return f"list[{inner}]"


# ── Objects ──────────────────────────────────────────────────────


@dataclass(frozen=True)
class Argument:
    name: str
    type: Type


@dataclass(frozen=True)
class Field:
    """One field of an object.

    At most one of ``var_name`` and ``method_name`` is set. With neither,
    the value comes from a resolver method the caller implements.
    """

    graphql_name: str
    type: Type
    var_name: str = ""
    method_name: str = ""
    args: tuple[Argument, ...] = ()
    no_err: bool = False

    @property
    def binding(self) -> Binding:
        if self.var_name:
            return Binding.BOUND
        if self.method_name:
            return Binding.DELEGATED
        return Binding.ABSTRACT


@dataclass(frozen=True)
class Object:
    name: str
    type: Type
    fields: tuple[Field, ...] = ()
    satisfies: tuple[str, ...] = ()

    def abstract_fields(self) -> list[Field]:
        return [f for f in self.fields if f.binding is Binding.ABSTRACT]


@dataclass(frozen=True)
class Import:
    alias: str
    path: str


@dataclass(frozen=True)
class SchemaModel:
    """Everything the extractor hands to the generator."""

    objects: tuple[Object, ...] = ()
    namespace: str = ""
    imports: tuple[Import, ...] = ()
    schema_raw: str = ""
