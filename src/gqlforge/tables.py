"""Static lookup tables emitted next to the dispatchers."""

from __future__ import annotations

from gqlforge.code_nodes import Assign
from gqlforge.model import Object, Type
from gqlforge.py_types import (
    dispatcher_name,
    implementors_name,
    quote,
    satisfies_name,
)


def satisfies_names(obj: Object) -> list[str]:
    """The object's own schema name, then everything it also satisfies."""
    names = [obj.type.graphql_name]
    for name in obj.satisfies:
        if name not in names:
            names.append(name)
    return names


def satisfies_table(obj: Object) -> Assign:
    items = ", ".join(quote(n) for n in satisfies_names(obj))
    return Assign(satisfies_name(obj.type), f"[{items}]")


def implementor_table(ty: Type) -> Assign:
    """Map each implementor class of a polymorphic type to its dispatcher."""
    items = ", ".join(
        f"{impl.name}: {dispatcher_name(impl)}" for impl in ty.implementors
    )
    return Assign(implementors_name(ty), f"{{{items}}}")
