"""Synthesize the abstract ``Resolvers`` class.

Every field without a static binding or delegated call needs a resolver
supplied by the application. The generated class declares one abstract
method per such field; the method returns the field value or raises.
"""

from __future__ import annotations

from collections.abc import Sequence

from gqlforge.code_nodes import (
    Blank,
    ClassDef,
    Docstring,
    ExprStmt,
    FunctionDef,
    Param,
    Stmt,
)
from gqlforge.model import Field, Object
from gqlforge.py_types import INTERFACE_NAME, resolver_method_name


def resolver_method(obj: Object, fld: Field) -> FunctionDef:
    params = [Param("self"), Param("ctx")]
    if not obj.type.is_root:
        params.append(Param("it", obj.type.annotation()))
    params.extend(Param(arg.name, arg.type.annotation()) for arg in fld.args)
    return FunctionDef(
        resolver_method_name(obj, fld),
        params,
        [ExprStmt("...")],
        returns=fld.type.annotation(),
        decorators=["abc.abstractmethod"],
    )


def resolver_interface(objects: Sequence[Object]) -> ClassDef:
    body: list[Stmt] = [
        Docstring("Field resolvers the application must implement."),
    ]
    for obj in objects:
        for fld in obj.abstract_fields():
            body.extend([Blank(), resolver_method(obj, fld)])
    return ClassDef(INTERFACE_NAME, ["abc.ABC"], body)
