"""Per-object field dispatcher generation.

Each object gets ``_<name>(ec, sel, it)``, which walks the collected fields
of a selection and produces a result map keyed by response alias. A field is
evaluated one of three ways depending on its binding:

* bound: a direct read of ``var_name``;
* delegated: a call of ``method_name`` with the field arguments;
* abstract: a call of the generated ``Resolvers`` method with the context,
  the receiver (unless the object is the root) and the field arguments.

Calls that may fail are wrapped so an exception is reported to ``ec.error``
and the field is skipped. An unknown field name, a missing required argument
and an argument of the wrong type are programming errors and raise out of
the dispatcher.
"""

from __future__ import annotations

from gqlforge.code_nodes import (
    Assign,
    Case,
    Continue,
    ExprStmt,
    For,
    FunctionDef,
    Handler,
    Match,
    Param,
    Raise,
    Return,
    Stmt,
    Try,
)
from gqlforge.model import Argument, Binding, Field, Modifier, Object
from gqlforge.py_types import (
    dispatcher_name,
    quote,
    resolver_method_name,
    satisfies_name,
)
from gqlforge.serializer import ValueSerializer

UNKNOWN_FIELD = 'RuntimeError(f"unknown field {field.name!r}")'


def object_resolver(obj: Object, serializer: ValueSerializer) -> FunctionDef:
    """Build the dispatcher function for one object."""
    cases = [
        Case(quote(fld.graphql_name), _field_case(obj, fld, serializer))
        for fld in obj.fields
    ]
    cases.append(Case("_", [Raise(UNKNOWN_FIELD)]))

    body: list[Stmt] = [
        Assign(
            "grouped_field_set",
            f"ec.collect_fields(sel, {satisfies_name(obj.type)}, {{}})",
        ),
        Assign("result_map", "{}"),
        For("field", "grouped_field_set", [Match("field.name", cases)]),
        Return("result_map"),
    ]
    params = [Param("ec"), Param("sel"), Param("it", obj.type.annotation())]
    return FunctionDef(dispatcher_name(obj.type), params, body, returns="dict")


def _field_case(obj: Object, fld: Field, serializer: ValueSerializer) -> list[Stmt]:
    stmts = evaluate_field(obj, fld, serializer)
    stmts.extend(serializer.serialize(fld.type, "res", "out"))
    stmts.append(Assign("result_map[field.alias]", "out"))
    return stmts


def evaluate_field(obj: Object, fld: Field, serializer: ValueSerializer) -> list[Stmt]:
    """Statements that bind the field's raw value to ``res``.

    Arguments are read and checked before the call. A missing or mistyped
    argument means the selection does not match the schema, so it raises
    out of the dispatcher rather than being reported as a field error.
    """
    if fld.binding is Binding.BOUND:
        return [Assign("res", fld.var_name)]

    stmts: list[Stmt] = []
    for arg in fld.args:
        stmts.extend(coerce_argument(arg, serializer))
    args = [argument_name(arg) for arg in fld.args]
    if fld.binding is Binding.DELEGATED:
        call = f"{fld.method_name}({', '.join(args)})"
    else:
        receiver = [] if obj.type.is_root else ["it"]
        call_args = ["ec.ctx", *receiver, *args]
        call = f"ec.resolvers.{resolver_method_name(obj, fld)}({', '.join(call_args)})"

    if fld.no_err:
        stmts.append(Assign("res", call))
        return stmts
    stmts.append(
        Try(
            [Assign("res", call)],
            [Handler("Exception", "err", [ExprStmt("ec.error(err)"), Continue()])],
        ),
    )
    return stmts


def argument_name(arg: Argument) -> str:
    return f"arg_{arg.name}"


def read_argument(arg: Argument) -> str:
    """Expression reading one argument from the collected field."""
    mods = arg.type.modifiers
    if mods and mods[0] is Modifier.OPTIONAL:
        return f"field.args.get({quote(arg.name)})"
    return f"field.args[{quote(arg.name)}]"


def coerce_argument(arg: Argument, serializer: ValueSerializer) -> list[Stmt]:
    """Read one argument and check it against its declared type."""
    return [
        Assign("raw", read_argument(arg)),
        *serializer.coerce(arg.type, "raw", "coerced"),
        Assign(argument_name(arg), "coerced"),
    ]
