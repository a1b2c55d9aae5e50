"""Type-directed serialization code synthesis.

Lowers a type occurrence plus a value reference into statements that build
the wire value. Modifiers are peeled outer to inner and independently of the
named type, so one procedure covers ``T``, ``[T]``, ``T?``, ``[T]?``,
``[T?]`` and any deeper stack.

The same peeling checks incoming argument values against their declared
type (``coerce``); only the handling of the named type differs.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from gqlforge.code_nodes import Assign, ExprStmt, For, If, Raise, Stmt
from gqlforge.encoders import is_builtin_encoder
from gqlforge.errors import Diagnostic, GenerationError, Severity
from gqlforge.model import Modifier, Type
from gqlforge.py_types import (
    dispatcher_name,
    implementors_name,
    scalar_encoder,
    scalar_table,
)

_Base = Callable[[Type, str, str], list[Stmt]]


class ValueSerializer:
    """Build serialization statements for field values.

    ``polymorphic`` records every interface/union type that needed a
    dispatch table, keyed by schema name in first-use order. The caller
    emits those tables once the dispatchers they point at exist.
    ``encoders`` records the built-in encoders the statements call, so the
    caller can emit their definitions.
    """

    def __init__(
        self,
        scalars: Mapping[str, str] | None = None,
        *,
        selections: str = "field.selections",
    ) -> None:
        self._scalars = scalar_table(scalars)
        self._selections = selections
        self.polymorphic: dict[str, Type] = {}
        self.encoders: dict[str, None] = {}

    def serialize(self, ty: Type, value: str, result: str = "out") -> list[Stmt]:
        """Statements that leave the serialized form of *value* in *result*."""
        return self._lower(ty, value, result, result, ty.modifiers, 0, self._serialize_base)

    def coerce(self, ty: Type, value: str, result: str = "coerced") -> list[Stmt]:
        """Statements that check an argument value against *ty* into *result*.

        Built-in scalars go through their strict encoder; any other named
        type must be an instance of its host class. A mismatch raises
        ``TypeError``.
        """
        return self._lower(ty, value, result, result, ty.modifiers, 0, self._coerce_base)

    def _lower(
        self,
        ty: Type,
        value: str,
        result: str,
        root: str,
        remaining: tuple[Modifier, ...],
        depth: int,
        base: _Base,
    ) -> list[Stmt]:
        if not remaining:
            return base(ty, value, result)

        mod, rest = remaining[0], remaining[1:]
        nested = f"{root}{depth + 1}"

        if mod is Modifier.OPTIONAL:
            return [
                Assign(result, "None"),
                If(f"{value} is not None", [
                    *self._lower(ty, value, nested, root, rest, depth + 1, base),
                    Assign(result, nested),
                ]),
            ]

        item = f"val{depth + 1}"
        return [
            Assign(result, "[]"),
            For(item, value, [
                *self._lower(ty, item, nested, root, rest, depth + 1, base),
                ExprStmt(f"{result}.append({nested})"),
            ]),
        ]

    def _encoder(self, ty: Type) -> str | None:
        encoder = scalar_encoder(ty, self._scalars)
        if encoder is not None and is_builtin_encoder(encoder):
            self.encoders.setdefault(encoder)
        return encoder

    # ── Named types ────────────────────────────────────────────

    def _serialize_base(self, ty: Type, value: str, result: str) -> list[Stmt]:
        if ty.basic:
            encoder = self._encoder(ty)
            if encoder is None:
                raise GenerationError([Diagnostic(
                    Severity.ERROR, "G004",
                    f"no encoder for scalar '{ty.graphql_name}'",
                )])
            return [Assign(result, f"{encoder}({value})")]

        if ty.is_polymorphic:
            self.polymorphic.setdefault(ty.graphql_name, ty.unwrapped())
            unexpected = (
                'TypeError(f"unexpected type {type(' + value + ').__name__}")'
            )
            return [
                Assign(result, "None"),
                If(f"{value} is not None", [
                    Assign("dispatch", f"{implementors_name(ty)}.get(type({value}))"),
                    If("dispatch is None", [Raise(unexpected)]),
                    Assign(result, f"dispatch(ec, {self._selections}, {value})"),
                ]),
            ]

        return [
            Assign(result, f"{dispatcher_name(ty)}(ec, {self._selections}, {value})"),
        ]

    def _coerce_base(self, ty: Type, value: str, result: str) -> list[Stmt]:
        if ty.basic:
            encoder = self._encoder(ty)
            if encoder is not None and is_builtin_encoder(encoder):
                return [Assign(result, f"{encoder}({value})")]

        # Custom scalars and input objects: the host class is the contract.
        mismatch = (
            f'TypeError(f"expected {ty.graphql_name}, got '
            '{type(' + value + ').__name__}")'
        )
        return [
            If(f"not isinstance({value}, {ty.name})", [Raise(mismatch)]),
            Assign(result, value),
        ]


def serialize_value(
    ty: Type,
    value: str,
    result: str = "out",
    scalars: Mapping[str, str] | None = None,
) -> list[Stmt]:
    """Serialize one value reference without keeping polymorphic bookkeeping."""
    return ValueSerializer(scalars).serialize(ty, value, result)
