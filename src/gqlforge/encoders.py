"""Strict encoders for the built-in scalars.

A generated module carries its own copy of each built-in encoder it uses,
so it has no runtime dependency on gqlforge. An encoder returns its input
when the value already has the scalar's kind and raises ``TypeError``
otherwise. ``bool`` never passes as an Int, and Float accepts an int only by
widening it.
"""

from __future__ import annotations

from gqlforge.code_nodes import FunctionDef, If, Param, Raise, Return

# encoder name -> (scalar name, rejecting test on ``v``, returned value)
_BUILTINS: dict[str, tuple[str, str, str]] = {
    "_marshal_int": (
        "Int", "isinstance(v, bool) or not isinstance(v, int)", "v",
    ),
    "_marshal_float": (
        "Float", "isinstance(v, bool) or not isinstance(v, (int, float))", "float(v)",
    ),
    "_marshal_string": ("String", "not isinstance(v, str)", "v"),
    "_marshal_boolean": ("Boolean", "not isinstance(v, bool)", "v"),
    "_marshal_id": ("ID", "not isinstance(v, str)", "v"),
}

BUILTIN_ENCODERS: tuple[str, ...] = tuple(_BUILTINS)

DEFAULT_SCALARS: dict[str, str] = {
    scalar: name for name, (scalar, _, _) in _BUILTINS.items()
}


def is_builtin_encoder(expr: str) -> bool:
    return expr in _BUILTINS


def encoder_def(name: str) -> FunctionDef:
    """The generated definition of one built-in encoder."""
    scalar, rejects, value = _BUILTINS[name]
    error = f'TypeError(f"{scalar} cannot represent {{type(v).__name__}}")'
    return FunctionDef(name, [Param("v")], [If(rejects, [Raise(error)]), Return(value)])
