"""Emission AST for generated Python source.

The generator builds these nodes and ``printer.PythonPrinter`` turns them
into text. Expressions are kept as plain strings; only statement structure
is modelled.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

# ── Simple statements ────────────────────────────────────────────


@dataclass(frozen=True)
class Assign:
    target: str
    value: str


@dataclass(frozen=True)
class ExprStmt:
    expr: str


@dataclass(frozen=True)
class Return:
    value: str | None = None


@dataclass(frozen=True)
class Raise:
    exc: str


@dataclass(frozen=True)
class Continue:
    pass


@dataclass(frozen=True)
class Pass:
    pass


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Docstring:
    text: str


@dataclass(frozen=True)
class Import:
    path: str
    alias: str | None = None


@dataclass(frozen=True)
class ImportFrom:
    module: str
    names: tuple[str, ...]


# ── Compound statements ──────────────────────────────────────────


@dataclass(frozen=True)
class If:
    test: str
    body: list[Stmt]
    orelse: list[Stmt] = field(default_factory=list)


@dataclass(frozen=True)
class For:
    target: str
    iter: str
    body: list[Stmt]


@dataclass(frozen=True)
class Case:
    pattern: str
    body: list[Stmt]


@dataclass(frozen=True)
class Match:
    subject: str
    cases: list[Case]


@dataclass(frozen=True)
class Handler:
    exc_type: str
    name: str | None
    body: list[Stmt]


@dataclass(frozen=True)
class Try:
    body: list[Stmt]
    handlers: list[Handler]


@dataclass(frozen=True)
class Param:
    name: str
    annotation: str | None = None


@dataclass(frozen=True)
class FunctionDef:
    name: str
    params: list[Param]
    body: list[Stmt]
    returns: str | None = None
    decorators: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ClassDef:
    name: str
    bases: list[str]
    body: list[Stmt]


Stmt = Union[
    Assign, ExprStmt, Return, Raise, Continue, Pass, Blank, Comment,
    Docstring, Import, ImportFrom, If, For, Match, Try, FunctionDef,
    ClassDef,
]


@dataclass(frozen=True)
class Module:
    body: list[Stmt]
    docstring: str | None = None
