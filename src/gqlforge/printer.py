"""Pretty-printer for the emission AST.

Walks ``code_nodes`` statements with isinstance dispatch and produces
Python source with four-space indentation. The printer knows nothing about
GraphQL; the same tree always prints to the same text.
"""

from __future__ import annotations

from gqlforge.code_nodes import (
    Assign,
    Blank,
    ClassDef,
    Comment,
    Continue,
    Docstring,
    ExprStmt,
    For,
    FunctionDef,
    If,
    Import,
    ImportFrom,
    Match,
    Module,
    Pass,
    Raise,
    Return,
    Stmt,
    Try,
)

_INDENT = "    "


def _docstring_literal(text: str, prefix: str) -> list[str]:
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    lines = text.splitlines() or [""]
    if len(lines) == 1:
        return [f'{prefix}"""{lines[0]}"""']
    out = [f'{prefix}"""{lines[0]}']
    for line in lines[1:]:
        out.append(f"{prefix}{line}" if line else "")
    out.append(f'{prefix}"""')
    return out


class PythonPrinter:
    """Format an emission ``Module`` to Python source text."""

    # ── Public API ─────────────────────────────────────────────

    def format(self, module: Module) -> str:
        lines: list[str] = []
        if module.docstring is not None:
            lines.extend(_docstring_literal(module.docstring, ""))
            lines.append("")
        for stmt in module.body:
            lines.extend(self._format_stmt(stmt, 0))
        while lines and not lines[-1]:
            lines.pop()
        return "\n".join(lines) + "\n"

    def format_block(self, body: list[Stmt], depth: int) -> list[str]:
        """Format a suite; an empty suite becomes ``pass``."""
        if not body:
            return [_INDENT * depth + "pass"]
        lines: list[str] = []
        for stmt in body:
            lines.extend(self._format_stmt(stmt, depth))
        return lines

    # ── Statement dispatch ─────────────────────────────────────

    def _format_stmt(self, stmt: Stmt, depth: int) -> list[str]:
        pad = _INDENT * depth

        if isinstance(stmt, Blank):
            return [""]
        if isinstance(stmt, Comment):
            return [f"{pad}# {stmt.text}" if stmt.text else f"{pad}#"]
        if isinstance(stmt, Docstring):
            return _docstring_literal(stmt.text, pad)
        if isinstance(stmt, Assign):
            return [f"{pad}{stmt.target} = {stmt.value}"]
        if isinstance(stmt, ExprStmt):
            return [f"{pad}{stmt.expr}"]
        if isinstance(stmt, Return):
            return [f"{pad}return {stmt.value}" if stmt.value else f"{pad}return"]
        if isinstance(stmt, Raise):
            return [f"{pad}raise {stmt.exc}"]
        if isinstance(stmt, Continue):
            return [f"{pad}continue"]
        if isinstance(stmt, Pass):
            return [f"{pad}pass"]
        if isinstance(stmt, Import):
            if stmt.alias:
                return [f"{pad}import {stmt.path} as {stmt.alias}"]
            return [f"{pad}import {stmt.path}"]
        if isinstance(stmt, ImportFrom):
            return [f"{pad}from {stmt.module} import {', '.join(stmt.names)}"]
        if isinstance(stmt, If):
            return self._format_if(stmt, depth)
        if isinstance(stmt, For):
            return [
                f"{pad}for {stmt.target} in {stmt.iter}:",
                *self.format_block(stmt.body, depth + 1),
            ]
        if isinstance(stmt, Match):
            return self._format_match(stmt, depth)
        if isinstance(stmt, Try):
            return self._format_try(stmt, depth)
        if isinstance(stmt, FunctionDef):
            return self._format_function(stmt, depth)
        if isinstance(stmt, ClassDef):
            return self._format_class(stmt, depth)
        raise TypeError(f"cannot print {type(stmt).__name__}")

    # ── Compound statements ────────────────────────────────────

    def _format_if(self, stmt: If, depth: int) -> list[str]:
        pad = _INDENT * depth
        lines = [f"{pad}if {stmt.test}:", *self.format_block(stmt.body, depth + 1)]
        orelse = stmt.orelse
        # Collapse `else: if ...` chains into elif
        while len(orelse) == 1 and isinstance(orelse[0], If):
            nested = orelse[0]
            lines.append(f"{pad}elif {nested.test}:")
            lines.extend(self.format_block(nested.body, depth + 1))
            orelse = nested.orelse
        if orelse:
            lines.append(f"{pad}else:")
            lines.extend(self.format_block(orelse, depth + 1))
        return lines

    def _format_match(self, stmt: Match, depth: int) -> list[str]:
        pad = _INDENT * depth
        lines = [f"{pad}match {stmt.subject}:"]
        for case in stmt.cases:
            lines.append(f"{pad}{_INDENT}case {case.pattern}:")
            lines.extend(self.format_block(case.body, depth + 2))
        return lines

    def _format_try(self, stmt: Try, depth: int) -> list[str]:
        pad = _INDENT * depth
        lines = [f"{pad}try:", *self.format_block(stmt.body, depth + 1)]
        for handler in stmt.handlers:
            clause = f"except {handler.exc_type}"
            if handler.name:
                clause += f" as {handler.name}"
            lines.append(f"{pad}{clause}:")
            lines.extend(self.format_block(handler.body, depth + 1))
        return lines

    def _format_function(self, fd: FunctionDef, depth: int) -> list[str]:
        pad = _INDENT * depth
        lines = [f"{pad}@{d}" for d in fd.decorators]
        params = ", ".join(
            f"{p.name}: {p.annotation}" if p.annotation else p.name
            for p in fd.params
        )
        sig = f"{pad}def {fd.name}({params})"
        if fd.returns:
            sig += f" -> {fd.returns}"
        lines.append(sig + ":")
        lines.extend(self.format_block(fd.body, depth + 1))
        return lines

    def _format_class(self, cd: ClassDef, depth: int) -> list[str]:
        pad = _INDENT * depth
        header = f"{pad}class {cd.name}"
        if cd.bases:
            header += f"({', '.join(cd.bases)})"
        return [header + ":", *self.format_block(cd.body, depth + 1)]
