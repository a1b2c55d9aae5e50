"""Compiler-style diagnostics for generation-time model problems."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


# ANSI color codes
_COLORS = {
    Severity.ERROR: "\033[1;31m",    # bold red
    Severity.WARNING: "\033[1;33m",  # bold yellow
    Severity.NOTE: "\033[1;36m",     # bold cyan
}
_BOLD = "\033[1m"
_BLUE = "\033[1;34m"
_RESET = "\033[0m"


@dataclass
class Diagnostic:
    """A single problem found in the model, located by a dotted path."""

    severity: Severity
    code: str
    message: str
    location: str = ""  # e.g. "Post.author" or "Post.author(first)"
    notes: list[str] = field(default_factory=list)


class DiagnosticRenderer:
    """Renders diagnostics as ``error[G001]: message`` blocks."""

    def __init__(self, *, color: bool = True) -> None:
        self.color = color

    def _c(self, code: str) -> str:
        return code if self.color else ""

    def render(self, diag: Diagnostic) -> str:
        lines: list[str] = []
        color = _COLORS[diag.severity]

        lines.append(
            f"{self._c(color)}{diag.severity.value}[{diag.code}]{self._c(_RESET)}"
            f"{self._c(_BOLD)}: {diag.message}{self._c(_RESET)}"
        )
        if diag.location:
            lines.append(f"  {self._c(_BLUE)}-->{self._c(_RESET)} {diag.location}")
        for note in diag.notes:
            lines.append(f"  {self._c(_BLUE)}={self._c(_RESET)} note: {note}")

        return "\n".join(lines)


class GenerationError(Exception):
    """The model violates a generation precondition; nothing was emitted."""

    def __init__(self, diagnostics: list[Diagnostic]) -> None:
        self.diagnostics = diagnostics
        messages = [d.message for d in diagnostics]
        super().__init__(f"{len(diagnostics)} error(s): {'; '.join(messages)}")
