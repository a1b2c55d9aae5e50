"""Assemble the generated resolver module from a checked SchemaModel."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from gqlforge.code_nodes import Assign, Blank, Import, ImportFrom, Module, Stmt
from gqlforge.dispatcher import object_resolver
from gqlforge.encoders import BUILTIN_ENCODERS, encoder_def
from gqlforge.errors import Diagnostic
from gqlforge.interface import resolver_interface
from gqlforge.model import Import as ModelImport
from gqlforge.model import SchemaModel
from gqlforge.printer import PythonPrinter
from gqlforge.py_types import SCHEMA_CONSTANT, quote
from gqlforge.serializer import ValueSerializer
from gqlforge.tables import implementor_table, satisfies_table
from gqlforge.validate import check_model

logger = logging.getLogger(__name__)


def import_stmt(imp: ModelImport) -> Stmt:
    """``import p``, ``from a.b import c`` or ``import p as alias``."""
    if imp.alias == imp.path:
        return Import(imp.path)
    parent, _, last = imp.path.rpartition(".")
    if parent and last == imp.alias:
        return ImportFrom(parent, (imp.alias,))
    return Import(imp.path, imp.alias)


class Generator:
    """Emit one Python module for a model.

    The model is checked before anything is built; a GenerationError leaves
    no partial output behind.
    """

    def __init__(
        self, model: SchemaModel, *, scalars: Mapping[str, str] | None = None,
    ) -> None:
        self._model = model
        self._scalars = dict(scalars or {})
        self.warnings: list[Diagnostic] = []

    # ── Public API ─────────────────────────────────────────────

    def build(self) -> Module:
        """Check the model and build the emission tree."""
        self.warnings = check_model(self._model, self._scalars)
        model = self._model
        serializer = ValueSerializer(self._scalars)

        body: list[Stmt] = [ImportFrom("__future__", ("annotations",)), Blank()]
        body.append(Import("abc"))
        if model.imports:
            body.append(Blank())
            body.extend(import_stmt(imp) for imp in model.imports)
        body.extend([Blank(), Blank()])

        body.append(resolver_interface(model.objects))
        body.extend([Blank(), Blank()])

        if model.objects:
            body.extend(satisfies_table(obj) for obj in model.objects)
            body.extend([Blank(), Blank()])

        dispatchers = []
        for obj in model.objects:
            logger.debug(
                "dispatcher for %s (%d fields)", obj.type.graphql_name, len(obj.fields),
            )
            dispatchers.append(object_resolver(obj, serializer))

        # Dispatchers call these at run time; only the ones in use are emitted.
        for name in BUILTIN_ENCODERS:
            if name in serializer.encoders:
                body.extend([encoder_def(name), Blank(), Blank()])

        for fn in dispatchers:
            body.extend([fn, Blank(), Blank()])

        if serializer.polymorphic:
            for ty in serializer.polymorphic.values():
                logger.debug(
                    "implementor table for %s: %s", ty.graphql_name,
                    ", ".join(i.graphql_name for i in ty.implementors),
                )
                body.append(implementor_table(ty))
            body.append(Blank())

        body.append(Assign(SCHEMA_CONSTANT, quote(model.schema_raw)))
        return Module(body, docstring=self._header())

    def generate(self) -> str:
        """Generate the complete module source."""
        return PythonPrinter().format(self.build())

    def _header(self) -> str:
        header = "Code generated by gqlforge. DO NOT EDIT."
        if self._model.namespace:
            header += f"\n\nNamespace: {self._model.namespace}"
        return header


def generate(model: SchemaModel, *, scalars: Mapping[str, str] | None = None) -> str:
    """Generate the resolver module for *model*."""
    return Generator(model, scalars=scalars).generate()
