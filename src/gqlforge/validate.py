"""Generation preconditions on the resolved model.

A model that fails any of these cannot be turned into a well-formed module.
These are extractor contract violations, so generation stops before any text
is produced. Schema semantics (cycles, undefined types) are not checked.
"""

from __future__ import annotations

from collections.abc import Mapping

from gqlforge.errors import Diagnostic, GenerationError, Severity
from gqlforge.model import Binding, SchemaModel, Type
from gqlforge.py_types import (
    RESERVED_NAMES,
    dispatcher_name,
    implementors_name,
    is_identifier,
    resolver_method_name,
    satisfies_name,
    scalar_encoder,
    scalar_table,
)


class _ModelChecker:
    def __init__(self, scalars: Mapping[str, str]) -> None:
        self._scalars = scalars
        self.diagnostics: list[Diagnostic] = []

    def _error(self, code: str, message: str, location: str = "", notes: list[str] | None = None) -> None:
        self.diagnostics.append(
            Diagnostic(Severity.ERROR, code, message, location, notes or []),
        )

    def _warning(self, code: str, message: str, location: str = "") -> None:
        self.diagnostics.append(Diagnostic(Severity.WARNING, code, message, location))

    def _name(self, name: str, what: str, location: str) -> None:
        if not is_identifier(name):
            self._error(
                "G005", f"{what} '{name}' is not a valid Python identifier", location,
            )

    # ── Entry ──────────────────────────────────────────────────

    def check(self, model: SchemaModel) -> None:
        aliases: set[str] = set()
        for imp in model.imports:
            self._name(imp.alias, "import alias", imp.path)
            if imp.alias in aliases:
                self._error("G006", f"duplicate import alias '{imp.alias}'", imp.path)
            aliases.add(imp.alias)

        for obj in model.objects:
            self._name(obj.name, "object name", obj.name)
            self._name(obj.type.graphql_name, "object type name", obj.name)
            self._check_type(obj.type, obj.name, serialized=False)
            if not obj.fields:
                self._warning("W001", f"object '{obj.name}' has no fields", obj.name)

            keys: set[str] = set()
            for fld in obj.fields:
                loc = f"{obj.name}.{fld.graphql_name}"
                if fld.graphql_name in keys:
                    self._error(
                        "G003", f"duplicate field '{fld.graphql_name}' in '{obj.name}'", loc,
                    )
                keys.add(fld.graphql_name)

                if fld.var_name and fld.method_name:
                    self._error(
                        "G001", "field has both a variable binding and a method",
                        loc,
                        notes=[f"var_name={fld.var_name!r}", f"method_name={fld.method_name!r}"],
                    )
                if fld.binding is Binding.ABSTRACT:
                    self._name(resolver_method_name(obj, fld), "resolver method", loc)

                arg_names: set[str] = set()
                for arg in fld.args:
                    arg_loc = f"{loc}({arg.name})"
                    self._name(arg.name, "argument", arg_loc)
                    if arg.name in arg_names:
                        self._error("G003", f"duplicate argument '{arg.name}'", arg_loc)
                    arg_names.add(arg.name)
                    if arg.name in ("self", "ctx", "it"):
                        self._error(
                            "G005", f"argument '{arg.name}' shadows a resolver parameter",
                            arg_loc,
                        )
                    self._check_type(arg.type, arg_loc, serialized=False)

                self._check_type(fld.type, loc, serialized=True)

        self._check_generated_names(model)

    def _check_generated_names(self, model: SchemaModel) -> None:
        owners = {name: f"built-in '{name}'" for name in RESERVED_NAMES}

        def claim(name: str, owner: str, location: str) -> None:
            if name in owners:
                self._error(
                    "G008", f"generated name '{name}' for {owner} collides with "
                    f"{owners[name]}", location,
                )
            else:
                owners[name] = owner

        for alias in dict.fromkeys(imp.alias for imp in model.imports):
            claim(alias, f"import '{alias}'", alias)

        polymorphic: dict[str, Type] = {}
        for obj in model.objects:
            claim(dispatcher_name(obj.type), f"dispatcher of '{obj.name}'", obj.name)
            claim(satisfies_name(obj.type), f"satisfies table of '{obj.name}'", obj.name)
            for fld in obj.fields:
                base = fld.type.unwrapped()
                if base.implementors and not base.basic:
                    polymorphic.setdefault(base.graphql_name, base)
        for name, ty in polymorphic.items():
            claim(implementors_name(ty), f"implementor table of '{name}'", name)

        # Resolver methods share the Resolvers class namespace.
        methods: dict[str, str] = {}
        for obj in model.objects:
            for fld in obj.abstract_fields():
                method = resolver_method_name(obj, fld)
                loc = f"{obj.name}.{fld.graphql_name}"
                if method not in methods:
                    methods[method] = loc
                elif methods[method] != loc:
                    self._error(
                        "G008", f"resolver method '{method}' for '{loc}' collides "
                        f"with '{methods[method]}'", loc,
                    )

    def _check_type(self, ty: Type, location: str, *, serialized: bool) -> None:
        if ty.basic and ty.implementors:
            self._error(
                "G002", f"type '{ty.graphql_name}' is both a scalar and polymorphic",
                location,
            )
            return
        if ty.basic:
            if serialized and scalar_encoder(ty, self._scalars) is None:
                self._error(
                    "G004", f"no encoder for scalar '{ty.graphql_name}'", location,
                    notes=["add it to the [scalars] table in gqlforge.toml"],
                )
            return
        if ty.implementors:
            self._name(ty.graphql_name, "polymorphic type name", location)
        for impl in ty.implementors:
            if impl.basic or impl.modifiers or impl.implementors:
                self._error(
                    "G007",
                    f"implementor '{impl.graphql_name}' of '{ty.graphql_name}' "
                    "is not a concrete object type",
                    location,
                )
            self._name(impl.graphql_name, "implementor name", location)


def validate_model(
    model: SchemaModel, scalars: Mapping[str, str] | None = None,
) -> list[Diagnostic]:
    """Return every diagnostic for *model* without raising."""
    checker = _ModelChecker(scalar_table(scalars))
    checker.check(model)
    return checker.diagnostics


def check_model(
    model: SchemaModel, scalars: Mapping[str, str] | None = None,
) -> list[Diagnostic]:
    """Raise GenerationError on any error; return the remaining warnings."""
    diagnostics = validate_model(model, scalars)
    errors = [d for d in diagnostics if d.severity == Severity.ERROR]
    if errors:
        raise GenerationError(errors)
    return diagnostics
