"""TOML config loading for gqlforge.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from gqlforge.model import Import, SchemaModel

CONFIG_NAME = "gqlforge.toml"


@dataclass
class GenerateConfig:
    model: str = "model.json"
    output: str = "resolvers_gen.py"
    namespace: str = ""


@dataclass
class ForgeConfig:
    generate: GenerateConfig = field(default_factory=GenerateConfig)
    imports: list[Import] = field(default_factory=list)
    scalars: dict[str, str] = field(default_factory=dict)

    def apply(self, model: SchemaModel) -> SchemaModel:
        """Layer the configured namespace and imports over an extracted model."""
        namespace = self.generate.namespace or model.namespace
        return replace(
            model,
            namespace=namespace,
            imports=model.imports + tuple(self.imports),
        )


def find_config(start_path: Path | None = None) -> Path:
    """Walk up directories to find gqlforge.toml. Raises FileNotFoundError."""
    path = (start_path or Path.cwd()).resolve()
    if path.is_file():
        path = path.parent
    while True:
        candidate = path / CONFIG_NAME
        if candidate.exists():
            return candidate
        parent = path.parent
        if parent == path:
            raise FileNotFoundError(f"No {CONFIG_NAME} found in any parent directory")
        path = parent


def load_config(path: Path) -> ForgeConfig:
    """Parse a gqlforge.toml file into a ForgeConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = ForgeConfig()

    if "generate" in data:
        gen = data["generate"]
        config.generate = GenerateConfig(
            model=gen.get("model", "model.json"),
            output=gen.get("output", "resolvers_gen.py"),
            namespace=gen.get("namespace", ""),
        )

    # TOML tables keep document order, which is the emitted import order
    if "imports" in data:
        config.imports = [Import(alias, path) for alias, path in data["imports"].items()]

    if "scalars" in data:
        config.scalars = dict(data["scalars"])

    return config
