"""
Configuration objects for a build invocation
"""

import shlex
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from libforge_core.constants import DEFAULT_COMPILER
from libforge_core.exceptions import ConfigurationError


@dataclass(frozen=True)
class AssetGlob:
    """
    Asset copy spec: files matching ``glob`` under ``input`` are copied to
    ``<outputPath>/<output>``, keeping their path relative to ``input``.
    """
    glob: str
    input: str
    output: str
    ignore: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AssetGlob":
        missing = [key for key in ("glob", "input", "output") if key not in data]
        if missing:
            raise ConfigurationError(f"Asset spec {data} is missing required keys: {missing}")
        return cls(
            glob=data["glob"],
            input=data["input"],
            output=data["output"],
            ignore=tuple(data.get("ignore") or ()),
        )


AssetSpec = Union[str, AssetGlob]


@dataclass(frozen=True)
class BuildOptions:
    """
    Options for building one project.

    Constructed once per invocation from the project's build target options
    (plus command-line overrides) and read-only afterwards. Paths are relative
    to the workspace root.
    """
    project: str  # Name of the project being built
    ts_config: Optional[str] = None  # Compiler config (tsconfig) path
    main: Optional[str] = None  # Entry file, e.g. libs/mylib/src/index.ts
    package_json: Optional[str] = None  # Source package descriptor
    output_path: Optional[str] = None  # Defaults to <dist-root>/<project-root>
    watch: bool = False  # Keep the compiler running and recompile on change
    source_map: bool = False
    with_deps: bool = False  # Build buildable library dependencies first
    assets: tuple[AssetSpec, ...] = ()
    compiler: tuple[str, ...] = DEFAULT_COMPILER  # Compiler command line prefix

    @classmethod
    def from_dict(cls, project: str, options: dict[str, Any]) -> "BuildOptions":
        """
        Create BuildOptions from raw workspace.json (camelCase) options.

        Args:
            project: Name of the project being built
            options: Raw build target options merged with any overrides

        Raises:
            ConfigurationError: If an option has the wrong shape
        """
        assets = []
        for asset in options.get("assets") or []:
            if isinstance(asset, str):
                assets.append(asset)
            elif isinstance(asset, dict):
                assets.append(AssetGlob.from_dict(asset))
            else:
                raise ConfigurationError(f"Asset spec must be a glob string or an object, got {asset!r}")

        compiler = options.get("compiler") or DEFAULT_COMPILER
        if isinstance(compiler, str):
            compiler = shlex.split(compiler)

        return cls(
            project=project,
            ts_config=options.get("tsConfig"),
            main=options.get("main"),
            package_json=options.get("packageJson"),
            output_path=options.get("outputPath"),
            watch=bool(options.get("watch", False)),
            source_map=bool(options.get("sourceMap", False)),
            with_deps=bool(options.get("withDeps", False)),
            assets=tuple(assets),
            compiler=tuple(compiler),
        )


@dataclass
class BuildOverrides:
    """
    Command-line overrides applied on top of the target options of the
    top-level project. Unset (None) fields keep the workspace value.
    """
    watch: Optional[bool] = None
    source_map: Optional[bool] = None
    with_deps: Optional[bool] = None
    output_path: Optional[str] = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_options(self) -> dict[str, Any]:
        """Overrides as raw camelCase options."""
        options = dict(self.extra)
        for key, value in (
            ("watch", self.watch),
            ("sourceMap", self.source_map),
            ("withDeps", self.with_deps),
            ("outputPath", self.output_path),
        ):
            if value is not None:
                options[key] = value
        return options
