"""Project layout values consumed by the resolver and the loader producing them."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pydantic import ValidationError

from .errors import MissingConfigurationError
from .schema import CliConfigFile, KindSettings, TsConfig

__all__ = [
    "CLI_CONFIG_FILE",
    "TSCONFIG_FILE",
    "KindConfig",
    "ModuleKind",
    "ProjectConfig",
    "load_project_config",
    "load_tsconfig",
]

LOGGER = logging.getLogger(__name__)

CLI_CONFIG_FILE = "kite-cli.config.json"
TSCONFIG_FILE = "tsconfig.json"


class ModuleKind(str, Enum):
    """Kinds of module the scaffolder knows how to generate."""

    CONTROLLER = "controller"
    MODEL = "model"
    SERVICE = "service"

    @property
    def folder_name(self) -> str:
        """Conventional folder holding modules of this kind."""

        return f"{self.value}s"

    @property
    def default_suffix(self) -> str:
        return f".{self.value}"


@dataclass(frozen=True, slots=True)
class KindConfig:
    """Where and how modules of one kind are generated.

    Attributes
    ----------
    folder:
        Destination folder. Relative folders are interpreted against the
        project directory.
    template:
        Template text containing ``$NAME$`` placeholders. A blank template
        selects the built-in template for the kind.
    file_suffix:
        Inserted between the module name and :attr:`extension`, for example
        ``.controller``. May be empty.
    extension:
        Source file extension, including the leading dot.
    """

    folder: Path
    template: str = ""
    file_suffix: str = ""
    extension: str = ".ts"


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    """Immutable snapshot of a project's folder layout.

    Attributes
    ----------
    root_dir:
        Absolute path of the source root (``compilerOptions.rootDir``).
    kinds:
        Per-kind configuration, containing at least the three built-in kinds.
    project_dir:
        Directory holding ``package.json`` and the CLI configuration file.
        Relative kind folders and path-like module names are resolved against
        it. Defaults to :attr:`root_dir`.
    """

    root_dir: Path
    kinds: Mapping[ModuleKind, KindConfig]
    project_dir: Path | None = None
    cli_version: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        missing = [kind.value for kind in ModuleKind if kind not in self.kinds]
        if missing:
            raise ValueError(f"project configuration is missing kinds: {', '.join(missing)}")
        object.__setattr__(self, "kinds", MappingProxyType(dict(self.kinds)))

    @property
    def base_dir(self) -> Path:
        return self.project_dir if self.project_dir is not None else self.root_dir

    def kind(self, kind: ModuleKind) -> KindConfig:
        return self.kinds[kind]

    def folder_for(self, kind: ModuleKind) -> Path:
        """Return the absolute destination folder configured for ``kind``."""

        folder = self.kinds[kind].folder
        if folder.is_absolute():
            return Path(os.path.normpath(folder))
        return Path(os.path.normpath(self.base_dir / folder))

    @classmethod
    def default(cls, project_dir: str | Path, source_dir: str = "src") -> "ProjectConfig":
        """Build the conventional layout: ``<source_dir>/controllers`` and friends."""

        base = Path(project_dir).expanduser().resolve()
        kinds = {
            kind: KindConfig(
                folder=Path(source_dir) / kind.folder_name,
                file_suffix=kind.default_suffix,
            )
            for kind in ModuleKind
        }
        return cls(
            root_dir=Path(os.path.normpath(base / source_dir)),
            kinds=kinds,
            project_dir=base,
        )


def _kind_from_settings(kind: ModuleKind, settings: KindSettings) -> KindConfig:
    suffix = kind.default_suffix if settings.file_suffix is None else settings.file_suffix
    return KindConfig(folder=Path(settings.folder), template=settings.template, file_suffix=suffix)


def load_tsconfig(project_dir: str | Path) -> TsConfig:
    """Read ``tsconfig.json`` from ``project_dir``, falling back to defaults when absent."""

    path = Path(project_dir) / TSCONFIG_FILE
    if not path.is_file():
        LOGGER.debug("no %s in %s, using default compiler options", TSCONFIG_FILE, project_dir)
        return TsConfig()

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MissingConfigurationError(f'failed to read "{TSCONFIG_FILE}": {exc}', path=path) from exc

    try:
        return TsConfig.model_validate_json(raw)
    except ValidationError as exc:
        raise MissingConfigurationError(f'"{TSCONFIG_FILE}" is not valid: {exc}', path=path) from exc


def load_project_config(project_dir: str | Path) -> ProjectConfig:
    """Load the :class:`ProjectConfig` for the project rooted at ``project_dir``.

    Raises
    ------
    MissingConfigurationError
        When ``kite-cli.config.json`` is absent, unreadable or malformed.
    """

    base = Path(project_dir).expanduser().resolve()
    config_path = base / CLI_CONFIG_FILE

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MissingConfigurationError(
            f'failed to load "{CLI_CONFIG_FILE}", please run "kite init" to initialize your project first',
            path=config_path,
        ) from exc

    try:
        settings = CliConfigFile.model_validate_json(raw)
    except ValidationError as exc:
        raise MissingConfigurationError(f'"{CLI_CONFIG_FILE}" is not valid: {exc}', path=config_path) from exc

    tsconfig = load_tsconfig(base)
    root_dir = Path(os.path.normpath(base / tsconfig.compiler_options.root_dir))
    kinds = {kind: _kind_from_settings(kind, getattr(settings, kind.value)) for kind in ModuleKind}

    LOGGER.debug("loaded %s (cli version %s), source root %s", config_path, settings.cli_version, root_dir)
    return ProjectConfig(root_dir=root_dir, kinds=kinds, project_dir=base, cli_version=settings.cli_version)
