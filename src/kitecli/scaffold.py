"""Project and module scaffolding helpers."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Iterable

from pydantic import ValidationError

from .config import CLI_CONFIG_FILE, TSCONFIG_FILE, ModuleKind, ProjectConfig, load_project_config
from .errors import MissingConfigurationError
from .naming import NameGrammar
from .resolver import FileSystemProbe, ModuleRequest, Outcome, ResolvedModule, render, resolve
from .schema import CliConfigFile, KindSettings, PackageManifest, TsConfig
from .template import TemplateRenderer
from .templates import (
    APP_TEMPLATE,
    ERRORS_TEMPLATE,
    KITE_CONFIG_TEMPLATE,
    TemplateProvider,
    default_tsconfig,
)
from .version import __version__
from .writer import FileWriter

__all__ = [
    "FRAMEWORK_PACKAGE",
    "InitReport",
    "InitSettings",
    "ModuleScaffolder",
    "ProjectInitializer",
    "ScaffoldResult",
]

LOGGER = logging.getLogger(__name__)

FRAMEWORK_PACKAGE = "kite-framework"
PACKAGE_MANIFEST = "package.json"
KITE_CONFIG_FILE = "kite.config.ts"
GREETING_CONTROLLER = "greeting"


def _display_path(path: Path, base: Path) -> str:
    try:
        return os.path.relpath(path, base).replace(os.sep, "/")
    except ValueError:
        return str(path)


@dataclass(frozen=True, slots=True)
class ScaffoldResult:
    """Outcome of a module request together with its status line."""

    resolved: ResolvedModule
    message: str
    written: Path | None = None

    @property
    def ok(self) -> bool:
        return self.resolved.outcome is not Outcome.INVALID_NAME

    @property
    def created(self) -> bool:
        return self.written is not None


class ModuleScaffolder:
    """Create controller, model and service modules inside a project."""

    def __init__(
        self,
        config: ProjectConfig,
        *,
        templates: TemplateProvider | None = None,
        probe: FileSystemProbe | None = None,
        writer: FileWriter | None = None,
        grammar: NameGrammar = NameGrammar.EXTENDED,
    ) -> None:
        self.config = config
        self.templates = templates or TemplateProvider.from_config(config)
        self.probe = probe
        self.writer = writer or FileWriter()
        self.grammar = grammar

    @classmethod
    def for_project(cls, project_dir: str | Path, **kwargs) -> "ModuleScaffolder":
        """Load the project's configuration and build a scaffolder for it."""

        return cls(load_project_config(project_dir), **kwargs)

    def plan(self, name: str, kind: ModuleKind) -> ResolvedModule:
        return resolve(ModuleRequest(raw_name=name, kind=kind), self.config, probe=self.probe, grammar=self.grammar)

    def create(self, name: str, kind: ModuleKind) -> ScaffoldResult:
        """Resolve ``name``, render its template and write it when appropriate."""

        resolved = self.plan(name, kind)
        written = None
        if resolved.should_write:
            text = render(
                self.templates.get(kind),
                resolved.identifier,
                destination=resolved.absolute_path,
                source_root=self.config.root_dir,
            )
            written = self.writer.write(resolved, text)
        return ScaffoldResult(resolved=resolved, message=self._status(name, resolved), written=written)

    def _status(self, name: str, resolved: ResolvedModule) -> str:
        kind = resolved.kind.value
        if resolved.outcome is Outcome.INVALID_NAME:
            return f'invalid {kind} name "{name}": {resolved.reason}'

        if resolved.absolute_path is None:
            return f'{kind} "{name}" could not be resolved'
        location = _display_path(resolved.absolute_path, self.config.base_dir)
        if resolved.outcome is Outcome.ALREADY_EXISTS:
            return f"{kind} file already exists: {location}"
        return f'{kind} "{resolved.identifier}" is successfully created: {location}'


@dataclass(slots=True)
class InitSettings:
    """Values used to initialize a Kite project.

    Attributes
    ----------
    source_dir:
        Source root written to ``compilerOptions.rootDir``.
    build_dir:
        Build output written to ``compilerOptions.outDir``.
    source_map:
        Whether the compiler emits source maps.
    hostname, port:
        Address the generated Kite configuration listens on.
    entry_point:
        File name of the application entry point inside :attr:`source_dir`.
    errors_file:
        File name of the error table inside :attr:`source_dir`.
    """

    source_dir: str = "./src"
    build_dir: str = "./dist"
    source_map: bool = True
    hostname: str = "127.0.0.1"
    port: int = 4000
    entry_point: str = "app.server.ts"
    errors_file: str = "errors.ts"

    def __post_init__(self) -> None:
        if not 0 < self.port < 65536:
            raise ValueError(f"port must be between 1 and 65535, got {self.port}")
        for attribute in ("source_dir", "entry_point", "errors_file"):
            if not getattr(self, attribute).strip():
                raise ValueError(f"{attribute} must not be empty")

    @property
    def source_folder(self) -> PurePosixPath:
        return PurePosixPath(os.path.normpath(self.source_dir).replace(os.sep, "/"))

    @property
    def errors_import(self) -> str:
        stem = self.errors_file[:-3] if self.errors_file.endswith(".ts") else self.errors_file
        return f"./{stem}"


@dataclass(slots=True)
class InitReport:
    """Files touched while initializing a project."""

    project_dir: Path
    created: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    greeting: ScaffoldResult | None = None
    framework_declared: bool = False

    def add_created(self, path: Path) -> None:
        self.created.append(path)

    def add_skipped(self, path: Path) -> None:
        self.skipped.append(path)

    @property
    def install_hint(self) -> str | None:
        if self.framework_declared:
            return None
        return f"npm install {FRAMEWORK_PACKAGE} --save"

    def lines(self) -> list[str]:
        output = [f"created {_display_path(path, self.project_dir)}" for path in self.created]
        output.extend(f"skipped {_display_path(path, self.project_dir)} (already exists)" for path in self.skipped)
        if self.greeting is not None:
            output.append(self.greeting.message)
        output.append("Kite project initialization finished")
        if self.install_hint:
            output.append(f"please run the following command to install dependencies: {self.install_hint}")
        return output


def _load_manifest(project_dir: Path) -> PackageManifest:
    path = project_dir / PACKAGE_MANIFEST
    message = f'{PACKAGE_MANIFEST} is not detected, please run "npm init" first'
    try:
        return PackageManifest.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise MissingConfigurationError(message, path=path) from exc
    except ValidationError as exc:
        raise MissingConfigurationError(f"{PACKAGE_MANIFEST} is not valid: {exc}", path=path) from exc


class ProjectInitializer:
    """Lay out a Kite project inside an existing npm package."""

    def __init__(self, renderer: TemplateRenderer | None = None, writer: FileWriter | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.writer = writer or FileWriter()

    def initialize(self, project_dir: str | Path, settings: InitSettings | None = None) -> InitReport:
        """Create the project files described by ``settings`` inside ``project_dir``.

        Existing files are left untouched and reported as skipped.

        Raises
        ------
        MissingConfigurationError
            When ``package.json`` is absent.
        """

        settings = settings or InitSettings()
        target_path = Path(project_dir).expanduser().resolve()
        manifest = _load_manifest(target_path)
        report = InitReport(project_dir=target_path, framework_declared=manifest.depends_on(FRAMEWORK_PACKAGE))

        source_path = target_path / settings.source_folder
        for kind in ModuleKind:
            (source_path / kind.folder_name).mkdir(parents=True, exist_ok=True)

        for destination, text in self._project_files(target_path, source_path, settings):
            if destination.exists():
                LOGGER.debug("%s already exists, leaving it untouched", destination)
                report.add_skipped(destination)
                continue
            self.writer.write_text(destination, text)
            report.add_created(destination)

        scaffolder = ModuleScaffolder.for_project(target_path, writer=self.writer)
        report.greeting = scaffolder.create(GREETING_CONTROLLER, ModuleKind.CONTROLLER)
        return report

    def _project_files(
        self, target_path: Path, source_path: Path, settings: InitSettings
    ) -> Iterable[tuple[Path, str]]:
        context = {
            "errors": settings.errors_import,
            "hostname": settings.hostname,
            "port": settings.port,
        }
        return [
            (target_path / TSCONFIG_FILE, self._tsconfig(settings)),
            (source_path / settings.errors_file, ERRORS_TEMPLATE),
            (source_path / KITE_CONFIG_FILE, self.renderer.render_string(KITE_CONFIG_TEMPLATE, context)),
            (source_path / settings.entry_point, APP_TEMPLATE),
            (target_path / CLI_CONFIG_FILE, self._cli_config(settings)),
        ]

    @staticmethod
    def _tsconfig(settings: InitSettings) -> str:
        document = default_tsconfig()
        options = document["compilerOptions"]
        options["rootDir"] = settings.source_dir
        options["outDir"] = settings.build_dir
        options["sourceMap"] = settings.source_map
        tsconfig = TsConfig.model_validate(document)
        return json.dumps(tsconfig.model_dump(mode="json", by_alias=True), indent=4) + "\n"

    @staticmethod
    def _cli_config(settings: InitSettings) -> str:
        templates = TemplateProvider()
        kinds = {
            kind.value: KindSettings(
                folder=str(settings.source_folder / kind.folder_name),
                template=templates.get(kind),
                file_suffix=kind.default_suffix,
            )
            for kind in ModuleKind
        }
        config = CliConfigFile(cli_version=__version__, **kinds)
        return config.model_dump_json(by_alias=True, indent=4) + "\n"
