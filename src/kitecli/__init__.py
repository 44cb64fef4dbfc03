"""Utilities for scaffolding Kite applications.

The package resolves requested controller, model and service names into
destination files and identifiers, renders small placeholder templates, and
lays out new projects. Everything is usable programmatically and via the
``kite`` command line interface.
"""

from __future__ import annotations

from .config import KindConfig, ModuleKind, ProjectConfig, load_project_config
from .errors import MissingConfigurationError, ScaffoldError, ScaffoldIOError
from .naming import NameGrammar, pascal_case, validate_identifier
from .resolver import (
    FileSystemProbe,
    LocalFileSystemProbe,
    ModuleRequest,
    Outcome,
    ResolvedModule,
    render,
    resolve,
)
from .scaffold import InitSettings, ModuleScaffolder, ProjectInitializer
from .template import TemplateRenderer, TemplateRenderingError
from .templates import TemplateProvider
from .version import __version__
from .writer import FileWriter

__all__ = [
    "FileSystemProbe",
    "FileWriter",
    "InitSettings",
    "KindConfig",
    "LocalFileSystemProbe",
    "MissingConfigurationError",
    "ModuleKind",
    "ModuleRequest",
    "ModuleScaffolder",
    "NameGrammar",
    "Outcome",
    "ProjectConfig",
    "ProjectInitializer",
    "ResolvedModule",
    "ScaffoldError",
    "ScaffoldIOError",
    "TemplateProvider",
    "TemplateRenderer",
    "TemplateRenderingError",
    "__version__",
    "load_project_config",
    "pascal_case",
    "render",
    "resolve",
    "validate_identifier",
]
