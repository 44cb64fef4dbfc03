"""Resolve a requested module name into a destination file and identifier.

The resolver is pure apart from two read-only probes (does the kind folder
exist, does the target file exist), both routed through a
:class:`FileSystemProbe` so tests can substitute an in-memory layout. It never
creates directories or writes files; that is left to
:class:`kitecli.writer.FileWriter`.
"""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .config import ModuleKind, ProjectConfig
from .errors import ScaffoldIOError
from .naming import NameGrammar, pascal_case, validate_identifier
from .template import TemplateRenderer

__all__ = [
    "FileSystemProbe",
    "LocalFileSystemProbe",
    "ModuleRequest",
    "Outcome",
    "ResolvedModule",
    "render",
    "resolve",
]

LOGGER = logging.getLogger(__name__)

_SEPARATORS = frozenset({"/", os.sep} | ({os.altsep} if os.altsep else set()))


class FileSystemProbe(ABC):
    """Read-only view of the filesystem used during resolution."""

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        """Return whether ``path`` is an existing directory."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Return whether anything already occupies ``path``."""


class LocalFileSystemProbe(FileSystemProbe):
    """Probe backed by the local filesystem."""

    def is_dir(self, path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError as exc:
            raise ScaffoldIOError(f"failed to inspect {path}: {exc}", path=path) from exc

    def exists(self, path: Path) -> bool:
        try:
            return path.exists()
        except OSError as exc:
            raise ScaffoldIOError(f"failed to inspect {path}: {exc}", path=path) from exc


class Outcome(str, Enum):
    """Result of resolving a :class:`ModuleRequest`."""

    WOULD_CREATE = "would_create"
    ALREADY_EXISTS = "already_exists"
    INVALID_NAME = "invalid_name"


@dataclass(frozen=True, slots=True)
class ModuleRequest:
    """A user's request for a new module."""

    raw_name: str
    kind: ModuleKind


@dataclass(frozen=True, slots=True)
class ResolvedModule:
    """Where a requested module goes and whether it should be written.

    ``absolute_path`` is ``None`` only when the name was rejected before a
    path could be derived. ``reason`` explains an ``INVALID_NAME`` outcome.
    """

    kind: ModuleKind
    absolute_path: Path | None
    identifier: str
    outcome: Outcome
    reason: str | None = None

    @property
    def should_write(self) -> bool:
        return self.outcome is Outcome.WOULD_CREATE


def _is_path_like(raw_name: str) -> bool:
    return any(separator in raw_name for separator in _SEPARATORS)


def _is_within(path: Path, folder: Path) -> bool:
    try:
        path.relative_to(folder)
    except ValueError:
        return False
    return True


def _safe_parts(raw_name: str) -> list[str]:
    """Split ``raw_name`` into path segments with anchors, ``.`` and ``..`` removed."""

    normalized = raw_name
    for separator in _SEPARATORS:
        normalized = normalized.replace(separator, "/")
    return [part for part in normalized.split("/") if part not in {"", ".", ".."}]


def _target_path(raw_name: str, default_folder: Path, base_dir: Path) -> Path:
    if not _is_path_like(raw_name):
        return default_folder / raw_name

    candidate = Path(os.path.normpath(base_dir / raw_name))
    if _is_within(candidate, default_folder) and candidate != default_folder:
        return candidate

    # Re-root the fragment under the default folder; dropping ".." keeps the
    # target confined to it.
    return default_folder.joinpath(*_safe_parts(raw_name))


def _invalid(request: ModuleRequest, path: Path | None, reason: str) -> ResolvedModule:
    LOGGER.debug("rejected %s name %r: %s", request.kind.value, request.raw_name, reason)
    return ResolvedModule(
        kind=request.kind,
        absolute_path=path,
        identifier="",
        outcome=Outcome.INVALID_NAME,
        reason=reason,
    )


def resolve(
    request: ModuleRequest,
    config: ProjectConfig,
    *,
    probe: FileSystemProbe | None = None,
    grammar: NameGrammar = NameGrammar.EXTENDED,
) -> ResolvedModule:
    """Decide the destination, identifier and outcome for ``request``.

    Parameters
    ----------
    request:
        The requested module name and kind.
    config:
        Project layout. Not modified.
    probe:
        Filesystem probe; defaults to :class:`LocalFileSystemProbe`.
    grammar:
        Identifier grammar the derived name has to satisfy.

    Raises
    ------
    ScaffoldIOError
        When the probe cannot inspect the filesystem.
    """

    probe = probe or LocalFileSystemProbe()
    kind_config = config.kind(request.kind)

    if not request.raw_name.strip():
        return _invalid(request, None, "name can not be empty")

    kind_folder = config.folder_for(request.kind)
    default_folder = kind_folder if probe.is_dir(kind_folder) else config.root_dir
    LOGGER.debug("default folder for %s: %s", request.kind.value, default_folder)

    target = _target_path(request.raw_name, default_folder, config.base_dir)
    if target == default_folder:
        return _invalid(request, None, "name can not be empty")
    if not _is_within(target, default_folder):
        return _invalid(request, None, f"path escapes {default_folder}")

    basename = target.name
    extension = kind_config.extension
    if extension and basename.endswith(extension):
        basename = basename[: -len(extension)]
    else:
        target = target.with_name(f"{target.name}{kind_config.file_suffix}{extension}")

    reason = validate_identifier(basename, grammar)
    if reason is not None:
        return _invalid(request, target, reason)

    identifier = pascal_case(basename)
    outcome = Outcome.ALREADY_EXISTS if probe.exists(target) else Outcome.WOULD_CREATE
    LOGGER.debug("resolved %s %r to %s (%s)", request.kind.value, request.raw_name, target, outcome.value)
    return ResolvedModule(kind=request.kind, absolute_path=target, identifier=identifier, outcome=outcome)


def render(
    template: str,
    identifier: str,
    *,
    destination: str | Path | None = None,
    source_root: str | Path | None = None,
) -> str:
    """Render a module template for ``identifier``.

    Every ``$NAME$`` is replaced; quoted ``~/`` imports are rewritten relative
    to ``destination`` when both ``destination`` and ``source_root`` are given.
    """

    return TemplateRenderer().render_module(
        template,
        identifier,
        destination=destination,
        source_root=source_root,
    )
