"""Literal placeholder substitution and root-relative import rewriting."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

__all__ = [
    "NAME_PLACEHOLDER",
    "ROOT_MARKER",
    "TemplateRenderer",
    "TemplateRenderingError",
    "rewrite_root_imports",
]


NAME_PLACEHOLDER = "$NAME$"
ROOT_MARKER = "~/"

_PLACEHOLDER_PATTERN = re.compile(r"\$(?P<key>[A-Za-z_][A-Za-z0-9_]*)\$")
_ROOT_IMPORT_PATTERN = re.compile(
    r"(?P<quote>['\"`])" + re.escape(ROOT_MARKER) + r"(?P<target>[^'\"`\r\n]*)(?P=quote)"
)


class TemplateRenderingError(RuntimeError):
    """Raised when the renderer cannot resolve a placeholder."""


def _relative_specifier(target: Path, directory: Path) -> str:
    relative = os.path.relpath(target, directory).replace(os.sep, "/")
    if relative in {".", ".."} or relative.startswith("../"):
        return relative
    return f"./{relative}"


def rewrite_root_imports(text: str, destination: str | Path, source_root: str | Path) -> str:
    """Rewrite quoted ``~/`` module specifiers relative to ``destination``.

    ``~/services/user`` rendered into ``<root>/controllers/admin.ts`` becomes
    ``../services/user``. Only quoted specifiers are touched.
    """

    directory = Path(destination).parent
    root = Path(source_root)

    def substitute(match: re.Match[str]) -> str:
        quote = match.group("quote")
        specifier = _relative_specifier(root / match.group("target"), directory)
        return f"{quote}{specifier}{quote}"

    return _ROOT_IMPORT_PATTERN.sub(substitute, text)


@dataclass(slots=True)
class TemplateRenderer:
    """Render templates with literal ``$key$`` placeholders."""

    missing: str = "keep"

    def __post_init__(self) -> None:
        if self.missing not in {"keep", "empty", "error"}:
            raise ValueError("missing must be 'keep', 'empty', or 'error'")

    def render_string(
        self,
        template: str,
        context: Mapping[str, Any],
        *,
        missing: str | None = None,
    ) -> str:
        """Render ``template`` using ``context``.

        Parameters
        ----------
        template:
            The template string to evaluate.
        context:
            Mapping from placeholder key (without the surrounding ``$``) to
            its replacement.
        missing:
            Controls what happens when a placeholder has no value. The
            supported policies are ``"keep"`` (leave the placeholder
            unchanged), ``"empty"`` (replace with an empty string) and
            ``"error"`` (raise :class:`TemplateRenderingError`). Defaults to
            the renderer's policy.
        """

        policy = self.missing if missing is None else missing
        if policy not in {"keep", "empty", "error"}:
            raise ValueError("missing must be 'keep', 'empty', or 'error'")

        def substitute(match: re.Match[str]) -> str:
            key = match.group("key")
            if key in context:
                return str(context[key])
            if policy == "keep":
                return match.group(0)
            if policy == "empty":
                return ""
            raise TemplateRenderingError(f"missing value for '{key}'")

        return _PLACEHOLDER_PATTERN.sub(substitute, template)

    def render_module(
        self,
        template: str,
        identifier: str,
        *,
        destination: str | Path | None = None,
        source_root: str | Path | None = None,
    ) -> str:
        """Substitute :data:`NAME_PLACEHOLDER` and rewrite ``~/`` imports.

        Only ``$NAME$`` is replaced; any other ``$...$`` text is left alone.
        Imports are rewritten only when both ``destination`` and
        ``source_root`` are supplied.
        """

        rendered = template.replace(NAME_PLACEHOLDER, identifier)
        if destination is not None and source_root is not None:
            rendered = rewrite_root_imports(rendered, destination, source_root)
        return rendered
