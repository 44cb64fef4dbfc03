"""File-writer collaborator performing the writes the resolver only plans."""

from __future__ import annotations

import logging
from pathlib import Path

from .resolver import ResolvedModule

__all__ = ["FileWriter"]

LOGGER = logging.getLogger(__name__)


class FileWriter:
    """Create generated files, never overwriting existing ones.

    Files are opened in exclusive mode, so a file that appeared after the
    resolver's existence probe raises :class:`FileExistsError` rather than
    being clobbered. A partially written file is removed before the error
    propagates unchanged.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def write_text(self, path: str | Path, text: str) -> Path:
        destination = Path(path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("x", encoding=self.encoding) as handle:
            try:
                handle.write(text)
            except Exception:
                handle.close()
                destination.unlink(missing_ok=True)
                raise
        LOGGER.debug("wrote %s", destination)
        return destination

    def write(self, resolved: ResolvedModule, text: str) -> Path | None:
        """Write ``text`` for ``resolved`` when its outcome allows it.

        Returns the written path, or ``None`` when nothing was written.
        """

        if not resolved.should_write or resolved.absolute_path is None:
            LOGGER.debug("skipping write for %s (%s)", resolved.absolute_path, resolved.outcome.value)
            return None
        return self.write_text(resolved.absolute_path, text)
