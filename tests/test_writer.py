from __future__ import annotations

from pathlib import Path

import pytest

from kitecli.config import ModuleKind
from kitecli.resolver import Outcome, ResolvedModule
from kitecli.writer import FileWriter


def _resolved(path: Path, outcome: Outcome = Outcome.WOULD_CREATE) -> ResolvedModule:
    return ResolvedModule(kind=ModuleKind.SERVICE, absolute_path=path, identifier="Audit", outcome=outcome)


def test_write_creates_parent_directories(tmp_path: Path):
    target = tmp_path / "src" / "services" / "admin" / "audit.service.ts"

    written = FileWriter().write(_resolved(target), "export class AuditService {}\n")

    assert written == target
    assert target.read_text(encoding="utf-8") == "export class AuditService {}\n"


@pytest.mark.parametrize("outcome", [Outcome.ALREADY_EXISTS, Outcome.INVALID_NAME])
def test_write_skips_non_creating_outcomes(tmp_path: Path, outcome: Outcome):
    target = tmp_path / "audit.service.ts"

    assert FileWriter().write(_resolved(target, outcome), "text") is None
    assert not target.exists()


def test_write_refuses_to_overwrite(tmp_path: Path):
    target = tmp_path / "audit.service.ts"
    target.write_text("original", encoding="utf-8")

    with pytest.raises(FileExistsError):
        FileWriter().write(_resolved(target), "replacement")

    assert target.read_text(encoding="utf-8") == "original"


def test_write_removes_partial_file_on_failure(tmp_path: Path):
    target = tmp_path / "services" / "cafe.service.ts"

    with pytest.raises(UnicodeEncodeError):
        FileWriter(encoding="ascii").write(_resolved(target), "export const name = 'café';\n")

    assert not target.exists()
