from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from kitecli.cli import _port, main


def test_port_argument():
    assert _port("4000") == 4000

    with pytest.raises(argparse.ArgumentTypeError):
        _port("http")
    with pytest.raises(argparse.ArgumentTypeError):
        _port("0")


def test_no_command_prints_help(capsys: pytest.CaptureFixture[str]):
    assert main([]) == 0
    assert "usage: kite" in capsys.readouterr().out


def test_cli_init_creates_project(npm_project: Path, capsys: pytest.CaptureFixture[str]):
    exit_code = main(["init", "--directory", str(npm_project), "--port", "5000"])

    assert exit_code == 0
    assert "port: 5000," in (npm_project / "src" / "kite.config.ts").read_text(encoding="utf-8")
    assert (npm_project / "src" / "controllers" / "greeting.controller.ts").exists()
    assert "Kite project initialization finished" in capsys.readouterr().out


def test_cli_init_without_package_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["init", "-d", str(tmp_path)]) == 1
    assert "npm init" in capsys.readouterr().err


@pytest.mark.parametrize(
    "command, name, expected",
    [
        ("controller", "admin/user", "src/controllers/admin/user.controller.ts"),
        ("api", "health", "src/controllers/health.controller.ts"),
        ("model", "user-profile", "src/models/user-profile.model.ts"),
        ("service", "mailer", "src/services/mailer.service.ts"),
    ],
)
def test_cli_creates_modules(npm_project: Path, capsys: pytest.CaptureFixture[str], command, name, expected):
    main(["init", "-d", str(npm_project)])
    capsys.readouterr()

    assert main([command, name, "-d", str(npm_project)]) == 0
    assert (npm_project / expected).exists()
    assert f"is successfully created: {expected}" in capsys.readouterr().out


def test_cli_existing_module_is_not_an_error(npm_project: Path, capsys: pytest.CaptureFixture[str]):
    main(["init", "-d", str(npm_project)])
    capsys.readouterr()

    assert main(["controller", "greeting", "-d", str(npm_project)]) == 0
    assert "controller file already exists" in capsys.readouterr().out


def test_cli_invalid_name(npm_project: Path, capsys: pytest.CaptureFixture[str]):
    main(["init", "-d", str(npm_project)])
    capsys.readouterr()

    assert main(["model", "user-profile", "-d", str(npm_project), "--grammar", "simple"]) == 1
    assert 'invalid model name "user-profile"' in capsys.readouterr().out


def test_cli_requires_initialized_project(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    assert main(["service", "mailer", "-d", str(tmp_path)]) == 1
    assert "kite init" in capsys.readouterr().err
