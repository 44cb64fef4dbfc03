from __future__ import annotations

from pathlib import Path

import pytest

from kitecli.template import TemplateRenderer, TemplateRenderingError, rewrite_root_imports


@pytest.fixture()
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


def test_render_string_substitutes_literal_placeholders(renderer: TemplateRenderer):
    template = "hostname: '$hostname$',\nport: $port$"
    rendered = renderer.render_string(template, {"hostname": "0.0.0.0", "port": 8080})
    assert rendered == "hostname: '0.0.0.0',\nport: 8080"


def test_render_string_ignores_template_literals(renderer: TemplateRenderer):
    template = "const greeting = `${name}`; // $NAME$"
    assert renderer.render_string(template, {"NAME": "Foo"}) == "const greeting = `${name}`; // Foo"


def test_render_string_missing_policy_keep(renderer: TemplateRenderer):
    template = "Hello $missing$"
    assert renderer.render_string(template, {}, missing="keep") == template


def test_render_string_missing_policy_empty(renderer: TemplateRenderer):
    assert renderer.render_string("Hello $missing$", {}, missing="empty") == "Hello "


def test_render_string_missing_policy_error(renderer: TemplateRenderer):
    with pytest.raises(TemplateRenderingError):
        renderer.render_string("$missing$", {}, missing="error")


def test_unknown_missing_policy_rejected(renderer: TemplateRenderer):
    with pytest.raises(ValueError):
        renderer.render_string("", {}, missing="ignore")
    with pytest.raises(ValueError):
        TemplateRenderer(missing="ignore")


def test_render_module_replaces_only_name(renderer: TemplateRenderer):
    template = "export class $NAME$Controller {}\n// $NAME$ uses $errors$\n"
    rendered = renderer.render_module(template, "Foo")
    assert rendered == "export class FooController {}\n// Foo uses $errors$\n"


@pytest.mark.parametrize(
    "destination, expected",
    [
        ("src/app.server.ts", "./errors"),
        ("src/controllers/greeting.controller.ts", "../errors"),
        ("src/controllers/admin/user.controller.ts", "../../errors"),
    ],
)
def test_rewrite_root_imports(tmp_path: Path, destination: str, expected: str):
    text = "import { errors } from '~/errors';\n"
    rewritten = rewrite_root_imports(text, tmp_path / destination, tmp_path / "src")
    assert rewritten == f"import {{ errors }} from '{expected}';\n"


def test_rewrite_root_imports_preserves_quotes_and_other_text(tmp_path: Path):
    text = 'import { UserService } from "~/services/user.service";\nconst home = "~ not an import";\n'
    rewritten = rewrite_root_imports(text, tmp_path / "src" / "controllers" / "a.ts", tmp_path / "src")
    assert rewritten == (
        'import { UserService } from "../services/user.service";\nconst home = "~ not an import";\n'
    )
