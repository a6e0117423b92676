"""Tests for formvalidate CLI commands."""

import pytest
import yaml
from click.testing import CliRunner

from formvalidate.cli.main import cli
from formvalidate.validation import CheckRegistry


@pytest.fixture(autouse=True)
def clean_registry():
    CheckRegistry.clear()
    yield
    CheckRegistry.clear()


@pytest.fixture
def runner():
    return CliRunner()


def write_form(tmp_path, data, name="form.yaml"):
    path = tmp_path / name
    path.write_text(yaml.dump(data))
    return path


@pytest.fixture
def invalid_form(tmp_path):
    return write_form(tmp_path, {
        "form": "signup",
        "fields": [
            {"name": "username", "type": "text", "value": "jane", "minLength": 3},
            {"name": "email", "type": "email", "value": "not-an-email"},
            {"name": "phone", "type": "phoneNL", "value": "123"},
        ],
    })


@pytest.fixture
def valid_form(tmp_path):
    return write_form(tmp_path, {
        "form": "contact",
        "fields": [
            {"name": "email", "type": "email", "value": "jane@example.com"},
            {"name": "terms", "type": "checkbox", "options": ["yes"], "checked": "yes"},
        ],
    })


class TestCheck:
    def test_invalid_form_is_rejected(self, runner, invalid_form):
        result = runner.invoke(cli, ["check", str(invalid_form)])
        assert result.exit_code == 1
        assert "Form 'signup' (3 fields, trigger: submit)" in result.output
        assert "✓ username [text] valid" in result.output
        assert "✗ email [email] invalid: This is not a (correct) email address" in result.output
        assert "2 invalid field(s); submission rejected" in result.output

    def test_valid_form(self, runner, valid_form):
        result = runner.invoke(cli, ["check", str(valid_form)])
        assert result.exit_code == 0
        assert "All fields are valid." in result.output

    def test_change_trigger_holds_back_phone(self, runner, invalid_form):
        result = runner.invoke(cli, ["check", str(invalid_form), "--trigger", "change"])
        assert result.exit_code == 1
        assert "· phone [phoneNL] neutral" in result.output
        assert "1 invalid field(s)" in result.output
        assert "submission rejected" not in result.output

    def test_blur_trigger_surfaces_phone(self, runner, invalid_form):
        result = runner.invoke(cli, ["check", str(invalid_form), "--trigger", "blur"])
        assert result.exit_code == 1
        assert "✗ phone [phoneNL] invalid: This is not a valid Dutch phone number" in result.output

    def test_summary(self, runner, invalid_form):
        result = runner.invoke(cli, ["check", str(invalid_form), "--summary"])
        assert '<div class="flt-form__messages">' in result.output
        assert (
            '<li><p class="flt-form__message-error">'
            "This is not a valid Dutch phone number</p></li>"
        ) in result.output

    def test_no_errors_surfaced(self, runner, tmp_path):
        path = write_form(tmp_path, {
            "form": "late",
            "fields": [{"name": "phone", "type": "phoneNL", "value": "123"}],
        })
        result = runner.invoke(cli, ["check", str(path), "--trigger", "change"])
        assert result.exit_code == 0
        assert "No errors surfaced yet." in result.output

    def test_unsupported_type(self, runner, tmp_path):
        path = write_form(tmp_path, {
            "form": "dates",
            "fields": [{"name": "birthday", "type": "date", "value": "2024-01-01"}],
        })
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 2
        assert "unsupported type 'date'" in result.output

    def test_fallback_type_from_settings(self, runner, tmp_path):
        path = write_form(tmp_path, {
            "form": "dates",
            "settings": {"fallbackType": "text"},
            "fields": [{"name": "birthday", "type": "date", "value": "2024-01-01"}],
        })
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 0
        assert "✓ birthday [text] valid" in result.output

    def test_not_a_form(self, runner, tmp_path):
        path = write_form(tmp_path, {"something": "else"})
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 2
        assert "'form' is a required property" in result.output
        assert "is not a valid form definition" in result.output

    def test_field_without_name(self, runner, tmp_path):
        path = tmp_path / "form.yaml"
        path.write_text("form: f\nfields:\n  - type: text\n")
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 2
        assert "'name' is a required property" in result.output

    def test_yaml_parse_error(self, runner, tmp_path):
        path = tmp_path / "form.yaml"
        path.write_text("form: [unclosed\n")
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 2
        assert "YAML parse error" in result.output

    def test_duplicate_field(self, runner, tmp_path):
        path = write_form(tmp_path, {
            "form": "dup",
            "fields": [{"name": "a", "type": "text"}, {"name": "a", "type": "text"}],
        })
        result = runner.invoke(cli, ["check", str(path)])
        assert result.exit_code == 2
        assert "declares field 'a' twice" in result.output


class TestLint:
    def test_valid_files(self, runner, invalid_form, valid_form):
        result = runner.invoke(cli, ["lint", str(invalid_form), str(valid_form)])
        assert result.exit_code == 0
        assert "2 form definition(s) valid." in result.output

    def test_schema_errors(self, runner, tmp_path):
        path = write_form(tmp_path, {
            "form": "bad",
            "fields": [{"name": "a", "minLength": "three"}],
        })
        result = runner.invoke(cli, ["lint", str(path)])
        assert result.exit_code == 1
        assert "fields[0]/minLength" in result.output
        assert "1 schema error(s) found" in result.output


class TestTypes:
    def test_lists_builtins(self, runner):
        result = runner.invoke(cli, ["types"])
        assert result.exit_code == 0
        for name in ["checkbox", "email", "number", "phoneNL", "postalcodeNL", "radio", "text"]:
            assert f"  {name}" in result.output
        assert "Checks:" in result.output
        assert "  length" in result.output


class TestHelp:
    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "check" in result.output
        assert "lint" in result.output
        assert "types" in result.output
