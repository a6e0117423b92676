"""
Tests for formvalidate.forms

Covers:
  - FormDefinitionLoader   — YAML form definitions
  - validate_form_file()   — JSON Schema linting
  - HeadlessRenderer / StaticField
  - FormSettings.from_dict / from_env
"""
from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from formvalidate.forms import (
    FormDefinitionLoader,
    HeadlessRenderer,
    StaticField,
)
from formvalidate.forms.schema import SchemaIssue, validate_form_file
from formvalidate.validation import FormSettings, RenderedMessage


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _write_yaml(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.dump(data))
    return path


SIGNUP = {
    "form": "signup",
    "settings": {"errorType": "generic", "debug": True},
    "fields": [
        {"name": "username", "type": "text", "value": "ab", "minLength": 3, "maxLength": 12},
        {"name": "email", "type": "email", "label": "E-mail", "value": "a@b.co"},
        {"name": "size", "type": "radio", "options": ["s", "m"], "checked": "m"},
        {"name": "terms", "type": "checkbox", "options": ["yes"], "checked": []},
    ],
}


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


class TestFormDefinitionLoader:
    def test_load_file(self, tmp_path):
        path = _write_yaml(tmp_path / "signup.yaml", SIGNUP)
        form = FormDefinitionLoader(path).load_file(path)

        assert form is not None
        assert form.name == "signup"
        assert form.source == path
        assert [f.name for f in form.fields] == ["username", "email", "size", "terms"]
        assert form.settings.debug is True

    def test_length_bounds_become_attributes(self, tmp_path):
        path = _write_yaml(tmp_path / "signup.yaml", SIGNUP)
        form = FormDefinitionLoader(path).load_file(path)

        username = form.get_field("username")
        assert username.attributes == {"minlength": 3, "maxlength": 12}
        assert username.value == "ab"

    def test_checked_string_becomes_list(self, tmp_path):
        path = _write_yaml(tmp_path / "signup.yaml", SIGNUP)
        form = FormDefinitionLoader(path).load_file(path)

        assert form.get_field("size").checked == ["m"]
        assert form.get_field("terms").checked == []

    def test_type_defaults_to_text(self, tmp_path):
        path = _write_yaml(tmp_path / "f.yaml", {"form": "f", "fields": [{"name": "note"}]})
        form = FormDefinitionLoader(path).load_file(path)
        assert form.fields[0].type == "text"

    def test_load_all_directory(self, tmp_path):
        _write_yaml(tmp_path / "signup.yaml", SIGNUP)
        _write_yaml(tmp_path / "contact.yaml", {"form": "contact", "fields": []})
        _write_yaml(tmp_path / "other.yaml", {"not": "a form"})

        loader = FormDefinitionLoader(tmp_path)
        loader.load_all()

        assert sorted(loader.list_forms()) == ["contact", "signup"]
        assert loader.get_form("signup").name == "signup"
        assert loader.get_form("missing") is None

    def test_duplicate_field_rejected(self, tmp_path):
        data = {"form": "dup", "fields": [{"name": "a"}, {"name": "a"}]}
        path = _write_yaml(tmp_path / "dup.yaml", data)
        with pytest.raises(ValueError, match="declares field 'a' twice"):
            FormDefinitionLoader(path).load_file(path)

    def test_duplicate_form_rejected(self, tmp_path):
        _write_yaml(tmp_path / "a.yaml", {"form": "same", "fields": []})
        _write_yaml(tmp_path / "b.yaml", {"form": "same", "fields": []})
        with pytest.raises(ValueError, match="Duplicate form 'same'"):
            FormDefinitionLoader(tmp_path).load_all()

    def test_missing_path_loads_nothing(self, tmp_path):
        loader = FormDefinitionLoader(tmp_path / "nope")
        loader.load_all()
        assert loader.list_forms() == []


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------


class TestValidateFormFile:
    def test_valid_file(self, tmp_path):
        path = _write_yaml(tmp_path / "signup.yaml", SIGNUP)
        assert validate_form_file(path) == []

    def test_missing_fields_key(self, tmp_path):
        path = _write_yaml(tmp_path / "bad.yaml", {"form": "bad"})
        issues = validate_form_file(path)
        assert len(issues) == 1
        assert "'fields' is a required property" in issues[0].message

    def test_unknown_field_property(self, tmp_path):
        data = {"form": "bad", "fields": [{"name": "a", "minlen": 3}]}
        path = _write_yaml(tmp_path / "bad.yaml", data)
        issues = validate_form_file(path)
        assert len(issues) == 1
        assert issues[0].path == "fields[0]"

    def test_negative_length(self, tmp_path):
        data = {"form": "bad", "fields": [{"name": "a", "maxLength": -1}]}
        path = _write_yaml(tmp_path / "bad.yaml", data)
        issues = validate_form_file(path)
        assert [i.path for i in issues] == ["fields[0]/maxLength"]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        issues = validate_form_file(path)
        assert "empty" in issues[0].message

    def test_yaml_parse_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("form: [unclosed\n")
        issues = validate_form_file(path)
        assert issues[0].message.startswith("YAML parse error")

    def test_issue_str(self):
        issue = SchemaIssue(file=Path("f.yaml"), message="boom", path="fields[0]")
        assert str(issue) == "[ERROR] f.yaml at fields[0]: boom"


# ---------------------------------------------------------------------------
# Headless collaborators
# ---------------------------------------------------------------------------


class TestStaticField:
    def test_fire_runs_callbacks_in_order(self):
        field = StaticField("f")
        calls = []
        field.on("change", lambda: calls.append("a"))
        field.on("change", lambda: calls.append("b"))
        field.on("blur", lambda: calls.append("blur"))

        field.fire("change")
        assert calls == ["a", "b"]

    def test_fire_without_listeners(self):
        StaticField("f").fire("keyup")

    def test_check_and_select(self):
        field = StaticField("f", options=["a", "b"])
        field.check("a")
        field.check("a")
        field.check("b")
        assert field.checked_values() == ["a", "b"]
        field.uncheck("a")
        assert field.checked_values() == ["b"]
        field.select("a")
        assert field.checked_values() == ["a"]

    def test_undeclared_option_rejected(self):
        field = StaticField("size", options=["s", "m"])
        with pytest.raises(ValueError, match="has no option 'xl'"):
            field.check("xl")
        with pytest.raises(ValueError, match="has no option 'xl'"):
            field.select("xl")
        assert field.checked_values() == []

    def test_no_declared_options_accepts_any(self):
        field = StaticField("free")
        field.check("anything")
        assert field.checked_values() == ["anything"]

    def test_attribute(self):
        field = StaticField("f", attributes={"minlength": 2})
        assert field.attribute("minlength") == 2
        assert field.attribute("maxlength") is None


class TestHeadlessRenderer:
    def test_tracks_state_and_message(self):
        renderer = HeadlessRenderer()
        field = StaticField("f")
        message = RenderedMessage(key="required", text="Required", markup="<p>Required</p>")

        renderer.mark_invalid(field)
        renderer.show_error(field, message)
        assert renderer.display(field).state == "invalid"
        assert renderer.display("f").message is message

        renderer.clear_messages(field)
        renderer.mark_neutral(field)
        assert renderer.display(field).message is None
        assert renderer.display(field).state == "neutral"

        renderer.mark_valid(field)
        renderer.mark_valid(field)
        assert renderer.display(field).state == "valid"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestFormSettings:
    def test_defaults(self):
        settings = FormSettings()
        assert settings.message_type == "error"
        assert settings.error_type == "generic"
        assert settings.debug is False
        assert settings.fallback_type is None

    def test_from_dict(self):
        settings = FormSettings.from_dict(
            {"messageType": "note", "errorType": "oops", "debug": True, "fallbackType": "text"}
        )
        assert settings == FormSettings("note", "oops", True, "text")

    def test_from_dict_none(self):
        assert FormSettings.from_dict(None) == FormSettings()

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FORMVALIDATE_DEBUG", "true")
        monkeypatch.setenv("FORMVALIDATE_MESSAGE_TYPE", "note")
        monkeypatch.delenv("FORMVALIDATE_ERROR_TYPE", raising=False)

        settings = FormSettings.from_env()
        assert settings.debug is True
        assert settings.message_type == "note"
        assert settings.error_type == "generic"
