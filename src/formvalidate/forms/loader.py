"""Load form definitions from YAML files."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formvalidate.validation.types import FormSettings


@dataclass
class FieldDefinition:
    name: str
    type: str
    label: str | None = None
    value: Any = None
    options: list[str] = field(default_factory=list)
    checked: list[str] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class FormDefinition:
    name: str
    fields: list[FieldDefinition]
    settings: FormSettings = field(default_factory=FormSettings)
    source: Path | None = None

    def get_field(self, name: str) -> FieldDefinition | None:
        for field_def in self.fields:
            if field_def.name == name:
                return field_def
        return None


class FormDefinitionLoader:
    """Loads form definitions from a YAML file or a directory of them.

    Example file:
        form: signup
        settings:
          errorType: generic
        fields:
          - name: username
            type: text
            minLength: 3
            value: "ab"
    """

    def __init__(self, path: Path):
        self.path = path
        self.forms: dict[str, FormDefinition] = {}

    def load_all(self) -> None:
        """Load every form definition under the path."""
        if self.path.is_file():
            files = [self.path]
        elif self.path.is_dir():
            files = sorted(self.path.glob("*.yaml"))
        else:
            return

        for yaml_file in files:
            form = self.load_file(yaml_file)
            if form is not None:
                if form.name in self.forms:
                    raise ValueError(
                        f"Duplicate form '{form.name}' in {yaml_file} "
                        f"and {self.forms[form.name].source}"
                    )
                self.forms[form.name] = form

    def load_file(self, yaml_file: Path) -> FormDefinition | None:
        """Load a single form definition. Returns None for non-form files."""
        with open(yaml_file) as f:
            data = yaml.safe_load(f)
        if not data or "form" not in data:
            return None
        form = self._resolve_form(data)
        form.source = yaml_file
        return form

    def _resolve_form(self, data: dict) -> FormDefinition:
        fields = [self._resolve_field(f) for f in data.get("fields", [])]

        seen: set[str] = set()
        for f in fields:
            if f.name in seen:
                raise ValueError(f"Form '{data['form']}' declares field '{f.name}' twice")
            seen.add(f.name)

        return FormDefinition(
            name=data["form"],
            fields=fields,
            settings=FormSettings.from_dict(data.get("settings")),
        )

    def _resolve_field(self, data: dict) -> FieldDefinition:
        """Convert field dict to FieldDefinition.

        minLength/maxLength become the input's minlength/maxlength
        attributes; an explicit `attributes` map is merged over them.
        """
        attributes: dict[str, Any] = {}
        if data.get("minLength") is not None:
            attributes["minlength"] = data["minLength"]
        if data.get("maxLength") is not None:
            attributes["maxlength"] = data["maxLength"]
        attributes.update(data.get("attributes", {}))

        checked = data.get("checked", [])
        if isinstance(checked, str):
            checked = [checked]

        return FieldDefinition(
            name=data["name"],
            type=data.get("type", "text"),
            label=data.get("label"),
            value=data.get("value"),
            options=[str(o) for o in data.get("options", [])],
            checked=[str(c) for c in checked],
            attributes=attributes,
        )

    def get_form(self, name: str) -> FormDefinition | None:
        return self.forms.get(name)

    def list_forms(self) -> list[str]:
        return list(self.forms.keys())
