"""
forms/schema.py — JSON Schema validation for form definition YAML files.

Usage:
    from formvalidate.forms.schema import validate_form_file

    issues = validate_form_file(Path("forms/signup.yaml"))
    for issue in issues:
        print(issue)
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "form.schema.json"


@dataclass
class SchemaIssue:
    """A single schema finding for a form definition file."""

    file: Path
    message: str
    path: str = ""          # location within the document, e.g. "fields[0]/type"
    severity: str = "error" # "error" | "warning"

    def __str__(self) -> str:
        loc = f" at {self.path}" if self.path else ""
        return f"[{self.severity.upper()}] {self.file}{loc}: {self.message}"


def load_schema() -> dict[str, Any]:
    with _SCHEMA_PATH.open() as fh:
        return json.load(fh)


def _json_path(error: ValidationError) -> str:
    """Convert a jsonschema ValidationError path to a readable string."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def validate_form_data(data: Any, file: Path) -> list[SchemaIssue]:
    """Validate an already-parsed form definition."""
    validator = Draft202012Validator(load_schema())
    return [
        SchemaIssue(file=file, message=error.message, path=_json_path(error))
        for error in sorted(validator.iter_errors(data), key=_json_path)
    ]


def validate_form_file(yaml_path: Path) -> list[SchemaIssue]:
    """
    Validate a single form definition YAML file.

    Returns:
        A list of :class:`SchemaIssue` objects (empty on success).
    """
    try:
        with yaml_path.open() as fh:
            raw = yaml.safe_load(fh)
    except yaml.YAMLError as exc:
        return [SchemaIssue(file=yaml_path, message=f"YAML parse error: {exc}")]

    if raw is None:
        return [
            SchemaIssue(file=yaml_path, message="File is empty or contains only whitespace")
        ]

    return validate_form_data(raw, yaml_path)
