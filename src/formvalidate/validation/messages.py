"""Built-in messages, templates and message interpolation."""

import html
import re
from typing import Any

from formvalidate.validation.registry import CheckRegistry
from formvalidate.validation.types import FieldHandle


BUILTIN_MESSAGES = {
    "generic": "An error occurred",
    "required": "This field is required",
    "length": "{label} must be between {minlength} and {maxlength} characters",
    "length.min": "{label} must be at least {minlength} characters",
    "length.max": "{label} must be at most {maxlength} characters",
    "number": "This is not a valid number",
    "email": "This is not a (correct) email address",
    "phoneNL": "This is not a valid Dutch phone number",
    "postalcodeNL": "This is not a valid Dutch postal code",
}


def error_template(text: str) -> str:
    return f'<p class="flt-form__message-error">{html.escape(text)}</p>'


def note_template(text: str) -> str:
    return f'<p class="flt-form__message-note">{html.escape(text)}</p>'


def summary_template(markup: list[str]) -> str:
    """Wrap per-field message markup in the form's message region."""
    items = "".join(f"<li>{m}</li>" for m in markup)
    return f'<div class="flt-form__messages"><ul>{items}</ul></div>'


def register_builtin_messages() -> None:
    """Register built-in messages and templates. Called once at startup."""
    for key, text in BUILTIN_MESSAGES.items():
        CheckRegistry.register_message(key, text)

    CheckRegistry.register_message_template("error", error_template)
    CheckRegistry.register_message_template("note", note_template)
    CheckRegistry.register_container_template("summary", summary_template)


class MessageInterpolator:
    """Interpolates field attributes into message text.

    Supports:
    - {label} - The field's label, or its name in Title Case
    - {attribute} - Any attribute of the field input (e.g. {minlength})

    Unknown placeholders are replaced with "".
    """

    PATTERN = re.compile(r"\{(?P<name>\w+)\}")

    def interpolate(self, text: str, field: FieldHandle) -> str:
        def replace(match: re.Match) -> str:
            name = match.group("name")
            if name == "label":
                return self._get_label(field)
            value = field.attribute(name)
            return "" if value is None else str(value)

        return self.PATTERN.sub(replace, text)

    def message_key(self, check_name: str, field: FieldHandle) -> str:
        """Pick the message key for a failing check.

        Length failures on a field with a single bound use the one-sided
        "length.min" / "length.max" message when one is registered.
        """
        if check_name != "length":
            return check_name

        has_min = self._has_bound(field.attribute("minlength"))
        has_max = self._has_bound(field.attribute("maxlength"))
        if has_min and not has_max and CheckRegistry.has_message("length.min"):
            return "length.min"
        if has_max and not has_min and CheckRegistry.has_message("length.max"):
            return "length.max"
        return check_name

    def _has_bound(self, value: Any) -> bool:
        if value is None or isinstance(value, bool):
            return False
        if isinstance(value, str):
            return value.strip().isdecimal()
        return isinstance(value, (int, float)) and value >= 0

    def _get_label(self, field: FieldHandle) -> str:
        if field.label:
            return field.label
        result = re.sub(r"([A-Z])", r" \1", field.name)
        return result.replace("_", " ").strip().title()
