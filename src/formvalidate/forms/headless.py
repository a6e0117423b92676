"""Headless collaborators.

In-memory implementations of the field handle, element locator and
renderer contracts. They back the CLI and let forms loaded from YAML be
validated without a visual tree.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable

from formvalidate.forms.loader import FieldDefinition, FormDefinition
from formvalidate.validation.types import FieldHandle, RenderedMessage


class StaticField:
    """A field whose value and options live in memory.

    Host events are dispatched with `fire`, which runs every callback
    subscribed to that event in subscription order.
    """

    def __init__(
        self,
        name: str,
        value: Any = None,
        label: str | None = None,
        options: list[str] | None = None,
        checked: list[str] | None = None,
        attributes: dict[str, Any] | None = None,
    ):
        self.name = name
        self.label = label
        self.options = list(options or [])
        self.attributes = dict(attributes or {})
        self._value = value
        self._checked = list(checked or [])
        self._listeners: dict[str, list[Callable[[], None]]] = defaultdict(list)

    @classmethod
    def from_definition(cls, definition: FieldDefinition) -> "StaticField":
        return cls(
            name=definition.name,
            value=definition.value,
            label=definition.label,
            options=definition.options,
            checked=definition.checked,
            attributes=definition.attributes,
        )

    def value(self) -> Any:
        return self._value

    def checked_values(self) -> list[str]:
        return list(self._checked)

    def attribute(self, name: str) -> Any:
        return self.attributes.get(name)

    def on(self, event: str, callback: Callable[[], None]) -> None:
        self._listeners[event].append(callback)

    def fire(self, event: str) -> None:
        for callback in list(self._listeners[event]):
            callback()

    def set_value(self, value: Any) -> None:
        self._value = value

    def _require_option(self, option: str) -> None:
        if self.options and option not in self.options:
            raise ValueError(
                f"Field '{self.name}' has no option '{option}'. "
                f"Options: {', '.join(self.options)}"
            )

    def check(self, option: str) -> None:
        self._require_option(option)
        if option not in self._checked:
            self._checked.append(option)

    def uncheck(self, option: str) -> None:
        if option in self._checked:
            self._checked.remove(option)

    def select(self, option: str) -> None:
        """Radio behavior: check one option, unchecking the others."""
        self._require_option(option)
        self._checked = [option]

    def __repr__(self) -> str:
        return f"StaticField({self.name!r})"


class StaticLocator:
    """Finds the fields of a FormDefinition in declaration order.

    Handles are created once per (form, field) and reused, so repeated
    discovery returns the same handle for the same field.
    """

    def __init__(self):
        self._handles: dict[tuple[str, str], StaticField] = {}

    def find_fields(self, form: FormDefinition) -> list[tuple[FieldHandle, str]]:
        found: list[tuple[FieldHandle, str]] = []
        for definition in form.fields:
            key = (form.name, definition.name)
            if key not in self._handles:
                self._handles[key] = StaticField.from_definition(definition)
            found.append((self._handles[key], definition.type))
        return found

    def handle(self, form: FormDefinition, name: str) -> StaticField | None:
        return self._handles.get((form.name, name))


@dataclass
class FieldDisplay:
    """What the renderer currently shows for one field."""

    state: str = "neutral"  # "neutral" | "valid" | "invalid"
    message: RenderedMessage | None = None


class HeadlessRenderer:
    """Records the visible state of each field instead of drawing it."""

    def __init__(self):
        self.displays: dict[str, FieldDisplay] = {}

    def display(self, field: FieldHandle | str) -> FieldDisplay:
        name = field if isinstance(field, str) else field.name
        return self.displays.setdefault(name, FieldDisplay())

    def show_error(self, field: FieldHandle, message: RenderedMessage) -> None:
        self.display(field).message = message

    def clear_messages(self, field: FieldHandle) -> None:
        self.display(field).message = None

    def mark_valid(self, field: FieldHandle) -> None:
        self.display(field).state = "valid"

    def mark_invalid(self, field: FieldHandle) -> None:
        self.display(field).state = "invalid"

    def mark_neutral(self, field: FieldHandle) -> None:
        self.display(field).state = "neutral"
