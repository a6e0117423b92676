"""Field-type adapters.

An adapter tells a field validator, for one field type:
- how to read the field's current value
- which checks to run on it, in priority order
- which host events trigger validation, and what may surface on each

Adapters are values composed from functions, not subclasses. Types that
read a plain input value share `read_input_value`.
"""

from typing import Any, Callable

from formvalidate.validation.registry import CheckRegistry
from formvalidate.validation.types import (
    CheckResult,
    FieldHandle,
    TriggerBinding,
    TriggerEvent,
    TriggerKind,
)

ValueReader = Callable[[FieldHandle], Any]
CheckProducer = Callable[[Any, FieldHandle], list[CheckResult]]


# =============================================================================
# Value Readers
# =============================================================================


def read_input_value(field: FieldHandle) -> Any:
    """Default reader: the input's raw value."""
    return field.value()


def read_checked_value(field: FieldHandle) -> str | None:
    """Radio groups: value of the checked option, or None."""
    checked = field.checked_values()
    return checked[0] if checked else None


def read_is_checked(field: FieldHandle) -> bool:
    """Checkbox groups: True if at least one option is checked."""
    return len(field.checked_values()) != 0


def run_check(name: str, value: Any, *field_metadata: Any) -> CheckResult:
    """Run a registered check and wrap its outcome."""
    predicate = CheckRegistry.get_check(name)
    return CheckResult(name=name, passed=bool(predicate(value, *field_metadata)))


# =============================================================================
# Adapter
# =============================================================================


class FieldAdapter:
    """Strategy for one field type.

    Args:
        name: Field type name (e.g. "text")
        checks: Function (value, field) -> ordered CheckResult list
        bindings: Host events that trigger validation
        read_value: Function reading the field's current value
    """

    def __init__(
        self,
        name: str,
        checks: CheckProducer,
        bindings: list[TriggerBinding] | None = None,
        read_value: ValueReader = read_input_value,
    ):
        self.name = name
        self.checks = checks
        self.bindings = list(bindings or [])
        self.read_value = read_value

    def get_value(self, field: FieldHandle) -> Any:
        return self.read_value(field)

    def produces_checks(self, value: Any, field: FieldHandle) -> list[CheckResult]:
        return self.checks(value, field)

    def bind_triggers(
        self,
        field: FieldHandle,
        on_trigger: Callable[[TriggerEvent], Any],
    ) -> None:
        """Subscribe on_trigger to every bound host event on the field."""
        for binding in self.bindings:
            trigger = binding.trigger()
            for event in binding.events:
                field.on(event, lambda trigger=trigger: on_trigger(trigger))

    def __repr__(self) -> str:
        return f"FieldAdapter({self.name!r})"


def _changed(*surfacing: str, events: tuple[str, ...] = ("change", "keyup")) -> TriggerBinding:
    return TriggerBinding(events=events, kind=TriggerKind.INPUT_CHANGED, surfacing=surfacing)


def _blurred(*surfacing: str) -> TriggerBinding:
    return TriggerBinding(events=("blur",), kind=TriggerKind.INPUT_BLURRED, surfacing=surfacing)


def format_adapter(
    name: str,
    check_name: str,
    change_surfacing: tuple[str, ...] | None = None,
) -> FieldAdapter:
    """Build an adapter checking `required` then one format check.

    Args:
        name: Field type name
        check_name: Registered format check to run after `required`
        change_surfacing: Checks surfaced while typing; defaults to both
    """
    if change_surfacing is None:
        change_surfacing = ("required", check_name)

    def checks(value: Any, field: FieldHandle) -> list[CheckResult]:
        return [
            run_check("required", value),
            run_check(check_name, value),
        ]

    return FieldAdapter(
        name,
        checks,
        bindings=[
            _changed(*change_surfacing),
            _blurred("required", check_name),
        ],
    )


# =============================================================================
# Built-in Types
# =============================================================================


def _text_checks(value: Any, field: FieldHandle) -> list[CheckResult]:
    return [
        run_check("required", value),
        run_check("length", value, field.attribute("minlength"), field.attribute("maxlength")),
    ]


def _number_checks(value: Any, field: FieldHandle) -> list[CheckResult]:
    return [
        run_check("required", value),
        run_check("number", value),
        run_check("length", value, field.attribute("minlength"), field.attribute("maxlength")),
    ]


def _required_only(value: Any, field: FieldHandle) -> list[CheckResult]:
    return [run_check("required", value)]


def builtin_field_types() -> dict[str, FieldAdapter]:
    """Create the built-in field type adapters."""
    return {
        "text": FieldAdapter(
            "text",
            _text_checks,
            bindings=[_changed("required", "length"), _blurred("required", "length")],
        ),
        "number": FieldAdapter(
            "number",
            _number_checks,
            bindings=[
                _changed("required", "length", "number"),
                _blurred("required", "length", "number"),
            ],
        ),
        "email": format_adapter("email", "email"),
        "phoneNL": format_adapter("phoneNL", "phoneNL", change_surfacing=("required",)),
        "postalcodeNL": format_adapter(
            "postalcodeNL", "postalcodeNL", change_surfacing=("required",)
        ),
        "radio": FieldAdapter(
            "radio",
            _required_only,
            bindings=[_changed("required", events=("change",))],
            read_value=read_checked_value,
        ),
        "checkbox": FieldAdapter(
            "checkbox",
            _required_only,
            bindings=[_changed("required", events=("change",))],
            read_value=read_is_checked,
        ),
    }


def register_builtin_field_types() -> None:
    """Register the built-in field types. Called once at application startup."""
    for name, adapter in builtin_field_types().items():
        CheckRegistry.register_field_type(name, adapter)
