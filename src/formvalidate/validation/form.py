"""Form validator: discovers fields and orchestrates whole-form validation."""

import logging
from dataclasses import dataclass, field
from typing import Any

from formvalidate.validation.adapters import FieldAdapter
from formvalidate.validation.field import FieldValidator
from formvalidate.validation.registry import CheckRegistry
from formvalidate.validation.types import (
    ConfigurationError,
    ElementLocator,
    FieldState,
    FormSettings,
    FormState,
    RenderedMessage,
    Renderer,
    TriggerEvent,
    TriggerKind,
)

logger = logging.getLogger(__name__)


@dataclass
class SubmitResult:
    """Outcome of a submit attempt.

    Attributes:
        accepted: True if submission may proceed
        invalid_fields: Names of fields that ended INVALID, in discovery order
        messages: The message shown on each invalid field
    """

    accepted: bool
    invalid_fields: list[str] = field(default_factory=list)
    messages: dict[str, RenderedMessage] = field(default_factory=dict)

    @property
    def rejected(self) -> bool:
        return not self.accepted

    def render_summary(self, kind: str = "summary") -> str:
        """Render the invalid fields' messages through a container template."""
        if self.accepted:
            return ""
        template = CheckRegistry.resolve_container_template(kind)
        return template([self.messages[name].markup for name in self.invalid_fields])


class FormValidator:
    """Validates one form instance.

    On construction the form's fields are discovered through the locator,
    each bound to a FieldValidator through its declared type. Constructing
    the first FormValidator seals the CheckRegistry.

    Example:
        form_validator = FormValidator(form, locator, renderer)
        result = form_validator.on_submit()
        if result.rejected:
            summary.html(result.render_summary())
    """

    def __init__(
        self,
        form: Any,
        locator: ElementLocator,
        renderer: Renderer,
        settings: FormSettings | None = None,
    ):
        self.form = form
        self.locator = locator
        self.renderer = renderer
        self.settings = settings or FormSettings()
        self.form_state = FormState()

        self._check_settings()
        CheckRegistry.seal()

        self.fields: list[FieldValidator] = []
        for handle, declared_type in self.locator.find_fields(form):
            adapter = self._resolve_adapter(handle.name, declared_type)
            field_validator = FieldValidator(
                handle,
                adapter,
                renderer,
                form_state=self.form_state,
                settings=self.settings,
            )
            field_validator.bind()
            self.fields.append(field_validator)

        if self.settings.debug:
            logger.debug(
                "Form validator ready with %d field(s): %s",
                len(self.fields),
                [(f.name, f.adapter.name) for f in self.fields],
            )

    @property
    def processed(self) -> bool:
        """True once a submit has been attempted."""
        return self.form_state.processed

    @property
    def is_valid(self) -> bool:
        return all(f.is_valid for f in self.fields)

    def _check_settings(self) -> None:
        """Fail fast if the configured defaults cannot be resolved."""
        if not CheckRegistry.has_message(self.settings.error_type):
            raise ConfigurationError(
                f"Default error type '{self.settings.error_type}' has no registered message"
            )
        if not CheckRegistry.has_message_template(self.settings.message_type):
            raise ConfigurationError(
                f"Default message type '{self.settings.message_type}' has no registered template"
            )
        fallback = self.settings.fallback_type
        if fallback is not None and not CheckRegistry.has_field_type(fallback):
            raise ConfigurationError(f"Fallback field type '{fallback}' is not registered")

    def _resolve_adapter(self, field_name: str, declared_type: str) -> FieldAdapter:
        if CheckRegistry.has_field_type(declared_type):
            return CheckRegistry.get_field_type(declared_type)

        fallback = self.settings.fallback_type
        if fallback is None:
            raise ConfigurationError(
                f"Field '{field_name}' has unsupported type '{declared_type}'. "
                "Available types: " + ", ".join(CheckRegistry.list_field_types())
            )

        logger.warning(
            "Field '%s' has unsupported type '%s', using fallback '%s'",
            field_name,
            declared_type,
            fallback,
        )
        return CheckRegistry.get_field_type(fallback)

    def get_field(self, name: str) -> FieldValidator | None:
        """Get a field validator by field name."""
        for field_validator in self.fields:
            if field_validator.name == name:
                return field_validator
        return None

    def validate_field(
        self,
        name: str,
        kind: TriggerKind = TriggerKind.INPUT_CHANGED,
    ) -> FieldState:
        """Fire a trigger on one field by name.

        Uses the surfacing list of the adapter's binding for that trigger
        kind; a submit kind runs the field as part of a submit pass would.

        Raises:
            KeyError: If the form has no field with that name
        """
        field_validator = self.get_field(name)
        if field_validator is None:
            raise KeyError(f"Form has no field named '{name}'")

        if kind is TriggerKind.FORM_SUBMITTED:
            return field_validator.validate(TriggerEvent.submitted())

        for binding in field_validator.adapter.bindings:
            if binding.kind is kind:
                return field_validator.validate(binding.trigger())
        return field_validator.validate(TriggerEvent(kind=kind))

    def on_submit(self) -> SubmitResult:
        """Validate every field for a submit attempt.

        Marks the form as processed before any field runs, so from this pass
        on every failing check surfaces. Fields run in discovery order.

        Returns:
            SubmitResult; not accepted when any field ended INVALID, in which
            case the host should cancel the default submit action.
        """
        self.form_state.processed = True

        if self.settings.debug:
            logger.debug("Validating form %r on submit", self.form)

        trigger = TriggerEvent.submitted()
        invalid: list[FieldValidator] = []
        for field_validator in self.fields:
            if field_validator.validate(trigger) is FieldState.INVALID:
                invalid.append(field_validator)

        result = SubmitResult(
            accepted=not invalid,
            invalid_fields=[f.name for f in invalid],
            messages={f.name: f.message for f in invalid if f.message is not None},
        )

        if self.settings.debug:
            logger.debug(
                "Submit %s; invalid fields: %s",
                "accepted" if result.accepted else "rejected",
                result.invalid_fields,
            )

        return result

    def __repr__(self) -> str:
        return f"FormValidator({self.form!r}, fields={len(self.fields)})"
