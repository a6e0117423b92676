"""Field validator: the per-field validation state machine.

A validate pass reads the value through the field's adapter, runs the
adapter's ordered checks and reduces them to the first failure. A passing
field becomes VALID. A failing field is first neutralized (messages and
marks cleared), then either surfaced as INVALID with the single most
relevant message, or left NEUTRAL when the failure may not surface yet.
"""

import logging

from formvalidate.validation.adapters import FieldAdapter
from formvalidate.validation.messages import MessageInterpolator
from formvalidate.validation.registry import CheckRegistry
from formvalidate.validation.types import (
    AdapterFailure,
    CheckResult,
    FieldHandle,
    FieldState,
    FormSettings,
    FormState,
    RenderedMessage,
    Renderer,
    TriggerEvent,
    TriggerKind,
)

logger = logging.getLogger(__name__)


def first_failure(results: list[CheckResult]) -> str | None:
    """Name of the first failed check in evaluation order, or None."""
    for result in results:
        if not result.passed:
            return result.name
    return None


class FieldValidator:
    """Validates one field instance.

    Holds the field's state and the failing checks of the last pass. The
    adapter is resolved once at construction; the form state is shared with
    the owning form validator.
    """

    def __init__(
        self,
        field: FieldHandle,
        adapter: FieldAdapter,
        renderer: Renderer,
        form_state: FormState | None = None,
        settings: FormSettings | None = None,
    ):
        self.field = field
        self.adapter = adapter
        self.renderer = renderer
        self.form_state = form_state or FormState()
        self.settings = settings or FormSettings()
        self.interpolator = MessageInterpolator()

        self.state = FieldState.UNVALIDATED
        self.errors: list[str] = []
        self.message: RenderedMessage | None = None

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def is_valid(self) -> bool:
        return self.state is FieldState.VALID

    @property
    def first_failure(self) -> str | None:
        return self.errors[0] if self.errors else None

    def bind(self) -> None:
        """Subscribe this validator to the adapter's trigger events."""
        self.adapter.bind_triggers(self.field, self.validate)

    def validate(self, trigger: TriggerEvent) -> FieldState:
        """Run one validation pass.

        Args:
            trigger: The event that caused this pass

        Returns:
            The resulting field state

        Raises:
            AdapterFailure: If the adapter fails to read the value or produce
                checks. The field's state and errors are left as they were.
        """
        try:
            value = self.adapter.get_value(self.field)
            results = self.adapter.produces_checks(value, self.field)
        except Exception as e:
            raise AdapterFailure(self.field.name, self.adapter.name, e) from e

        self.errors = [r.name for r in results if not r.passed]
        failed = first_failure(results)

        if self.settings.debug:
            logger.debug(
                "Validating field '%s' on %s: value=%r results=%s",
                self.field.name,
                trigger.kind.value,
                value,
                [(r.name, r.passed) for r in results],
            )

        if failed is None:
            self._set_valid_state()
            return self.state

        # Clear the previous pass's display before deciding on this one
        self._set_neutral_state()

        if self._should_surface(failed, trigger):
            if self.settings.debug:
                logger.debug(
                    "Field '%s': surfacing '%s' (trigger=%s, processed=%s)",
                    self.field.name,
                    failed,
                    trigger.kind.value,
                    self.form_state.processed,
                )
            self._set_error_state(failed)
        elif self.settings.debug:
            logger.debug(
                "Field '%s': holding back '%s' until submit", self.field.name, failed
            )

        return self.state

    def _should_surface(self, check_name: str, trigger: TriggerEvent) -> bool:
        if trigger.kind is TriggerKind.FORM_SUBMITTED:
            return True
        if self.form_state.processed:
            return True
        return trigger.allows(check_name)

    # -------------------------------------------------------------------------
    # State transitions
    # -------------------------------------------------------------------------

    def _set_valid_state(self) -> None:
        self.state = FieldState.VALID
        self.message = None
        self.renderer.clear_messages(self.field)
        self.renderer.mark_valid(self.field)

    def _set_neutral_state(self) -> None:
        self.state = FieldState.NEUTRAL
        self.message = None
        self.renderer.clear_messages(self.field)
        self.renderer.mark_neutral(self.field)

    def _set_error_state(self, check_name: str) -> None:
        self.state = FieldState.INVALID
        self.message = self.render_message(check_name)
        self.renderer.mark_invalid(self.field)
        self.renderer.show_error(self.field, self.message)

    def render_message(self, check_name: str) -> RenderedMessage:
        """Resolve, interpolate and template the message for a failed check.

        The form's message_type selects the template kind.
        """
        key = self.interpolator.message_key(check_name, self.field)
        text = CheckRegistry.resolve_message(key, self.settings.error_type)
        text = self.interpolator.interpolate(text, self.field)
        template = CheckRegistry.resolve_message_template(self.settings.message_type)
        return RenderedMessage(key=check_name, text=text, markup=template(text))

    def __repr__(self) -> str:
        return f"FieldValidator({self.field.name!r}, {self.adapter.name!r}, {self.state.value})"
