"""Core types for the formvalidate engine.

This module defines the foundational types shared by the registry, the
field-type adapters and the field/form validators:
- CheckResult: one named check outcome, in evaluation order
- FieldState: the per-field validation state machine
- TriggerEvent: what caused a validate pass and which failures may surface
- FormSettings: per-form configuration
- Collaborator protocols (FieldHandle, ElementLocator, Renderer)
- The exception hierarchy
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Protocol


# =============================================================================
# Exceptions
# =============================================================================


class FormValidateError(Exception):
    """Base class for all formvalidate errors."""


class ConfigurationError(FormValidateError):
    """Setup-time misconfiguration: unknown field type, bad defaults, etc."""


class DuplicateRegistration(ConfigurationError):
    """A registry key was registered twice."""

    def __init__(self, table: str, key: str):
        self.table = table
        self.key = key
        super().__init__(f"{table} '{key}' is already registered")


class RegistrySealedError(ConfigurationError):
    """A registration was attempted after the registry was sealed."""

    def __init__(self, table: str, key: str):
        self.table = table
        self.key = key
        super().__init__(
            f"Cannot register {table} '{key}': the registry is sealed. "
            "Registrations must happen before the first form validator is created."
        )


class AdapterFailure(FormValidateError):
    """A field-type adapter raised while reading a value or producing checks."""

    def __init__(self, field_name: str, field_type: str, cause: BaseException):
        self.field_name = field_name
        self.field_type = field_type
        super().__init__(
            f"Adapter '{field_type}' failed for field '{field_name}': {cause}"
        )


# =============================================================================
# Validation State
# =============================================================================


class FieldState(Enum):
    """Validation state of a single field.

    UNVALIDATED: Initial state, no validate pass has run
    NEUTRAL: Errors cleared; the value may be invalid but nothing is shown
    VALID: All checks passed
    INVALID: A check failed and its message is shown
    """

    UNVALIDATED = "unvalidated"
    NEUTRAL = "neutral"
    VALID = "valid"
    INVALID = "invalid"


class TriggerKind(Enum):
    """The kind of event that started a validate pass."""

    INPUT_CHANGED = "change"
    INPUT_BLURRED = "blur"
    FORM_SUBMITTED = "submit"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single named check.

    Attributes:
        name: Check name, also the message key for the failure
        passed: True if the value satisfied the check
    """

    name: str
    passed: bool


@dataclass(frozen=True)
class TriggerEvent:
    """A validation trigger.

    Attributes:
        kind: What happened (change, blur, submit)
        surfacing: Check names whose failure may be shown immediately for
            non-submit triggers before the form has been submitted
    """

    kind: TriggerKind
    surfacing: tuple[str, ...] = ()

    @classmethod
    def submitted(cls) -> "TriggerEvent":
        return cls(kind=TriggerKind.FORM_SUBMITTED)

    def allows(self, check_name: str) -> bool:
        return check_name in self.surfacing


@dataclass(frozen=True)
class TriggerBinding:
    """Binds host events on a field to a validation trigger.

    Attributes:
        events: Host event names (e.g. "change", "keyup", "blur")
        kind: Trigger kind passed to the field validator
        surfacing: Check names allowed to surface before submit
    """

    events: tuple[str, ...]
    kind: TriggerKind
    surfacing: tuple[str, ...] = ()

    def trigger(self) -> TriggerEvent:
        return TriggerEvent(kind=self.kind, surfacing=self.surfacing)


@dataclass(frozen=True)
class RenderedMessage:
    """A resolved, templated error message for one field.

    Attributes:
        key: The failing check (message key) that produced it
        text: Plain message text after interpolation
        markup: Text passed through the message template
    """

    key: str
    text: str
    markup: str


@dataclass
class FormState:
    """Mutable state shared between a form validator and its fields.

    Attributes:
        processed: True once a submit has been attempted; never reset
    """

    processed: bool = False


# =============================================================================
# Configuration
# =============================================================================


_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class FormSettings:
    """Per-form configuration.

    Attributes:
        message_type: Default message template kind
        error_type: Message key used when a failing check has no message
        debug: Emit verbose diagnostics for every validate pass
        fallback_type: Field type used when a declared type has no adapter
    """

    message_type: str = "error"
    error_type: str = "generic"
    debug: bool = False
    fallback_type: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "FormSettings":
        """Create FormSettings from a YAML/JSON dict (camelCase keys)."""
        data = data or {}
        return cls(
            message_type=data.get("messageType", "error"),
            error_type=data.get("errorType", "generic"),
            debug=bool(data.get("debug", False)),
            fallback_type=data.get("fallbackType"),
        )

    @classmethod
    def from_env(cls) -> "FormSettings":
        """Create settings from environment variables.

        Reads FORMVALIDATE_MESSAGE_TYPE, FORMVALIDATE_ERROR_TYPE and
        FORMVALIDATE_DEBUG; unset variables keep their defaults.
        """
        return cls(
            message_type=os.environ.get("FORMVALIDATE_MESSAGE_TYPE", "error"),
            error_type=os.environ.get("FORMVALIDATE_ERROR_TYPE", "generic"),
            debug=os.environ.get("FORMVALIDATE_DEBUG", "").lower() in _TRUTHY,
        )


# =============================================================================
# Collaborators
# =============================================================================


class FieldHandle(Protocol):
    """A field in the host's visual tree.

    Handles are stable: the same physical field maps to the same handle for
    the lifetime of a form validator.
    """

    name: str
    label: str | None

    def value(self) -> Any:
        """Current raw input value."""
        ...

    def checked_values(self) -> list[str]:
        """Values of the checked options (radio/checkbox groups)."""
        ...

    def attribute(self, name: str) -> Any:
        """An attribute of the underlying input (e.g. "minlength"), or None."""
        ...

    def on(self, event: str, callback: Callable[[], None]) -> None:
        """Subscribe to a host event on the field's inputs."""
        ...


class ElementLocator(Protocol):
    """Discovers the fields of a form, in document order."""

    def find_fields(self, form: Any) -> list[tuple[FieldHandle, str]]:
        """Return (handle, declared type) pairs for every field in the form."""
        ...


class Renderer(Protocol):
    """Presents validation state. All calls are synchronous and never fail."""

    def show_error(self, field: FieldHandle, message: RenderedMessage) -> None:
        ...

    def clear_messages(self, field: FieldHandle) -> None:
        ...

    def mark_valid(self, field: FieldHandle) -> None:
        ...

    def mark_invalid(self, field: FieldHandle) -> None:
        ...

    def mark_neutral(self, field: FieldHandle) -> None:
        ...


# Check predicate signature: (value, *field_metadata) -> bool
CheckFn = Callable[..., bool]

# Template signatures
MessageTemplate = Callable[[str], str]
ContainerTemplate = Callable[[list[str]], str]

