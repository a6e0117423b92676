"""formvalidate validation engine.

This module provides the field-validation engine for interactive forms:
- Checks: named predicates over a field value (required, length, email, ...)
- Field types: adapters producing ordered check results per field type
- FieldValidator: the neutral/valid/invalid state machine for one field
- FormValidator: field discovery and submit orchestration

Usage:
    from formvalidate.validation import (
        CheckRegistry,
        FormValidator,
        register_all_builtins,
    )

    # At application startup, before any form validator exists
    register_all_builtins()
    CheckRegistry.register_check("iban", is_valid_iban)
"""

from formvalidate.validation.adapters import (
    FieldAdapter,
    format_adapter,
    read_checked_value,
    read_input_value,
    read_is_checked,
    register_builtin_field_types,
    run_check,
)
from formvalidate.validation.checks import register_builtin_checks
from formvalidate.validation.field import FieldValidator, first_failure
from formvalidate.validation.form import FormValidator, SubmitResult
from formvalidate.validation.messages import (
    MessageInterpolator,
    register_builtin_messages,
)
from formvalidate.validation.registry import CheckRegistry, check
from formvalidate.validation.types import (
    AdapterFailure,
    CheckResult,
    ConfigurationError,
    DuplicateRegistration,
    ElementLocator,
    FieldHandle,
    FieldState,
    FormSettings,
    FormState,
    FormValidateError,
    RegistrySealedError,
    RenderedMessage,
    Renderer,
    TriggerBinding,
    TriggerEvent,
    TriggerKind,
)


def register_all_builtins() -> None:
    """Register built-in checks, field types, messages and templates.

    Call once per process, before host registrations are sealed by the
    first FormValidator.
    """
    register_builtin_checks()
    register_builtin_messages()
    register_builtin_field_types()


__all__ = [
    # Types
    "CheckResult",
    "FieldState",
    "FormSettings",
    "FormState",
    "RenderedMessage",
    "TriggerBinding",
    "TriggerEvent",
    "TriggerKind",
    # Collaborators
    "ElementLocator",
    "FieldHandle",
    "Renderer",
    # Errors
    "AdapterFailure",
    "ConfigurationError",
    "DuplicateRegistration",
    "FormValidateError",
    "RegistrySealedError",
    # Registry
    "CheckRegistry",
    "check",
    # Adapters
    "FieldAdapter",
    "format_adapter",
    "read_checked_value",
    "read_input_value",
    "read_is_checked",
    "run_check",
    # Validators
    "FieldValidator",
    "FormValidator",
    "SubmitResult",
    "first_failure",
    "MessageInterpolator",
    # Setup
    "register_all_builtins",
    "register_builtin_checks",
    "register_builtin_field_types",
    "register_builtin_messages",
]
