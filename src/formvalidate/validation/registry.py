"""Check registry for formvalidate.

Provides registration and lookup for:
- Checks (named predicates over a field value)
- Field types (adapters producing ordered check results)
- Messages (text per check/error key)
- Message templates and container templates (markup per kind)

The registry has two phases. During bootstrap, built-ins and host
applications register entries; keys are unique and registering a key twice
raises DuplicateRegistration. Once sealed (the first FormValidator seals it),
every registration raises RegistrySealedError.
"""

from typing import TYPE_CHECKING, Any, Callable

from formvalidate.validation.types import (
    CheckFn,
    ConfigurationError,
    ContainerTemplate,
    DuplicateRegistration,
    MessageTemplate,
    RegistrySealedError,
)

if TYPE_CHECKING:
    from formvalidate.validation.adapters import FieldAdapter


def _empty_container(markup: list[str]) -> str:
    return ""


class CheckRegistry:
    """Process-wide registry for checks, field types, messages and templates.

    Entries must be registered before the first form validator is created.
    Registries are append-only: there is no removal or update, so built-ins
    cannot be shadowed.

    Example:
        CheckRegistry.register_check("postcode", lambda value: ...)
        CheckRegistry.register_message("postcode", "Not a valid postcode")

        # Later, from an adapter
        passed = CheckRegistry.get_check("postcode")(value)
    """

    _checks: dict[str, CheckFn] = {}
    _field_types: dict[str, "FieldAdapter"] = {}
    _messages: dict[str, str] = {}
    _message_templates: dict[str, MessageTemplate] = {}
    _container_templates: dict[str, ContainerTemplate] = {}
    _sealed: bool = False

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    @classmethod
    def _add(cls, table: dict[str, Any], kind: str, key: str, value: Any) -> None:
        if cls._sealed:
            raise RegistrySealedError(kind, key)
        if key in table:
            raise DuplicateRegistration(kind, key)
        table[key] = value

    @classmethod
    def register_check(cls, name: str, predicate: CheckFn) -> None:
        """Register a check predicate by name.

        Args:
            name: Unique check name (e.g. "required", "myapp.iban")
            predicate: Function (value, *field_metadata) -> bool

        Raises:
            DuplicateRegistration: If the name is already registered
            RegistrySealedError: If the registry is sealed
        """
        cls._add(cls._checks, "check", name, predicate)

    @classmethod
    def register_field_type(cls, name: str, adapter: "FieldAdapter") -> None:
        """Register a field-type adapter by type name."""
        cls._add(cls._field_types, "field type", name, adapter)

    @classmethod
    def register_message(cls, key: str, text: str) -> None:
        """Register the message text for an error key."""
        cls._add(cls._messages, "message", key, text)

    @classmethod
    def register_message_template(cls, kind: str, template: MessageTemplate) -> None:
        """Register a template rendering one message text to markup."""
        cls._add(cls._message_templates, "message template", kind, template)

    @classmethod
    def register_container_template(
        cls, kind: str, template: ContainerTemplate
    ) -> None:
        """Register a template wrapping a list of message markup."""
        cls._add(cls._container_templates, "container template", kind, template)

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    @classmethod
    def get_check(cls, name: str) -> CheckFn:
        """Get a registered check predicate.

        Raises:
            ConfigurationError: If the check is not registered
        """
        if name not in cls._checks:
            raise ConfigurationError(
                f"Check '{name}' is not registered. "
                "Custom checks must be registered at application startup."
            )
        return cls._checks[name]

    @classmethod
    def get_field_type(cls, name: str) -> "FieldAdapter":
        """Get a registered field-type adapter.

        Raises:
            ConfigurationError: If the field type is not registered
        """
        if name not in cls._field_types:
            raise ConfigurationError(
                f"Field type '{name}' is not supported. "
                "Available types: " + ", ".join(cls.list_field_types())
            )
        return cls._field_types[name]

    @classmethod
    def resolve_message(cls, key: str, default_key: str = "generic") -> str:
        """Return the message for key, or the message for default_key."""
        if key in cls._messages:
            return cls._messages[key]
        return cls._messages[default_key]

    @classmethod
    def resolve_message_template(
        cls, kind: str, default_kind: str = "error"
    ) -> MessageTemplate:
        """Return the template for kind, or the template for default_kind."""
        if kind in cls._message_templates:
            return cls._message_templates[kind]
        return cls._message_templates[default_kind]

    @classmethod
    def resolve_container_template(cls, kind: str) -> ContainerTemplate:
        """Return the container template for kind, or one producing ""."""
        return cls._container_templates.get(kind, _empty_container)

    @classmethod
    def has_check(cls, name: str) -> bool:
        return name in cls._checks

    @classmethod
    def has_field_type(cls, name: str) -> bool:
        return name in cls._field_types

    @classmethod
    def has_message(cls, key: str) -> bool:
        return key in cls._messages

    @classmethod
    def has_message_template(cls, kind: str) -> bool:
        return kind in cls._message_templates

    @classmethod
    def list_checks(cls) -> list[str]:
        """List all registered check names."""
        return sorted(cls._checks.keys())

    @classmethod
    def list_field_types(cls) -> list[str]:
        """List all registered field type names."""
        return sorted(cls._field_types.keys())

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @classmethod
    def seal(cls) -> None:
        """End the bootstrap phase. Further registrations are rejected."""
        cls._sealed = True

    @classmethod
    def is_sealed(cls) -> bool:
        return cls._sealed

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations and unseal. Primarily for testing."""
        cls._checks.clear()
        cls._field_types.clear()
        cls._messages.clear()
        cls._message_templates.clear()
        cls._container_templates.clear()
        cls._sealed = False


def check(name: str) -> Callable[[CheckFn], CheckFn]:
    """Decorator to register a check predicate.

    Usage:
        @check("postalcodeBE")
        def postalcode_be(value) -> bool:
            ...
    """

    def decorator(fn: CheckFn) -> CheckFn:
        CheckRegistry.register_check(name, fn)
        return fn

    return decorator
