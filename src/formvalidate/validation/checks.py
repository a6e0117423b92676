"""Built-in checks.

Each check is a pure predicate `(value, *field_metadata) -> bool`:
- required: Field must have a non-empty value
- length: String length within optional min/max bounds
- number: Signed number, optional thousands separators and fraction
- email: Single-line email address
- phoneNL: Dutch phone number (international or trunk prefix)
- postalcodeNL: Dutch postal code
"""

import re
from typing import Any

from formvalidate.validation.registry import CheckRegistry


# =============================================================================
# Format Patterns
# =============================================================================

# Email: WHATWG "valid e-mail address", with at least one dot in the host
_LABEL = r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@" + _LABEL + r"(?:\." + _LABEL + r")+"
)

# Number: "-1,234.5", "42", ".5"; at least one digit
NUMBER_PATTERN = re.compile(
    r"[-+]?(?=\.?\d)(?:\d{1,3}(?:,\d{3})+|\d+)?(?:\.\d+)?"
)

# Dutch phone: +31 / 0031 / 0, then 9 digits, first non-zero
PHONE_NL_PATTERN = re.compile(
    r"(?:(?:\+|00(?:\s|\s?-\s?)?)31(?:\s|\s?-\s?)?(?:\(0\)[-\s]?)?|0)"
    r"[1-9](?:(?:\s|\s?-\s?)?[0-9]){8}"
)

# Dutch postal code: "1234 AB"
POSTALCODE_NL_PATTERN = re.compile(r"[1-9][0-9]{3}\s?[a-zA-Z]{2}")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _as_bound(bound: Any) -> int | None:
    """Convert a length bound to int. Missing or malformed bounds are None.

    HTML attributes arrive as strings and browsers report -1 for an unset
    maxlength, so both are accepted.
    """
    if bound is None or isinstance(bound, bool):
        return None
    if isinstance(bound, str):
        bound = bound.strip()
        if not bound.isdecimal():
            return None
        return int(bound)
    if isinstance(bound, (int, float)) and bound >= 0:
        return int(bound)
    return None


# =============================================================================
# Checks
# =============================================================================


def required(value: Any) -> bool:
    """Pass iff the value is non-empty.

    Booleans (checkbox groups) pass when true; lists pass when non-empty;
    everything else passes when its trimmed text is non-empty.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (list, tuple)):
        return len(value) > 0
    return _as_text(value).strip() != ""


def length(value: Any, minlength: Any = None, maxlength: Any = None) -> bool:
    """Pass iff len(value) is within the bounds. Absent bounds never fail."""
    size = len(_as_text(value))
    min_bound = _as_bound(minlength)
    max_bound = _as_bound(maxlength)

    if min_bound is not None and size < min_bound:
        return False
    if max_bound is not None and size > max_bound:
        return False
    return True


def email(value: Any) -> bool:
    return EMAIL_PATTERN.fullmatch(_as_text(value)) is not None


def number(value: Any) -> bool:
    return NUMBER_PATTERN.fullmatch(_as_text(value).strip()) is not None


def phone_nl(value: Any) -> bool:
    return PHONE_NL_PATTERN.fullmatch(_as_text(value).strip()) is not None


def postalcode_nl(value: Any) -> bool:
    """Optional format check: empty values pass, required decides those."""
    text = _as_text(value).strip()
    if not text:
        return True
    return POSTALCODE_NL_PATTERN.fullmatch(text) is not None


BUILTIN_CHECKS = {
    "required": required,
    "length": length,
    "number": number,
    "email": email,
    "phoneNL": phone_nl,
    "postalcodeNL": postalcode_nl,
}


def register_builtin_checks() -> None:
    """Register the built-in checks. Called once at application startup."""
    for name, predicate in BUILTIN_CHECKS.items():
        CheckRegistry.register_check(name, predicate)
