"""Form definitions and headless collaborators.

Usage:
    from formvalidate.forms import FormDefinitionLoader, HeadlessRenderer, StaticLocator

    loader = FormDefinitionLoader(Path("forms"))
    loader.load_all()
"""

from formvalidate.forms.headless import (
    FieldDisplay,
    HeadlessRenderer,
    StaticField,
    StaticLocator,
)
from formvalidate.forms.loader import (
    FieldDefinition,
    FormDefinition,
    FormDefinitionLoader,
)

__all__ = [
    "FieldDefinition",
    "FieldDisplay",
    "FormDefinition",
    "FormDefinitionLoader",
    "HeadlessRenderer",
    "StaticField",
    "StaticLocator",
]
