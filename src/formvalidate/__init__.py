"""formvalidate - declarative field validation for interactive forms."""

__version__ = "0.1.0"
