"""Template-related exception classes."""


class TemplateError(Exception):
    """Raised when a template cannot be compiled or rendered."""

    pass
