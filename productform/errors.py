"""
Exceptions raised by the product form engine.

Validation failures are never raised: they are reported as data
(a field-name -> message dict) so the page can display them.
"""


class FormEngineError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(FormEngineError):
    """The state -> cities lookup table is malformed. Raised once at startup."""


class SubmitError(FormEngineError):
    """The submit collaborator failed. The form keeps its values."""


class SubmissionInProgressError(FormEngineError):
    """submit() was called while a previous submit is still running."""


class FieldDisabledError(FormEngineError):
    """A value was set on a field that is currently disabled."""

    def __init__(self, name):
        super().__init__(f"Field '{name}' is disabled")
        self.name = name


class UnknownFieldError(FormEngineError, KeyError):
    """The field name is not part of the product form."""

    def __init__(self, name):
        super().__init__(f"Unknown field '{name}'")
        self.name = name

    def __str__(self):
        return self.args[0]
