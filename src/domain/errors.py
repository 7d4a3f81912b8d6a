"""Errors surfaced by the fiscal engine."""


class FiscalEngineError(Exception):
    """Base class for errors raised by the fiscal engine."""


class InvalidSelectorError(FiscalEngineError):
    """Raised when a fiscal period selector cannot be resolved.

    Attributes:
        field: Selector field that failed validation.
        value: Offending raw value.
    """

    def __init__(self, field: str, value, message: str | None = None) -> None:
        self.field = field
        self.value = value
        super().__init__(
            message or f"Invalid period selector {field}: {value!r}"
        )


class MalformedInputError(FiscalEngineError):
    """Raised when the engine receives structurally invalid input."""


__all__ = ["FiscalEngineError", "InvalidSelectorError", "MalformedInputError"]
