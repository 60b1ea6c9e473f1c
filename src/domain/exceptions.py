"""
Domain exceptions raised while turning uploaded batches into summaries.
Zero external dependencies.

RecordValidationError and its subclasses describe caller-input problems and
are mapped to validation errors by the use-cases. NullInputError signals a
programming error and surfaces as a computation failure.
"""


class PriceDataError(Exception):
    """Base class for all price-data errors."""


class RecordValidationError(PriceDataError, ValueError):
    """A batch line could not be turned into a PricePoint."""


class MalformedRecordError(RecordValidationError):
    pass


class MalformedNumberError(RecordValidationError):
    pass


class SymbolMismatchError(RecordValidationError):
    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(f"Expected symbol {expected}, but got {actual}")
        self.expected = expected
        self.actual = actual


class NullInputError(PriceDataError, TypeError):
    pass


class UnknownSortingModeError(PriceDataError, ValueError):
    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            f"Wrong sorting mode {name!r}. Available sorting modes: {', '.join(available)}"
        )
        self.name = name
        self.available = available
