"""Custom exception hierarchy for bpesim errors."""


class BpeSimError(Exception):
    """Base exception for all bpesim errors."""


class EmptyInputError(BpeSimError):
    """Raised when preprocessing leaves no words to tokenize."""

    def __init__(self, message: str, *, variant: str | None = None) -> None:
        """Initialize with an optional variant name that gets appended to the message."""
        extra = " "
        if variant:
            extra += f"(variant: {variant}) "
        super().__init__(message + extra)
        self.variant = variant


class InvalidBudgetError(BpeSimError):
    """Raised when the requested vocabulary size is not a positive integer."""

    def __init__(self, message: str, *, max_vocab_size: object = None) -> None:
        extra = " "
        if max_vocab_size is not None:
            extra += f"(max vocab size: {max_vocab_size!r}) "
        super().__init__(message + extra)
        self.max_vocab_size = max_vocab_size


class VariantError(BpeSimError):
    """Raised when a model variant cannot be found or is malformed."""

    def __init__(
        self,
        message: str,
        *,
        invalid_name: str | None = None,
        available: list[str] | None = None,
    ) -> None:
        extra = " "
        if invalid_name:
            extra += f"(available: {available}) (got {invalid_name}) "
        super().__init__(message + extra)
        self.invalid_name = invalid_name
        self.available = available
