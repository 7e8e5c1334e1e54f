"""Domain exceptions for the pipeline context."""


class InvalidBoardOperationError(ValueError):
    """Raised when an operation does not fit the board it is applied to."""
