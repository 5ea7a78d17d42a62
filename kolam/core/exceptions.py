"""
Custom exceptions for the Kolam animator.
"""


class KolamError(Exception):
    """Base exception for all Kolam errors."""

    def __init__(self, message: str, code: str = "KOLAM_ERROR") -> None:
        self.message = message
        self.code = code
        super().__init__(self.message)


class InvalidPatternIndexError(KolamError):
    """Pattern selection outside the catalogue."""

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__(
            f"Pattern index {index} out of range (0..{count - 1})",
            code="INVALID_PATTERN_INDEX"
        )


class NoSurfaceError(KolamError):
    """Drawing surface unavailable."""

    def __init__(self, message: str = "Drawing surface unavailable") -> None:
        super().__init__(message, code="NO_SURFACE")


class EmptyStrokeError(KolamError):
    """Generator produced a stroke with too few points for its kind."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="EMPTY_STROKE")


class ValidationError(KolamError):
    """Invalid parameter values."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
