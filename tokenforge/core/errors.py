"""
TokenForge Core: Error and Warning Taxonomy.

Fatal conditions are exceptions deriving from TokenError. Non-fatal
conditions are TokenWarning records that are collected into reports and
logged, never raised.
"""
from typing import Optional, Sequence

from tokenforge.core.constants import ErrorCode


class TokenError(Exception):
    """Base exception for fatal token build errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize TokenError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class StructuralError(TokenError):
    """The source document is unparsable or not a well-formed token tree."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{message} (at {path})"
        super().__init__(message, ErrorCode.INVALID_INPUT)


class ResolutionError(TokenError):
    """Base class for reference resolution failures."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.DEPENDENCY_ERROR)


class CycleError(ResolutionError):
    """A chain of references loops back on itself."""

    def __init__(self, chain: Sequence[str]):
        self.chain = list(chain)
        super().__init__("Circular reference: " + " -> ".join(self.chain))


class UnresolvedReferenceError(ResolutionError):
    """A reference points at a path that is not in the token index."""

    def __init__(self, path: str, referrer: Optional[str] = None):
        self.path = path
        self.referrer = referrer
        message = f"Reference to unknown token {{{path}}}"
        if referrer:
            message += f" in {referrer}"
        super().__init__(message)


class ExpressionError(ResolutionError):
    """An arithmetic expression or embedded reference cannot be evaluated."""


class TransformError(TokenError):
    """Error during transformation."""

    def __init__(self, message: str, transform_name: Optional[str] = None):
        self.transform_name = transform_name
        super().__init__(message, ErrorCode.INTERNAL_ERROR)


class UnsupportedTransformValue(TransformError):
    """Input a value transform cannot convert; the value passes through."""


class FormatError(TokenError):
    """An emitter could not serialize its selection."""

    def __init__(self, message: str, format_name: Optional[str] = None):
        self.format_name = format_name
        super().__init__(message, ErrorCode.INTERNAL_ERROR)


class TokenWarning(UserWarning):
    """Base class for non-fatal findings collected during a run."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        return self.message


class CollectionMissingWarning(TokenWarning):
    """An expected collection is absent from the source document."""

    def __init__(self, collection: str):
        self.collection = collection
        super().__init__(f'"{collection}" - not found', path=collection)


class EmptyValueWarning(TokenWarning):
    """A leaf token has no literal value."""

    def __init__(self, path: str):
        super().__init__(f"Empty: {path}", path=path)


class TransformWarning(TokenWarning):
    """A value transform passed its input through unchanged."""

    def __init__(self, message: str, path: Optional[str] = None, transform_name: Optional[str] = None):
        self.transform_name = transform_name
        super().__init__(message, path=path)
