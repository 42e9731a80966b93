"""Errors raised while reading and querying manifests."""
from typing import Any


class ManifestError(Exception):
    """Base class for manifest errors."""
    pass


class ParseError(ManifestError):
    """Raised when a manifest cannot be read or a document is malformed."""
    pass


class DuplicateResourceError(ParseError):
    """Raised when two documents share the same kind and name."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"Duplicate resource {kind}/{name}")
        self.kind = kind
        self.name = name


class TypeMismatchError(ManifestError):
    """Raised when a lookup asks for a model the stored resource is not."""

    def __init__(self, kind: str, name: str, expected: type, actual: Any):
        super().__init__(
            f"{kind}/{name} is a {type(actual).__name__}, not a {expected.__name__}"
        )
        self.kind = kind
        self.name = name


class AssertionMismatch(AssertionError):
    """Raised when an expected field value does not match the manifest."""

    def __init__(self, field: str, expected: Any, actual: Any, detail: str = ""):
        message = f"{field}: expected {expected!r}, got {actual!r}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
        self.field = field
        self.expected = expected
        self.actual = actual
