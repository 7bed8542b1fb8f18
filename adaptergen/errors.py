"""Errors raised while generating an adapter.

Fatal errors (FetchError, WriteError, EmptySpecError, InvalidSpecError)
abort the run before anything is persisted. ReferenceResolutionError and
OperationParseError are caught inside the pipeline and recorded as
diagnostics.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class GeneratorError(Exception):
    """Base class for all adapter generation errors."""


class FetchError(GeneratorError):
    """The OpenAPI spec could not be fetched or parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to fetch OpenAPI spec from {source}: {reason}")


class EmptySpecError(GeneratorError):
    """The OpenAPI spec declares no paths."""


class InvalidSpecError(GeneratorError):
    """A top-level section of the OpenAPI spec has the wrong shape."""


class ReferenceResolutionError(GeneratorError):
    """A $ref points at a component that does not exist."""

    def __init__(self, ref: str) -> None:
        self.ref = ref
        super().__init__(f"Unresolvable reference: {ref}")


class OperationParseError(GeneratorError):
    """A single (path, method) operation entry is malformed."""

    def __init__(self, method: str, path: str, reason: str) -> None:
        self.method = method
        self.path = path
        self.reason = reason
        super().__init__(f"{method.upper()} {path}: {reason}")


class WriteError(GeneratorError):
    """The adapter documents could not be written."""


@dataclass
class Diagnostics:
    """Non-fatal problems collected during one generation run."""

    skipped_operations: list[OperationParseError] = field(default_factory=list)
    unresolved_refs: list[str] = field(default_factory=list)

    def skip(self, error: OperationParseError) -> None:
        self.skipped_operations.append(error)

    def unresolved(self, ref: str) -> None:
        if ref not in self.unresolved_refs:
            self.unresolved_refs.append(ref)
