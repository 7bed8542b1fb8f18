"""Generate registry adapter definitions from OpenAPI specs."""

from .assembler import GeneratedAdapter, assemble_adapter, generate_adapter
from .errors import (
    Diagnostics,
    EmptySpecError,
    FetchError,
    GeneratorError,
    InvalidSpecError,
    OperationParseError,
    ReferenceResolutionError,
    WriteError,
)

__all__ = [
    "Diagnostics",
    "EmptySpecError",
    "FetchError",
    "GeneratedAdapter",
    "GeneratorError",
    "InvalidSpecError",
    "OperationParseError",
    "ReferenceResolutionError",
    "WriteError",
    "assemble_adapter",
    "generate_adapter",
]
