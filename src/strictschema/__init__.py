"""strictschema: compile JSON Schema for structured-output generation."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("strictschema")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from strictschema.api import build_response_format, compile_schema, load_schema
from strictschema.contracts import CompileIssue, CompileResult
from strictschema.codes import PruneCode
from strictschema.kernel.node import SchemaNode

__all__ = [
    "__version__",
    "build_response_format",
    "compile_schema",
    "load_schema",
    "CompileIssue",
    "CompileResult",
    "PruneCode",
    "SchemaNode",
]
