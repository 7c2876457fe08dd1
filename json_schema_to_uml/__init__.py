"""JSON Schema to UML

A Python package turning a corpus of JSON Schema documents into a UML-like
class model (concepts, attributes, associations, enumerations, inheritance
and OCL constraints), with PlantUML export.
"""

__version__ = "1.0.0"

from .errors import (
    DuplicateConceptError,
    DuplicateDocumentError,
    InvalidDocumentWarning,
    InvalidSchemaError,
    JsonSchemaToUmlError,
    MalformedReferenceError,
    UnresolvedReferenceWarning,
)
from .pipeline import (
    AnalysisResult,
    AnalyzerConfig,
    AtomicWriter,
    ExportError,
    JsonSchemaToUml,
    OutputConfig,
    OutputMode,
    PlantUmlExporter,
)

__all__ = [
    "JsonSchemaToUml",
    "AnalysisResult",
    "AnalyzerConfig",
    "OutputConfig",
    "OutputMode",
    "PlantUmlExporter",
    "AtomicWriter",
    "ExportError",
    "JsonSchemaToUmlError",
    "MalformedReferenceError",
    "DuplicateConceptError",
    "DuplicateDocumentError",
    "InvalidSchemaError",
    "InvalidDocumentWarning",
    "UnresolvedReferenceWarning",
]
