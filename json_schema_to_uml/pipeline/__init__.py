"""
Pipeline - JSON Schema to UML class model.

1. Phase 1 (Loader): Read documents, skipping invalid ones
2. Phase 2 (Parser): Classify each schema object into a node kind
3. Phase 3 (Analyzer): Create concepts and record pending edges
4. Phase 4 (Resolver): Bind pending edges once the corpus is complete
5. Phase 5 (Exporter): Optional rendering of the model (PlantUML)
"""

from __future__ import annotations

from .config import AnalyzerConfig, OutputConfig, OutputMode
from .exporters import AtomicWriter, ExportError, PlantUmlExporter
from .generator import AnalysisResult, JsonSchemaToUml

__all__ = [
    "JsonSchemaToUml",
    "AnalysisResult",
    "AnalyzerConfig",
    "OutputConfig",
    "OutputMode",
    "PlantUmlExporter",
    "AtomicWriter",
    "ExportError",
]
