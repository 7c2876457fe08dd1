"""
Pipeline generator orchestrating the conversion of a schema corpus.

1. Phase 1 (Loader): Read and validate each document
2. Phase 2 (Analyzer): Build concepts, registering pending edges
3. Phase 3 (Resolver): Bind every pending edge once the corpus is complete
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import (
    DuplicateDocumentError,
    InvalidDocumentWarning,
    InvalidSchemaError,
    JsonSchemaToUmlError,
    MalformedReferenceError,
    UnresolvedReferenceWarning,
)
from .analyzer import (
    Association,
    Concept,
    Namespace,
    PendingEdges,
    ReferenceResolver,
    SchemaAnalyzer,
    SymbolTable,
)
from .config import AnalyzerConfig
from .loader import SchemaLoader

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """The finished model handed to persistence collaborators."""

    model: Namespace
    symbol_table: SymbolTable
    unknown: Concept
    skipped: list[InvalidDocumentWarning] = field(default_factory=list)
    unresolved: list[UnresolvedReferenceWarning] = field(default_factory=list)

    @property
    def concepts(self) -> list[Concept]:
        return list(self.model.iter_concepts())

    @property
    def associations(self) -> list[Association]:
        return [association for concept in self.model.iter_concepts() for association in concept.associations]

    def find_concept(self, name: str) -> Concept | None:
        return self.model.find_concept(name)


class JsonSchemaToUml:
    """Converts a file or folder of JSON Schemas into a class model.

    An instance performs a single run: documents are analyzed one at a
    time, then the resolution pass runs exactly once.
    """

    def __init__(self, config: AnalyzerConfig | None = None):
        self.config = config or AnalyzerConfig()
        self.model = Namespace(name=self.config.model_name)
        # Placeholder for references that never resolve
        self.unknown = self.model.create_concept(self.config.unknown_name)

        self.symbol_table = SymbolTable()
        self.pending = PendingEdges()
        self.loader = SchemaLoader(self.config)
        self.analyzer = SchemaAnalyzer(self.config, self.symbol_table, self.pending)
        self.skipped: list[InvalidDocumentWarning] = []
        self._result: AnalysisResult | None = None
        # Folder the document keys are relative to
        self._root: Path | None = None

    def launch(self, path: Path | str) -> AnalysisResult:
        """
        Analyze a file or a folder (recursively) and resolve references.

        Each folder becomes a namespace nested in its parent's. Documents are
        keyed by their path relative to `path` (or to its folder for a file).

        Args:
            path: Schema file or folder

        Returns:
            The resolved model

        Raises:
            FileNotFoundError: If the path does not exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"The file must exist: {path}")
        self._root = path if path.is_dir() else path.parent
        self.analyze(path, self.model)
        return self.resolve()

    def analyze(self, path: Path, namespace: Namespace) -> None:
        """Analyze a file, or push a namespace and analyze a folder's entries."""
        if self._result is not None:
            raise JsonSchemaToUmlError("References are already resolved, no more documents can be analyzed")

        if path.is_file():
            self._analyze_file(path, namespace)
        elif path.is_dir():
            folder_namespace = namespace.create_namespace(path.name)
            for entry in self.loader.entries(path):
                self.analyze(entry, folder_namespace)
        else:
            raise JsonSchemaToUmlError(f"Invalid input: {path}")

    def add_document(self, schema: dict[str, Any], file_name: str, namespace: Namespace | None = None) -> list[Concept]:
        """
        Analyze an already parsed document.

        Args:
            schema: The JSON Schema dictionary
            file_name: Path of the document relative to the corpus root, used to
                derive its key and the root concept name
            namespace: Target namespace (defaults to the model)

        Returns:
            The concepts created for the document
        """
        if self._result is not None:
            raise JsonSchemaToUmlError("References are already resolved, no more documents can be analyzed")
        return self.analyzer.analyze_document(schema, file_name, namespace or self.model)

    def resolve(self) -> AnalysisResult:
        """Run the resolution pass (once) and return the finished model."""
        if self._result is not None:
            return self._result

        report = ReferenceResolver(self.symbol_table, self.unknown).resolve(self.pending)
        self._result = AnalysisResult(
            model=self.model,
            symbol_table=self.symbol_table,
            unknown=self.unknown,
            skipped=list(self.skipped),
            unresolved=report.unresolved,
        )
        return self._result

    def _analyze_file(self, path: Path, namespace: Namespace) -> None:
        loaded = self.loader.load(path)
        if isinstance(loaded, InvalidDocumentWarning):
            self._skip(loaded)
            return

        document_path = path.relative_to(self._root).as_posix() if self._root is not None else loaded.file_name
        try:
            self.analyzer.analyze_document(loaded.content, document_path, namespace)
        except (MalformedReferenceError, InvalidSchemaError, DuplicateDocumentError) as e:
            # Elements created before the failure stay in the model
            self._skip(InvalidDocumentWarning(path, str(e)))

    def _skip(self, warning: InvalidDocumentWarning) -> None:
        logger.warning("Skipping %s", warning)
        self.skipped.append(warning)
