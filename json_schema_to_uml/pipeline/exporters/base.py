"""
Base class for model exporters.

Exporters are the persistence collaborators of the pipeline: they render
a resolved model into an interchange format through Jinja2 templates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import jinja2

from ...errors import JsonSchemaToUmlError
from ..config import AnalyzerConfig
from ..generator import AnalysisResult


class ExportError(JsonSchemaToUmlError):
    """Raised when a model cannot be exported.

    This can happen when:
    - The output file already exists and overwriting is not allowed
    - The rendered document fails its structural checks
    """


class ModelExporter(ABC):
    """Abstract base class for model exporters."""

    # Template directory name
    TEMPLATE_DIR: str = ""

    # File extension of the exported document
    FILE_EXTENSION: str = ""

    def __init__(self, config: AnalyzerConfig):
        """
        Initialize the exporter.

        Args:
            config: Pipeline configuration
        """
        self.config = config
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_DIR
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            keep_trailing_newline=True,
        )

    @abstractmethod
    def export(self, result: AnalysisResult, generation_comment: str = "") -> str:
        """
        Render a resolved model.

        Args:
            result: The analysis result
            generation_comment: Optional comment placed at the top of the document

        Returns:
            The exported document as a string
        """

    @abstractmethod
    def validate(self, content: str) -> None:
        """
        Check a rendered document before it is written.

        Raises:
            ExportError: If the document is not well formed
        """
