"""
Loading of schema documents from the filesystem.

A document that cannot be parsed as JSON, or that is not a valid JSON
Schema, is reported as an InvalidDocumentWarning value instead of being
fed to the analyzer.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft4Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from ..errors import InvalidDocumentWarning
from .config import AnalyzerConfig

logger = logging.getLogger(__name__)


@dataclass
class SchemaDocument:
    """A parsed, validated schema document."""

    path: Path
    content: dict[str, Any]

    @property
    def file_name(self) -> str:
        return self.path.name


class SchemaLoader:
    """Reads schema documents and lists folder contents."""

    def __init__(self, config: AnalyzerConfig):
        self.config = config

    def load(self, path: Path) -> SchemaDocument | InvalidDocumentWarning:
        """
        Read and check one document.

        Args:
            path: File to read

        Returns:
            The document, or the reason it has to be skipped
        """
        try:
            with open(path, encoding="utf-8") as f:
                content = json.load(f)
        except (OSError, UnicodeDecodeError) as e:
            return InvalidDocumentWarning(path, f"cannot be read: {e}")
        except json.JSONDecodeError as e:
            return InvalidDocumentWarning(path, f"is not a valid JSON file: {e}")

        if not isinstance(content, dict):
            return InvalidDocumentWarning(path, "is not a valid JSON Schema: the root must be an object")

        if self.config.validate_documents:
            problem = self.check_schema(content)
            if problem is not None:
                return InvalidDocumentWarning(path, f"is not a valid JSON Schema: {problem}")

        return SchemaDocument(path=path, content=content)

    def check_schema(self, schema: dict[str, Any]) -> str | None:
        """
        Validate a schema against its meta-schema.

        The meta-schema is chosen from `$schema`, draft-04 when absent.

        Returns:
            None when valid, otherwise a short description of the first error
        """
        validator_class = validator_for(schema, default=Draft4Validator)
        try:
            validator_class.check_schema(schema)
        except SchemaError as e:
            location = "/".join(str(p) for p in e.absolute_path)
            return f"{e.message} (at #/{location})" if location else e.message
        return None

    def entries(self, folder: Path) -> list[Path]:
        """Sub-folders and schema files of a folder, in a stable order."""
        entries = []
        for entry in sorted(folder.iterdir(), key=lambda p: p.name):
            if entry.name.startswith("."):
                continue
            if entry.is_dir():
                entries.append(entry)
            elif entry.suffix in self.config.file_suffixes:
                entries.append(entry)
            else:
                logger.debug("Ignoring %s", entry)
        return entries
