"""
Configuration for the JSON Schema to UML pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to check the rendered diagram before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class AnalyzerConfig:
    """Configuration options for schema analysis and export."""

    # Name of the model, also used for the root namespace
    model_name: str = "model"

    # Skip documents that are not valid JSON Schemas
    validate_documents: bool = True

    # Files considered when traversing a folder
    file_suffixes: list[str] = field(default_factory=lambda: [".json"])

    # Suffix scheme for generated variant subclasses ("letters" or "numbers")
    variant_labels: str = "letters"

    # Name of the placeholder concept for unresolved references
    unknown_name: str = "Unknown"

    # Add generation comment at top of exported file
    add_generation_comment: bool = True

    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> AnalyzerConfig:
        """Create a config from a dictionary."""
        config = AnalyzerConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        if config.variant_labels not in ("letters", "numbers"):
            raise ValueError(f"variant_labels must be 'letters' or 'numbers', got {config.variant_labels!r}")
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "model_name": self.model_name,
            "validate_documents": self.validate_documents,
            "file_suffixes": self.file_suffixes,
            "variant_labels": self.variant_labels,
            "unknown_name": self.unknown_name,
            "add_generation_comment": self.add_generation_comment,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
