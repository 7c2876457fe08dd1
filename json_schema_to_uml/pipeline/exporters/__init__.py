"""
Exporters module.

Renders resolved models and writes them to disk.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .base import ExportError, ModelExporter
from .plantuml_exporter import PlantUmlExporter

__all__ = [
    "AtomicWriter",
    "ExportError",
    "ModelExporter",
    "PlantUmlExporter",
]
