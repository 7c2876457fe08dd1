"""
Analyzer module.

Contains schema references, the symbol table, model nodes, the semantic
analyzer and the deferred resolution pass.
"""

from __future__ import annotations

from .analyzer import AnalysisContext, SchemaAnalyzer
from .model_nodes import (
    UNBOUNDED,
    Association,
    AssociationEnd,
    Concept,
    Constraint,
    Enumeration,
    Namespace,
    PendingAssociationEdge,
    PendingEdges,
    PendingSuperclassEdge,
    PrimitiveType,
    Property,
)
from .reference import SchemaReference
from .reference_resolver import ReferenceResolver, ResolutionReport
from .symbol_table import SymbolTable

__all__ = [
    "UNBOUNDED",
    "AnalysisContext",
    "Association",
    "AssociationEnd",
    "Concept",
    "Constraint",
    "Enumeration",
    "Namespace",
    "PendingAssociationEdge",
    "PendingEdges",
    "PendingSuperclassEdge",
    "PrimitiveType",
    "Property",
    "ReferenceResolver",
    "ResolutionReport",
    "SchemaAnalyzer",
    "SchemaReference",
    "SymbolTable",
]
