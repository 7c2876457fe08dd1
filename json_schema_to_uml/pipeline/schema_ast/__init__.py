"""
Schema AST (Abstract Syntax Tree) module.

Contains the AST node kinds and the parser classifying JSON Schema objects.
"""

from __future__ import annotations

from .nodes import (
    AllOfSchema,
    AnyOfSchema,
    ArraySchema,
    EmptySchema,
    EnumSchema,
    ObjectSchema,
    OneOfSchema,
    PrimitiveSchema,
    ReferenceSchema,
    SchemaNode,
    VariantSchema,
)
from .parser import SchemaParser

__all__ = [
    "SchemaNode",
    "EmptySchema",
    "ObjectSchema",
    "AllOfSchema",
    "VariantSchema",
    "OneOfSchema",
    "AnyOfSchema",
    "ReferenceSchema",
    "EnumSchema",
    "ArraySchema",
    "PrimitiveSchema",
    "SchemaParser",
]
