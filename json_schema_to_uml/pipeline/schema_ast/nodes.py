"""
AST (Abstract Syntax Tree) node definitions for JSON Schema.

Each JSON object of a schema document is classified into exactly one of a
closed set of node kinds before the analyzer looks at it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class SchemaNode:
    """Base class for all AST nodes."""

    # Location of the node inside its document as a tuple of pointer segments
    pointer: tuple[str, ...] = ()

    # Documentation keywords
    title: str | None = None
    description: str | None = None

    # Names listed in "required"
    required: list[str] = field(default_factory=list)

    # Entries of "definitions", each one an independent root schema
    definitions: dict[str, SchemaNode] = field(default_factory=dict)

    # Declared "id" of the node, if any
    id: str | None = None

    # A type array with a "null" member
    nullable: bool = False

    @property
    def path(self) -> str:
        return "#/" + "/".join(self.pointer) if self.pointer else "#"

    @property
    def comments(self) -> list[str]:
        """Documentation rendered as annotation bodies."""
        comments = []
        if self.title:
            comments.append(f"Title: {self.title}")
        if self.description:
            comments.append(f"Description: {self.description}")
        return comments


@dataclass
class EmptySchema(SchemaNode):
    """A node with no keyword that maps to a model element."""


@dataclass
class ObjectSchema(SchemaNode):
    """An object type (declared `type: object` or carrying `properties`)."""

    properties: dict[str, SchemaNode] = field(default_factory=dict)


@dataclass
class AllOfSchema(SchemaNode):
    """Conjunction: `$ref` parts become superclasses, `properties` parts are merged."""

    parts: list[SchemaNode] = field(default_factory=list)


@dataclass
class VariantSchema(SchemaNode):
    """Base for `oneOf` / `anyOf` variant sets."""

    keyword = ""
    options: list[SchemaNode] = field(default_factory=list)


@dataclass
class OneOfSchema(VariantSchema):
    """Exclusive variant set."""

    keyword = "oneOf"


@dataclass
class AnyOfSchema(VariantSchema):
    """Inclusive variant set."""

    keyword = "anyOf"


@dataclass
class ReferenceSchema(SchemaNode):
    """A `$ref` (unresolved reference)."""

    ref: str = ""


@dataclass
class EnumSchema(SchemaNode):
    """An `enum`, optionally alongside a primitive `type`."""

    values: list[Any] = field(default_factory=list)
    type_name: str | None = None


@dataclass
class ArraySchema(SchemaNode):
    """An array type. Only the first schema of a tuple-style `items` is kept."""

    items: SchemaNode | None = None
    min_items: int | None = None
    max_items: int | None = None


@dataclass
class PrimitiveSchema(SchemaNode):
    """A primitive type (string, integer, number, boolean, null)."""

    type_name: str = ""
    format: str | None = None

    # Validation keywords
    min_length: int | None = None
    max_length: int | None = None
    pattern: str | None = None
    minimum: float | None = None
    maximum: float | None = None
    # Numbers (draft-06 and later) or booleans (draft-04)
    exclusive_minimum: float | bool | None = None
    exclusive_maximum: float | bool | None = None
    multiple_of: float | None = None
