"""
JSON Schema parser that builds an AST.

Classifies every JSON object of a document into one node kind by matching
recognized keyword combinations, without resolving any reference.
"""

from __future__ import annotations

from typing import Any

from ...errors import InvalidSchemaError
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
)


class SchemaParser:
    """Parses JSON Schema into an AST."""

    # Primitive type names
    PRIMITIVE_TYPES = {"string", "integer", "number", "boolean", "null"}

    def parse(self, schema: dict[str, Any], pointer: tuple[str, ...] = ()) -> SchemaNode:
        """
        Parse a JSON Schema object into an AST node.

        Args:
            schema: The JSON Schema dictionary
            pointer: Location of the object inside its document

        Returns:
            Appropriate SchemaNode subclass

        Raises:
            InvalidSchemaError: If a recognized keyword has an unusable value
        """
        if not isinstance(schema, dict):
            raise InvalidSchemaError(self._path(pointer), f"expected a schema object, got {type(schema).__name__}")

        node = self._classify(schema, pointer)
        self._parse_common(node, schema, pointer)
        return node

    def _classify(self, schema: dict[str, Any], pointer: tuple[str, ...]) -> SchemaNode:
        type_name, nullable = self._declared_type(schema, pointer)

        if "$ref" in schema:
            node = ReferenceSchema(ref=schema["$ref"])
        elif "allOf" in schema:
            node = AllOfSchema(parts=self._parse_list(schema, "allOf", pointer))
        elif "oneOf" in schema:
            node = OneOfSchema(options=self._parse_list(schema, "oneOf", pointer))
        elif "anyOf" in schema:
            node = AnyOfSchema(options=self._parse_list(schema, "anyOf", pointer))
        elif "enum" in schema:
            node = self._parse_enum(schema, type_name, pointer)
        elif type_name == "array":
            node = self._parse_array(schema, pointer)
        elif type_name == "object" or "properties" in schema:
            node = ObjectSchema(properties=self._parse_properties(schema, pointer))
        elif type_name in self.PRIMITIVE_TYPES:
            node = self._parse_primitive(schema, type_name)
        elif type_name is not None:
            raise InvalidSchemaError(self._path(pointer), f"unknown type {type_name!r}")
        else:
            node = EmptySchema()

        node.pointer = pointer
        node.nullable = nullable
        return node

    def _parse_common(self, node: SchemaNode, schema: dict[str, Any], pointer: tuple[str, ...]) -> None:
        """Parse keywords shared by every node kind."""
        node.title = self._optional_str(schema, "title", pointer)
        node.description = self._optional_str(schema, "description", pointer)
        node.id = self._optional_str(schema, "id", pointer)

        required = schema.get("required", [])
        # Draft-03 style boolean "required" is not a list of names
        if isinstance(required, list):
            node.required = [str(name) for name in required]

        definitions = schema.get("definitions", {})
        if not isinstance(definitions, dict):
            raise InvalidSchemaError(self._path(pointer), "'definitions' must be an object")
        for name, definition in definitions.items():
            node.definitions[name] = self.parse(definition, pointer + ("definitions", name))

    def _declared_type(self, schema: dict[str, Any], pointer: tuple[str, ...]) -> tuple[str | None, bool]:
        """Return the declared type name and whether a "null" alternative is present."""
        if "type" not in schema:
            return None, False

        type_value = schema["type"]
        if isinstance(type_value, str):
            return type_value, False

        if isinstance(type_value, list) and type_value and all(isinstance(t, str) for t in type_value):
            # Only the first type is modelled, "null" marks the property nullable
            nullable = "null" in type_value[1:]
            first = type_value[0]
            if first == "null" and len(type_value) > 1:
                return type_value[1], True
            return first, nullable

        raise InvalidSchemaError(self._path(pointer), f"unusable 'type' value {type_value!r}")

    def _parse_list(self, schema: dict[str, Any], keyword: str, pointer: tuple[str, ...]) -> list[SchemaNode]:
        values = schema[keyword]
        if not isinstance(values, list):
            raise InvalidSchemaError(self._path(pointer), f"'{keyword}' must be an array")
        return [self.parse(value, pointer + (keyword, str(i))) for i, value in enumerate(values)]

    def _parse_properties(self, schema: dict[str, Any], pointer: tuple[str, ...]) -> dict[str, SchemaNode]:
        properties = schema.get("properties", {})
        if not isinstance(properties, dict):
            raise InvalidSchemaError(self._path(pointer), "'properties' must be an object")
        return {name: self.parse(prop, pointer + ("properties", name)) for name, prop in properties.items()}

    def _parse_enum(self, schema: dict[str, Any], type_name: str | None, pointer: tuple[str, ...]) -> EnumSchema:
        values = schema["enum"]
        if not isinstance(values, list):
            raise InvalidSchemaError(self._path(pointer), "'enum' must be an array")
        return EnumSchema(values=list(values), type_name=type_name)

    def _parse_array(self, schema: dict[str, Any], pointer: tuple[str, ...]) -> ArraySchema:
        items_schema = schema.get("items")
        items = None

        if isinstance(items_schema, list):
            # Tuple-style items: a multi-valued attribute has a single type
            if items_schema:
                items = self.parse(items_schema[0], pointer + ("items", "0"))
        elif items_schema is not None:
            items = self.parse(items_schema, pointer + ("items",))

        return ArraySchema(
            items=items,
            min_items=self._optional_int(schema, "minItems", pointer),
            max_items=self._optional_int(schema, "maxItems", pointer),
        )

    def _parse_primitive(self, schema: dict[str, Any], type_name: str) -> PrimitiveSchema:
        node = PrimitiveSchema(type_name=type_name, format=schema.get("format"))

        if type_name == "string":
            node.min_length = schema.get("minLength")
            node.max_length = schema.get("maxLength")
            node.pattern = schema.get("pattern")

        if type_name in ("integer", "number"):
            node.minimum = schema.get("minimum")
            node.maximum = schema.get("maximum")
            node.exclusive_minimum = schema.get("exclusiveMinimum")
            node.exclusive_maximum = schema.get("exclusiveMaximum")
            node.multiple_of = schema.get("multipleOf")

        return node

    def _optional_str(self, schema: dict[str, Any], keyword: str, pointer: tuple[str, ...]) -> str | None:
        value = schema.get(keyword)
        if value is None or isinstance(value, str):
            return value
        raise InvalidSchemaError(self._path(pointer), f"'{keyword}' must be a string")

    def _optional_int(self, schema: dict[str, Any], keyword: str, pointer: tuple[str, ...]) -> int | None:
        value = schema.get(keyword)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSchemaError(self._path(pointer), f"'{keyword}' must be a non-negative integer")
        return value

    @staticmethod
    def _path(pointer: tuple[str, ...]) -> str:
        return "#/" + "/".join(pointer) if pointer else "#"
