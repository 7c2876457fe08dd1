"""
Schema analyzer that turns the AST of each document into model elements.

Concepts are registered in the symbol table as soon as they are created,
before their properties are expanded, so recursive references resolve.
Every reference whose target may not exist yet is recorded as a pending
edge and bound later by the resolution pass.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ...errors import DuplicateDocumentError
from ...utils import capitalize_first
from ..config import AnalyzerConfig
from ..schema_ast.nodes import (
    AllOfSchema,
    ArraySchema,
    EmptySchema,
    EnumSchema,
    ObjectSchema,
    PrimitiveSchema,
    ReferenceSchema,
    SchemaNode,
    VariantSchema,
)
from ..schema_ast.parser import SchemaParser
from .constraints import ConstraintGenerator
from .model_nodes import (
    UNBOUNDED,
    Association,
    Concept,
    Namespace,
    PendingAssociationEdge,
    PendingEdges,
    PendingSuperclassEdge,
    Property,
    is_single_valued,
)
from .reference import SchemaReference
from .symbol_table import SymbolTable
from .variants import VariantSynthesizer

logger = logging.getLogger(__name__)

# Primitive type names of the model, by JSON Schema type
PRIMITIVE_TYPE_MAP = {
    "string": "String",
    "integer": "Integer",
    "number": "Integer",
    "boolean": "Boolean",
}

DATE_TYPE = "Date"


@dataclass(frozen=True)
class AnalysisContext:
    """Traversal context threaded through every recursive call."""

    namespace: Namespace
    document: SchemaReference

    def reference(self, node: SchemaNode) -> SchemaReference:
        """Canonical reference of a node of the current document."""
        return self.document.child(*node.pointer)


class SchemaAnalyzer:
    """Analyzes schema documents and builds the model."""

    def __init__(
        self,
        config: AnalyzerConfig,
        symbol_table: SymbolTable,
        pending: PendingEdges,
    ):
        """
        Initialize the analyzer.

        Args:
            config: Analysis configuration
            symbol_table: Table receiving every created concept
            pending: Arena receiving the edges to resolve after analysis
        """
        self.config = config
        self.symbol_table = symbol_table
        self.pending = pending
        # Document key -> file the document was read from
        self.documents: dict[SchemaReference, str] = {}
        self.parser = SchemaParser()
        self.constraints = ConstraintGenerator()
        self.variants = VariantSynthesizer(self, config.variant_labels)

    def analyze_document(self, schema: dict[str, Any], file_name: str, namespace: Namespace) -> list[Concept]:
        """
        Analyze one schema document.

        The root concept is named after the file (up to its first dot) unless
        the document declares an `id`.

        Args:
            schema: The parsed JSON document
            file_name: Path of the document relative to the corpus root
                (e.g. "staff/employee.json"); its relative `$ref`s resolve
                against its folder
            namespace: Namespace receiving the document's elements

        Returns:
            The concepts created for the document root and its definitions

        Raises:
            DuplicateDocumentError: If another document already has the same key
            InvalidSchemaError: If the document has an unusable shape
            MalformedReferenceError: If an `id` or `$ref` cannot be normalized
        """
        root = self.parser.parse(schema)

        name = Path(file_name).name.split(".", 1)[0]
        document = SchemaReference.for_document(file_name)
        if root.id is not None:
            declared = SchemaReference.parse(root.id, document)
            name = declared.digest_id_name()
            if declared.document:
                document = declared.root

        if document in self.documents:
            raise DuplicateDocumentError(document, self.documents[document])
        self.documents[document] = file_name

        logger.debug("Analyzing document %s as %s", file_name, document)
        context = AnalysisContext(namespace=namespace, document=document)
        return self.analyze_root(name, root, context)

    def analyze_root(self, name: str, node: SchemaNode, context: AnalysisContext) -> list[Concept]:
        """Analyze a document root or a `definitions` entry (and its own definitions)."""
        concepts = []
        if not isinstance(node, EmptySchema):
            concepts.append(self.analyze_object(name, node, context, bare_name=True))

        for key, definition in node.definitions.items():
            concepts.extend(self.analyze_root(key, definition, context))

        return concepts

    def create_concept(
        self,
        name: str,
        node: SchemaNode,
        context: AnalysisContext,
        abstract: bool = False,
        bare_name: bool = False,
    ) -> Concept:
        """
        Create a concept for a node and register it right away.

        Only document roots and `definitions` entries are registered under
        their bare name, so a fallback lookup never lands on an inline object.
        """
        reference = context.reference(node)
        concept = context.namespace.create_concept(capitalize_first(name), reference=reference, abstract=abstract)
        self.symbol_table.register(reference, concept, name if bare_name else None)
        return concept

    def analyze_object(self, name: str, node: SchemaNode, context: AnalysisContext, bare_name: bool = False) -> Concept:
        """
        Create the concept for a node and expand its content.

        Args:
            name: Name the concept derives from (capitalized on creation)
            node: The schema node
            context: Current traversal context
            bare_name: Whether the concept is also reachable by its bare name

        Returns:
            The created concept
        """
        concept = self.create_concept(name, node, context, bare_name=bare_name)
        concept.comments.extend(node.comments)
        required = list(node.required)

        if isinstance(node, AllOfSchema):
            for part in node.parts:
                if isinstance(part, ReferenceSchema):
                    self.add_pending_superclass(concept, part, context)
                elif isinstance(part, ObjectSchema):
                    self.analyze_properties(concept, part, context)
                    required.extend(part.required)
                else:
                    logger.debug("Ignoring allOf part %s of %s", part.path, concept.name)
        elif isinstance(node, VariantSchema):
            self.variants.synthesize_hierarchy(concept, node, context)
        elif isinstance(node, ObjectSchema):
            self.analyze_properties(concept, node, context)
        elif isinstance(node, ReferenceSchema):
            # An alias of another schema specializes it
            self.add_pending_superclass(concept, node, context)
        elif isinstance(node, (PrimitiveSchema, ArraySchema, EnumSchema)):
            # Not really an object: wrap the schema in a single attribute, the concept keeps the comments
            self.analyze_property(concept, f"{concept.name}Attribute", node, context, with_comments=False)

        self.apply_required(concept, required)
        return concept

    def analyze_properties(self, concept: Concept, node: ObjectSchema, context: AnalysisContext) -> None:
        for property_name, property_node in node.properties.items():
            self.analyze_property(concept, property_name, property_node, context)

    def analyze_property(
        self,
        concept: Concept,
        property_name: str,
        node: SchemaNode,
        context: AnalysisContext,
        with_comments: bool = True,
    ) -> Property | Association | PendingAssociationEdge | None:
        """
        Expand a property schema into a property, an association or a pending edge.

        A name already held by a member of the concept (or by one of its
        pending associations) keeps its first declaration.

        Returns:
            The created element, or None when the schema has no model counterpart
        """
        if self.has_member(concept, property_name):
            logger.warning("%s already has a member named %r, ignoring %s", concept.name, property_name, node.path)
            return None

        if isinstance(node, EnumSchema):
            element = self._enum_property(concept, property_name, node, context)
        elif isinstance(node, PrimitiveSchema):
            element = self._primitive_property(concept, property_name, node, with_constraints=True)
        elif isinstance(node, (ObjectSchema, AllOfSchema)):
            target = self.analyze_object(capitalize_first(property_name), node, context)
            element = concept.create_association(property_name, target, 0, 1)
        elif isinstance(node, ArraySchema):
            element = self._array_property(concept, property_name, node, context)
        elif isinstance(node, ReferenceSchema):
            element = self.add_pending_association(concept, property_name, node, context, 0, 1)
        elif isinstance(node, VariantSchema):
            upper = 1 if node.keyword == "oneOf" else UNBOUNDED
            element = self.variants.synthesize_property(concept, property_name, node, context, 1, upper)
        else:
            logger.debug("Property %s.%s has no type, skipping", concept.name, property_name)
            element = None

        if element is not None and with_comments:
            element.comments.extend(node.comments)
        return element

    def _primitive_property(
        self,
        concept: Concept,
        property_name: str,
        node: PrimitiveSchema,
        with_constraints: bool,
    ) -> Property | None:
        if node.type_name not in PRIMITIVE_TYPE_MAP:
            logger.debug("Property %s.%s of type %r is not modelled", concept.name, property_name, node.type_name)
            return None

        type_name = PRIMITIVE_TYPE_MAP[node.type_name]
        if node.type_name == "string" and node.format == "date-time":
            type_name = DATE_TYPE

        prop = Property(
            name=property_name,
            type=concept.namespace.primitive_type(type_name),
            nullable=node.nullable,
        )
        if concept.add_property(prop) is not prop:
            # Rejected duplicate: its keywords must not constrain the kept member
            return None

        if node.pattern is not None:
            # TODO translate "pattern" once OCL regular expression support is settled
            prop.unimplemented.append("pattern")
            logger.debug("Keyword 'pattern' of %s.%s is not translated", concept.name, property_name)

        if with_constraints:
            for rule in self.constraints.create_rules(property_name, node):
                concept.add_constraint(rule.build(concept.name))

        return prop

    def _enum_property(
        self,
        concept: Concept,
        property_name: str,
        node: EnumSchema,
        context: AnalysisContext,
    ) -> Property | None:
        literals = [value if isinstance(value, str) else json.dumps(value) for value in node.values]
        enumeration = context.namespace.create_enumeration(f"{property_name}Enum", literals)
        prop = Property(name=property_name, type=enumeration, nullable=node.nullable)
        return prop if concept.add_property(prop) is prop else None

    def _array_property(
        self,
        concept: Concept,
        property_name: str,
        node: ArraySchema,
        context: AnalysisContext,
    ) -> Property | Association | PendingAssociationEdge | None:
        items = node.items
        lower = node.min_items if node.min_items is not None else 0
        upper = node.max_items if node.max_items is not None else UNBOUNDED
        element = None

        if items is None:
            logger.warning("Array property %s.%s declares no items, skipping", concept.name, property_name)
        elif isinstance(items, EnumSchema):
            element = self._enum_property(concept, property_name, items, context)
        elif isinstance(items, PrimitiveSchema):
            element = self._primitive_property(concept, property_name, items, with_constraints=False)
        elif isinstance(items, VariantSchema):
            element = self.variants.synthesize_property(concept, property_name, items, context, lower, upper)
        elif isinstance(items, (ObjectSchema, AllOfSchema)):
            target = self.analyze_object(capitalize_first(property_name), items, context)
            element = concept.create_association(property_name, target, lower, upper)
        elif isinstance(items, ReferenceSchema):
            element = self.add_pending_association(concept, property_name, items, context, lower, upper)
        else:
            logger.debug("Items of %s.%s are not modelled", concept.name, property_name)

        if isinstance(element, Property):
            element.upper = UNBOUNDED
            # Explicit bounds on the array tighten the multi-valued property
            if node.max_items is not None:
                element.upper = node.max_items
            if node.min_items is not None:
                element.lower = node.min_items

        return element

    def has_member(self, concept: Concept, name: str) -> bool:
        """Whether a property, an association or a pending association of the concept holds the name."""
        if concept.has_member(name):
            return True
        return any(edge.end_name == name for edge in self.pending.associations_of(concept))

    def add_pending_superclass(self, concept: Concept, node: ReferenceSchema, context: AnalysisContext) -> None:
        target = SchemaReference.parse(node.ref, context.document)
        self.pending.superclasses.append(PendingSuperclassEdge(owner=concept, target=target))

    def add_pending_association(
        self,
        concept: Concept,
        property_name: str,
        node: ReferenceSchema,
        context: AnalysisContext,
        lower: int,
        upper: int | None,
    ) -> PendingAssociationEdge:
        target = SchemaReference.parse(node.ref, context.document)
        edge = PendingAssociationEdge(
            owner=concept,
            target=target,
            end_name=property_name,
            lower=lower,
            upper=upper,
            composite=True,
        )
        self.pending.associations.append(edge)
        return edge

    def apply_required(self, concept: Concept, required: list[str]) -> None:
        """
        Set the lower bound of required single-valued members to 1.

        Multi-valued members (upper bound above 1 or unbounded) are left untouched.
        """
        for name in required:
            prop = concept.get_property(name)
            if prop is not None:
                if is_single_valued(prop.upper):
                    prop.lower = 1
                continue

            association = concept.get_association(name)
            if association is not None:
                if is_single_valued(association.target_end.upper):
                    association.target_end.lower = 1
                continue

            for edge in self.pending.associations_of(concept):
                if edge.end_name == name and is_single_valued(edge.upper):
                    edge.lower = 1
