"""
Variant hierarchies for `oneOf` and `anyOf`.

A variant set becomes an abstract option concept with one generated
subclass per alternative, suffixed A, B, C, ... (or 1, 2, 3, ...).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...utils import capitalize_first, variant_label
from ..schema_ast.nodes import AllOfSchema, ObjectSchema, VariantSchema
from .model_nodes import Association, Concept

if TYPE_CHECKING:
    from .analyzer import AnalysisContext, SchemaAnalyzer

# Name of the attribute holding a non-object alternative
OPTION_ATTRIBUTE = "optionAttribute"


class VariantSynthesizer:
    """Builds option hierarchies on behalf of the analyzer."""

    def __init__(self, analyzer: SchemaAnalyzer, label_style: str = "letters"):
        self.analyzer = analyzer
        self.label_style = label_style

    def synthesize_hierarchy(self, concept: Concept, node: VariantSchema, context: AnalysisContext) -> list[Concept]:
        """
        Use `concept` itself as the root of the option hierarchy.

        Used when a variant set is the whole schema of a concept: no
        association is created.
        """
        return self._create_options(concept, f"{concept.name}Option", node, context)

    def synthesize_property(
        self,
        concept: Concept,
        property_name: str,
        node: VariantSchema,
        context: AnalysisContext,
        lower: int,
        upper: int | None,
    ) -> Association | None:
        """
        Create an abstract option concept and associate it to `concept`.

        Args:
            concept: Owner of the property
            property_name: Name of the property (and of the association end)
            node: The `oneOf` / `anyOf` schema
            context: Current traversal context
            lower: Lower bound of the association end
            upper: Upper bound of the association end (None for unbounded)

        Returns:
            The association from the owner to the option concept, or None when
            the owner already has a member with that name
        """
        option_name = f"{capitalize_first(property_name)}Option"
        option = self.analyzer.create_concept(option_name, node, context, abstract=True)
        self._create_options(option, option.name, node, context)
        return concept.create_association(property_name, option, lower, upper)

    def _create_options(
        self,
        option: Concept,
        base_name: str,
        node: VariantSchema,
        context: AnalysisContext,
    ) -> list[Concept]:
        subclasses = []
        for index, alternative in enumerate(node.options):
            name = f"{base_name}{variant_label(index, self.label_style)}"
            if isinstance(alternative, (ObjectSchema, AllOfSchema, VariantSchema)):
                # A schema definition on its own (may carry a title, required, ...)
                subclass = self.analyzer.analyze_object(name, alternative, context)
            else:
                # An inline type or reference, wrapped in a single attribute
                subclass = self.analyzer.create_concept(name, alternative, context)
                self.analyzer.analyze_property(subclass, OPTION_ATTRIBUTE, alternative, context)
            subclass.add_superclass(option)
            subclasses.append(subclass)
        return subclasses
