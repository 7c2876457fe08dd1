"""
Constraint rule objects that build OCL constraints.

Each rule represents a specific validation keyword from JSON Schema and
knows how to render itself as a named constraint on a concept.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from ..schema_ast.nodes import PrimitiveSchema
from .model_nodes import Constraint


def format_bound(value: Any) -> str:
    """Render a JSON number the way it is spelled in the schema."""
    return json.dumps(value)


class ConstraintRule(ABC):
    """Base class for all constraint rules"""

    # Class-level cache for loaded expression templates
    _templates: dict[str, dict[str, Any]] = {}

    LANGUAGE = "OCL"

    def __init__(self, property_name: str):
        """
        Initialize a constraint rule.

        Args:
            property_name: Name of the property being constrained
        """
        self.property_name = property_name

    @classmethod
    def _load_templates(cls, language: str) -> dict[str, Any]:
        """
        Load expression templates from JSON file for the given language.
        Results are cached to avoid repeated file I/O.
        """
        if language not in cls._templates:
            template_file = Path(__file__).parent / f"constraint_templates_{language.lower()}.json"
            with open(template_file, encoding="utf-8") as f:
                cls._templates[language] = json.load(f)
        return cls._templates[language]

    def get_string(self, key: str, **format_params) -> str:
        """Get a template string for this rule and format it."""
        templates = self._load_templates(self.LANGUAGE)
        class_name = self.__class__.__name__

        if class_name not in templates:
            raise KeyError(f"No templates found for {class_name} in {self.LANGUAGE}")

        rule_templates = templates[class_name]

        if key not in rule_templates:
            raise KeyError(f"Key '{key}' not found in templates for {class_name}")

        return rule_templates[key].format(**format_params)

    @abstractmethod
    def get_template_params(self) -> dict[str, Any]:
        """
        Get rule-specific parameters for template formatting.

        Returns:
            Dictionary with parameters specific to this constraint rule
        """

    @property
    def kind(self) -> str:
        return self.get_string("kind")

    def expression(self) -> str:
        params = {"property_name": self.property_name}
        params.update(self.get_template_params())
        return self.get_string("expression", **params)

    def build(self, concept_name: str) -> Constraint:
        """
        Build the constraint for a concept.

        The name is formed as conceptName-propertyName-kind, which keeps it
        unique per concept.
        """
        kind = self.kind
        return Constraint(
            name=f"{concept_name}-{self.property_name}-{kind}",
            kind=kind,
            property_name=self.property_name,
            expression=self.expression(),
            language=self.LANGUAGE,
        )


class MaxLengthRule(ConstraintRule):
    """Maximum string length"""

    def __init__(self, property_name: str, max_length: int):
        super().__init__(property_name)
        self.max_length = max_length

    def get_template_params(self) -> dict[str, Any]:
        return {"max_length": format_bound(self.max_length)}


class MinLengthRule(ConstraintRule):
    """Minimum string length"""

    def __init__(self, property_name: str, min_length: int):
        super().__init__(property_name)
        self.min_length = min_length

    def get_template_params(self) -> dict[str, Any]:
        return {"min_length": format_bound(self.min_length)}


class MultipleOfRule(ConstraintRule):
    """Multiple of a number"""

    def __init__(self, property_name: str, multiple: float):
        super().__init__(property_name)
        self.multiple = multiple

    def get_template_params(self) -> dict[str, Any]:
        return {"multiple": format_bound(self.multiple)}


class MaximumRule(ConstraintRule):
    """Inclusive maximum"""

    def __init__(self, property_name: str, maximum: float):
        super().__init__(property_name)
        self.maximum = maximum

    def get_template_params(self) -> dict[str, Any]:
        return {"maximum": format_bound(self.maximum)}


class ExclusiveMaximumRule(ConstraintRule):
    """Exclusive maximum"""

    def __init__(self, property_name: str, exclusive_maximum: float):
        super().__init__(property_name)
        self.exclusive_maximum = exclusive_maximum

    def get_template_params(self) -> dict[str, Any]:
        return {"exclusive_maximum": format_bound(self.exclusive_maximum)}


class MinimumRule(ConstraintRule):
    """Inclusive minimum"""

    def __init__(self, property_name: str, minimum: float):
        super().__init__(property_name)
        self.minimum = minimum

    def get_template_params(self) -> dict[str, Any]:
        return {"minimum": format_bound(self.minimum)}


class ExclusiveMinimumRule(ConstraintRule):
    """Exclusive minimum"""

    def __init__(self, property_name: str, exclusive_minimum: float):
        super().__init__(property_name)
        self.exclusive_minimum = exclusive_minimum

    def get_template_params(self) -> dict[str, Any]:
        return {"exclusive_minimum": format_bound(self.exclusive_minimum)}


class ConstraintGenerator:
    """Create constraint rules from the validation keywords of a primitive schema"""

    def create_rules(self, property_name: str, node: PrimitiveSchema) -> list[ConstraintRule]:
        """
        Create the rules for a property.

        Args:
            property_name: Name of the constrained property
            node: The primitive schema declaring the keywords

        Returns:
            Rules in keyword order (length, then multipleOf, maximum, minimum)
        """
        if node.type_name == "string":
            return self._create_string_rules(property_name, node)
        if node.type_name in ("integer", "number"):
            return self._create_numeric_rules(property_name, node)
        return []

    def _create_string_rules(self, property_name: str, node: PrimitiveSchema) -> list[ConstraintRule]:
        rules: list[ConstraintRule] = []
        if node.max_length is not None:
            rules.append(MaxLengthRule(property_name, node.max_length))
        if node.min_length is not None:
            rules.append(MinLengthRule(property_name, node.min_length))
        return rules

    def _create_numeric_rules(self, property_name: str, node: PrimitiveSchema) -> list[ConstraintRule]:
        rules: list[ConstraintRule] = []

        if node.multiple_of is not None:
            rules.append(MultipleOfRule(property_name, node.multiple_of))

        # Draft-04 spells exclusivity as a boolean modifier of maximum/minimum
        if node.maximum is not None:
            if node.exclusive_maximum is True:
                rules.append(ExclusiveMaximumRule(property_name, node.maximum))
            else:
                rules.append(MaximumRule(property_name, node.maximum))
        if _is_number(node.exclusive_maximum):
            rules.append(ExclusiveMaximumRule(property_name, node.exclusive_maximum))

        if node.minimum is not None:
            if node.exclusive_minimum is True:
                rules.append(ExclusiveMinimumRule(property_name, node.minimum))
            else:
                rules.append(MinimumRule(property_name, node.minimum))
        if _is_number(node.exclusive_minimum):
            rules.append(ExclusiveMinimumRule(property_name, node.exclusive_minimum))

        return rules


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
