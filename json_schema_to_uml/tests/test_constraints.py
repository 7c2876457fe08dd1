"""
Unit tests for constraint rule objects.
"""

import unittest

from json_schema_to_uml.pipeline.analyzer.constraints import (
    ConstraintGenerator,
    ExclusiveMaximumRule,
    ExclusiveMinimumRule,
    MaximumRule,
    MaxLengthRule,
    MinimumRule,
    MinLengthRule,
    MultipleOfRule,
)
from json_schema_to_uml.pipeline.schema_ast import PrimitiveSchema


class TestConstraintRules(unittest.TestCase):
    """Test the OCL rendering of each rule"""

    def test_max_length_rule(self):
        rule = MaxLengthRule("username", 20)
        self.assertEqual(rule.kind, "maxLengthConstraint")
        self.assertEqual(rule.expression(), "self.username.size() <= 20")

    def test_min_length_rule(self):
        rule = MinLengthRule("username", 3)
        self.assertEqual(rule.kind, "minLengthConstraint")
        self.assertEqual(rule.expression(), "self.username.size() >= 3")

    def test_multiple_of_rule(self):
        rule = MultipleOfRule("quantity", 5)
        self.assertEqual(rule.kind, "multipleOfConstraint")
        self.assertEqual(rule.expression(), "self.quantity.mod(5) = 0")

    def test_maximum_rule(self):
        self.assertEqual(MaximumRule("age", 150).expression(), "self.age <= 150")

    def test_exclusive_maximum_rule(self):
        rule = ExclusiveMaximumRule("score", 100)
        self.assertEqual(rule.kind, "exclusiveMaximumConstraint")
        self.assertEqual(rule.expression(), "self.score < 100")

    def test_minimum_rule(self):
        self.assertEqual(MinimumRule("age", 0).expression(), "self.age >= 0")

    def test_exclusive_minimum_rule(self):
        self.assertEqual(ExclusiveMinimumRule("price", 0).expression(), "self.price > 0")

    def test_float_bound(self):
        self.assertEqual(MaximumRule("ratio", 0.75).expression(), "self.ratio <= 0.75")

    def test_build_names_constraint(self):
        constraint = MinimumRule("age", 0).build("Person")
        self.assertEqual(constraint.name, "Person-age-minimumConstraint")
        self.assertEqual(constraint.kind, "minimumConstraint")
        self.assertEqual(constraint.property_name, "age")
        self.assertEqual(constraint.expression, "self.age >= 0")
        self.assertEqual(constraint.language, "OCL")


class TestConstraintGenerator(unittest.TestCase):
    def setUp(self):
        self.generator = ConstraintGenerator()

    def expressions(self, node):
        return [rule.expression() for rule in self.generator.create_rules("value", node)]

    def test_string_rules(self):
        node = PrimitiveSchema(type_name="string", min_length=1, max_length=10, pattern="^a")
        self.assertEqual(self.expressions(node), ["self.value.size() <= 10", "self.value.size() >= 1"])

    def test_numeric_rules(self):
        node = PrimitiveSchema(type_name="integer", minimum=0, maximum=10, multiple_of=2)
        self.assertEqual(
            self.expressions(node),
            ["self.value.mod(2) = 0", "self.value <= 10", "self.value >= 0"],
        )

    def test_draft4_boolean_exclusive(self):
        node = PrimitiveSchema(type_name="number", minimum=0, exclusive_minimum=True, maximum=1, exclusive_maximum=False)
        self.assertEqual(self.expressions(node), ["self.value <= 1", "self.value > 0"])

    def test_numeric_exclusive(self):
        node = PrimitiveSchema(type_name="number", exclusive_minimum=0, exclusive_maximum=9.5)
        self.assertEqual(self.expressions(node), ["self.value < 9.5", "self.value > 0"])

    def test_no_rules_for_boolean(self):
        self.assertEqual(self.expressions(PrimitiveSchema(type_name="boolean")), [])

    def test_no_rules_without_keywords(self):
        self.assertEqual(self.expressions(PrimitiveSchema(type_name="string")), [])


if __name__ == "__main__":
    unittest.main()
