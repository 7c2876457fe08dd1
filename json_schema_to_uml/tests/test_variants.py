"""
Tests of oneOf / anyOf option hierarchies.
"""

import unittest

from json_schema_to_uml.pipeline import AnalyzerConfig, JsonSchemaToUml
from json_schema_to_uml.pipeline.analyzer import UNBOUNDED
from json_schema_to_uml.pipeline.analyzer.variants import OPTION_ATTRIBUTE


def analyze(file_name, schema, config=None):
    generator = JsonSchemaToUml(config)
    generator.add_document(schema, file_name)
    return generator.resolve()


SHAPES = {
    "oneOf": [
        {"properties": {"radius": {"type": "number"}}},
        {"properties": {"side": {"type": "number"}}},
        {"properties": {"width": {"type": "number"}}},
    ]
}


class TestTopLevelVariants(unittest.TestCase):
    def test_concept_is_the_option_holder(self):
        result = analyze("shape.json", SHAPES)
        shape = result.find_concept("Shape")
        options = [c for c in result.concepts if shape in c.superclasses]
        self.assertEqual([c.name for c in options], ["ShapeOptionA", "ShapeOptionB", "ShapeOptionC"])
        self.assertEqual(shape.associations, [])
        self.assertIsNotNone(options[1].get_property("side"))

    def test_numbered_labels(self):
        result = analyze("shape.json", SHAPES, AnalyzerConfig(variant_labels="numbers"))
        self.assertIsNotNone(result.find_concept("ShapeOption3"))

    def test_many_alternatives(self):
        schema = {"oneOf": [{"type": "integer"} for _ in range(28)]}
        result = analyze("code.json", schema)
        self.assertIsNotNone(result.find_concept("CodeOptionZ"))
        self.assertIsNotNone(result.find_concept("CodeOptionAB"))

    def test_alternative_with_all_of(self):
        schema = {
            "oneOf": [
                {"allOf": [{"$ref": "#/definitions/Base"}, {"properties": {"x": {"type": "string"}}}]},
                {"type": "string"},
            ],
            "definitions": {"Base": {"type": "object"}},
        }
        result = analyze("thing.json", schema)
        option = result.find_concept("ThingOptionA")
        base = result.find_concept("Base")
        thing = result.find_concept("Thing")
        # The option holder is bound on creation, allOf references when resolved
        self.assertEqual(option.superclasses, [thing, base])
        self.assertIsNotNone(option.get_property("x"))


class TestPropertyVariants(unittest.TestCase):
    def test_one_of_property(self):
        schema = {
            "properties": {"owner": {"oneOf": [{"type": "string"}, {"$ref": "#/definitions/Human"}]}},
            "definitions": {"Human": {"properties": {"name": {"type": "string"}}}},
        }
        result = analyze("pet.json", schema)
        owner = result.find_concept("Pet").get_association("owner")
        option = owner.target
        self.assertEqual(option.name, "OwnerOption")
        self.assertTrue(option.abstract)
        self.assertEqual((owner.target_end.lower, owner.target_end.upper), (1, 1))

        option_a = result.find_concept("OwnerOptionA")
        option_b = result.find_concept("OwnerOptionB")
        self.assertEqual(option_a.superclasses, [option])
        self.assertEqual(option_a.get_property(OPTION_ATTRIBUTE).type.name, "String")
        self.assertIs(option_b.get_association(OPTION_ATTRIBUTE).target, result.find_concept("Human"))

    def test_any_of_property_is_unbounded(self):
        schema = {"properties": {"tag": {"anyOf": [{"type": "string"}, {"type": "integer"}]}}}
        tag = analyze("label.json", schema).find_concept("Label").get_association("tag")
        self.assertEqual((tag.target_end.lower, tag.target_end.upper), (1, UNBOUNDED))
        self.assertEqual(tag.target_end.multiplicity, "1..*")

    def test_variant_items_take_array_bounds(self):
        schema = {
            "properties": {
                "parts": {"type": "array", "items": {"anyOf": [{"type": "string"}]}, "minItems": 2, "maxItems": 4}
            }
        }
        parts = analyze("kit.json", schema).find_concept("Kit").get_association("parts")
        self.assertEqual(parts.target_end.multiplicity, "2..4")

    def test_object_alternative_is_expanded(self):
        schema = {
            "properties": {
                "payment": {
                    "oneOf": [
                        {"title": "Card", "properties": {"number": {"type": "string"}}, "required": ["number"]},
                        {"properties": {"iban": {"type": "string"}}},
                    ]
                }
            }
        }
        result = analyze("order.json", schema)
        card = result.find_concept("PaymentOptionA")
        self.assertEqual(card.get_property("number").lower, 1)
        self.assertEqual(card.comments, ["Title: Card"])
        self.assertIsNone(card.get_property(OPTION_ATTRIBUTE))

    def test_enum_alternative_is_wrapped(self):
        schema = {"properties": {"size": {"oneOf": [{"enum": ["S", "M"]}, {"type": "integer"}]}}}
        result = analyze("shirt.json", schema)
        wrapped = result.find_concept("SizeOptionA").get_property(OPTION_ATTRIBUTE)
        self.assertEqual(wrapped.type.literals, ["S", "M"])


if __name__ == "__main__":
    unittest.main()
