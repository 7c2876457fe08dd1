"""
Tests of the deferred resolution pass, in isolation and on ordered corpora.
"""

import unittest

from json_schema_to_uml.errors import JsonSchemaToUmlError
from json_schema_to_uml.pipeline import JsonSchemaToUml
from json_schema_to_uml.pipeline.analyzer import (
    UNBOUNDED,
    Namespace,
    PendingAssociationEdge,
    PendingEdges,
    PendingSuperclassEdge,
    Property,
    ReferenceResolver,
    SchemaReference,
    SymbolTable,
)


class TestReferenceResolver(unittest.TestCase):
    def setUp(self):
        self.model = Namespace(name="model")
        self.unknown = self.model.create_concept("Unknown")
        self.table = SymbolTable()
        self.person = self.model.create_concept("Person", reference=SchemaReference("person"))
        self.table.register(SchemaReference("person"), self.person, "person")
        self.employee = self.model.create_concept("Employee", reference=SchemaReference("employee"))
        self.table.register(SchemaReference("employee"), self.employee, "employee")
        self.pending = PendingEdges()

    def test_binds_superclass_and_association(self):
        self.pending.superclasses.append(PendingSuperclassEdge(self.employee, SchemaReference.parse("person.json")))
        self.pending.associations.append(
            PendingAssociationEdge(
                self.person,
                SchemaReference.parse("employee.json"),
                "colleagues",
                lower=0,
                upper=UNBOUNDED,
                comments=["Description: Team"],
            )
        )

        report = ReferenceResolver(self.table, self.unknown).resolve(self.pending)

        self.assertEqual(self.employee.superclasses, [self.person])
        association = self.person.get_association("colleagues")
        self.assertIs(association.target, self.employee)
        self.assertEqual(association.target_end.multiplicity, "0..*")
        self.assertTrue(association.target_end.composite)
        self.assertEqual(association.comments, ["Description: Team"])
        self.assertEqual(report.superclasses, 1)
        self.assertEqual(report.associations, [association])
        self.assertEqual(report.unresolved, [])
        self.assertEqual(len(self.pending), 0)

    def test_unresolved_edges_use_placeholder(self):
        self.pending.superclasses.append(PendingSuperclassEdge(self.person, SchemaReference.parse("being.json")))
        self.pending.associations.append(
            PendingAssociationEdge(self.person, SchemaReference.parse("pet.json#/definitions/Dog"), "dog")
        )

        with self.assertLogs("json_schema_to_uml.pipeline.analyzer.reference_resolver", level="INFO"):
            report = ReferenceResolver(self.table, self.unknown).resolve(self.pending)

        self.assertEqual(self.person.superclasses, [self.unknown])
        self.assertIs(self.person.get_association("dog").target, self.unknown)
        self.assertEqual([w.kind for w in report.unresolved], ["superclass", "association"])
        self.assertEqual(report.unresolved[1].reference, SchemaReference("pet", ("definitions", "Dog")))

    def test_taken_member_name_is_not_duplicated(self):
        self.person.add_property(Property(name="boss"))
        self.pending.associations.append(PendingAssociationEdge(self.person, SchemaReference.parse("employee.json"), "boss"))

        with self.assertLogs("json_schema_to_uml.pipeline.analyzer.model_nodes", level="WARNING"):
            report = ReferenceResolver(self.table, self.unknown).resolve(self.pending)

        self.assertEqual(self.person.associations, [])
        self.assertEqual(report.associations, [])
        self.assertEqual(len(self.pending), 0)

    def test_runs_once(self):
        resolver = ReferenceResolver(self.table, self.unknown)
        resolver.resolve(self.pending)
        with self.assertRaises(JsonSchemaToUmlError):
            resolver.resolve(self.pending)


class TestResolutionOrder(unittest.TestCase):
    DOCUMENTS = {
        "a.json": {"properties": {"b": {"$ref": "b.json"}}, "required": ["b"]},
        "b.json": {"allOf": [{"$ref": "a.json"}, {"properties": {"a": {"$ref": "a.json"}}}]},
    }

    def analyze(self, order):
        generator = JsonSchemaToUml()
        for file_name in order:
            generator.add_document(self.DOCUMENTS[file_name], file_name)
        return generator.resolve()

    def describe(self, result):
        description = []
        for concept in result.concepts:
            description.append(
                (
                    concept.name,
                    tuple(c.name for c in concept.superclasses),
                    tuple((a.name, a.target.name, a.target_end.multiplicity) for a in concept.associations),
                )
            )
        return sorted(description)

    def test_forward_references_are_order_independent(self):
        forward = self.analyze(["a.json", "b.json"])
        backward = self.analyze(["b.json", "a.json"])
        self.assertEqual(self.describe(forward), self.describe(backward))
        self.assertEqual(forward.unresolved, [])
        self.assertEqual(forward.find_concept("A").get_association("b").target_end.multiplicity, "1")

    def test_resolve_is_cached(self):
        generator = JsonSchemaToUml()
        generator.add_document(self.DOCUMENTS["a.json"], "a.json")
        self.assertIs(generator.resolve(), generator.resolve())

    def test_no_documents_after_resolution(self):
        generator = JsonSchemaToUml()
        generator.resolve()
        with self.assertRaises(JsonSchemaToUmlError):
            generator.add_document(self.DOCUMENTS["a.json"], "a.json")


if __name__ == "__main__":
    unittest.main()
