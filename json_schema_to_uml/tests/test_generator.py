"""
End-to-end tests of the pipeline on files and folders.
"""

import json
import shutil
from pathlib import Path

import pytest

from json_schema_to_uml.errors import JsonSchemaToUmlError
from json_schema_to_uml.pipeline import AnalyzerConfig, JsonSchemaToUml

CORPUS = Path(__file__).parent / "test_data" / "schemas" / "corpus"


@pytest.fixture(scope="module")
def corpus_result():
    return JsonSchemaToUml().launch(CORPUS)


def test_folders_become_namespaces(corpus_result):
    model = corpus_result.model
    assert model.name == "model"
    assert [ns.qualified_name for ns in model.iter_namespaces()] == ["model", "model::corpus", "model::corpus::staff"]
    assert corpus_result.find_concept("Person").namespace.qualified_name == "model::corpus"
    assert corpus_result.find_concept("Employee").namespace.qualified_name == "model::corpus::staff"


def test_invalid_document_is_skipped(corpus_result):
    assert [w.path.name for w in corpus_result.skipped] == ["broken.json"]
    assert corpus_result.skipped[0].reason.startswith("is not a valid JSON file")


def test_person(corpus_result):
    person = corpus_result.find_concept("Person")
    assert person.comments == ["Title: Person", "Description: A person known to the system"]

    members = {p.name: (p.type.name, p.multiplicity) for p in person.properties}
    assert members == {
        "name": ("String", "1"),
        "age": ("Integer", "1"),
        "birthDate": ("Date", "0..1"),
        "nicknames": ("String", "0..*"),
        "status": ("statusEnum", "0..1"),
    }
    assert {c.name: c.expression for c in person.constraints} == {
        "Person-name-maxLengthConstraint": "self.name.size() <= 50",
        "Person-age-minimumConstraint": "self.age >= 0",
    }

    address = person.get_association("address")
    assert address.target is corpus_result.find_concept("Address")
    assert address.target_end.composite

    contact = person.get_association("contact")
    assert contact.target.name == "ContactOption"
    assert contact.target_end.multiplicity == "1"
    phone = corpus_result.find_concept("Phone")
    assert corpus_result.find_concept("ContactOptionB").get_association("optionAttribute").target is phone
    assert phone.get_property("number").unimplemented == ["pattern"]


def test_cross_folder_references(corpus_result):
    person = corpus_result.find_concept("Person")
    employee = corpus_result.find_concept("Employee")
    manager = corpus_result.find_concept("Manager")

    assert employee.superclasses == [person]
    assert [c.expression for c in employee.constraints] == ["self.salary > 0"]

    reports = manager.get_association("reports")
    assert reports.target is employee
    assert reports.target_end.multiplicity == "1..*"
    assert manager.get_association("mentor").target is corpus_result.unknown


def test_unresolved_summary(corpus_result):
    assert len(corpus_result.unresolved) == 1
    assert corpus_result.unresolved[0].owner_name == "Manager"


def test_single_file(tmp_path):
    path = tmp_path / "address.json"
    shutil.copy(CORPUS / "address.json", path)
    result = JsonSchemaToUml().launch(path)
    address = result.find_concept("Address")
    assert address.namespace is result.model
    assert address.get_property("street").lower == 1
    assert address.get_property("city").lower == 0


def test_skip_continues(tmp_path):
    (tmp_path / "a_malformed.json").write_text(json.dumps({"properties": {"x": {"$ref": ""}}}))
    (tmp_path / "b_shape.json").write_text(json.dumps({"properties": {"x": {"type": ["object", 3]}}}))
    (tmp_path / "c_good.json").write_text(json.dumps({"properties": {"y": {"type": "string"}}}))

    config = AnalyzerConfig(validate_documents=False)
    result = JsonSchemaToUml(config).launch(tmp_path)

    assert [w.path.name for w in result.skipped] == ["a_malformed.json", "b_shape.json"]
    assert result.find_concept("C_good").get_property("y") is not None
    # Elements created before a failure stay in the model
    assert result.find_concept("A_malformed") is not None


def test_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        JsonSchemaToUml().launch(tmp_path / "nowhere")


def test_launch_twice(tmp_path):
    (tmp_path / "a.json").write_text("{}")
    generator = JsonSchemaToUml()
    generator.launch(tmp_path / "a.json")
    with pytest.raises(JsonSchemaToUmlError):
        generator.launch(tmp_path / "a.json")


def write_schema(path, schema):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(schema))


def test_same_file_name_in_sibling_folders(tmp_path):
    write_schema(tmp_path / "hr" / "common.json", {"properties": {"badge": {"type": "string"}}})
    write_schema(tmp_path / "sales" / "common.json", {"properties": {"region": {"type": "string"}}})
    write_schema(
        tmp_path / "sales" / "order.json",
        {"properties": {"seller": {"$ref": "common.json"}, "employee": {"$ref": "../hr/common.json"}}},
    )

    result = JsonSchemaToUml().launch(tmp_path)

    assert result.skipped == []
    assert result.unresolved == []
    commons = {c.namespace.name: c for c in result.concepts if c.name == "Common"}
    assert sorted(commons) == ["hr", "sales"]
    order = result.find_concept("Order")
    assert order.get_association("seller").target is commons["sales"]
    assert order.get_association("employee").target is commons["hr"]


def test_versioned_file_names(tmp_path):
    write_schema(tmp_path / "order.v1.json", {"properties": {"total": {"type": "integer"}}})
    write_schema(tmp_path / "order.v2.json", {"properties": {"amount": {"type": "integer"}}})
    write_schema(tmp_path / "cart.json", {"properties": {"order": {"$ref": "order.v2.json"}}})

    result = JsonSchemaToUml().launch(tmp_path)

    assert result.skipped == []
    orders = [c for c in result.concepts if c.name == "Order"]
    assert len(orders) == 2
    target = result.find_concept("Cart").get_association("order").target
    assert target.has_member("amount")


def test_same_document_key_is_skipped(tmp_path):
    write_schema(tmp_path / "a.json", {"properties": {"x": {"type": "string"}}})
    write_schema(tmp_path / "a.schema.json", {"properties": {"y": {"type": "string"}}})

    result = JsonSchemaToUml().launch(tmp_path)

    assert [w.path.name for w in result.skipped] == ["a.schema.json"]
    assert "already defined by 'a.json'" in result.skipped[0].reason
    assert [c.name for c in result.concepts] == ["Unknown", "A"]
    assert result.find_concept("A").has_member("x")
