"""
PlantUML exporter.

Renders namespaces as packages, concepts as classes, enumerations,
generalizations and associations with their multiplicities. Constraints
are attached to their concept as notes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from ..analyzer.model_nodes import Concept, Enumeration, Namespace, Property
from ..config import AnalyzerConfig, OutputMode
from ..generator import AnalysisResult
from .atomic_writer import AtomicWriter
from .base import ExportError, ModelExporter


class PlantUmlExporter(ModelExporter):
    """Exports a model as a PlantUML class diagram."""

    TEMPLATE_DIR = "plantuml"
    FILE_EXTENSION = "puml"

    def __init__(self, config: AnalyzerConfig):
        super().__init__(config)
        self.jinja_env.filters["quote"] = lambda text: str(text).replace('"', "'")
        self.template = self.jinja_env.get_template(f"model.{self.FILE_EXTENSION}.jinja2")
        self._aliases: dict[int, str] = {}

    def export(self, result: AnalysisResult, generation_comment: str = "") -> str:
        self._aliases = {}
        model = self._namespace_context(result.model)

        generalizations = []
        associations = []
        for concept in result.model.iter_concepts():
            for superclass in concept.superclasses:
                generalizations.append({"subclass": self._alias(concept), "superclass": self._alias(superclass)})
            for association in concept.associations:
                associations.append(
                    {
                        "owner": self._alias(concept),
                        "owner_multiplicity": association.owner_end.multiplicity,
                        "arrow": "*-->" if association.target_end.composite else "-->",
                        "target_multiplicity": association.target_end.multiplicity,
                        "target": self._alias(association.target),
                        "name": association.name,
                    }
                )

        if not self.config.add_generation_comment:
            generation_comment = ""

        return self.template.render(
            model=model,
            generalizations=generalizations,
            associations=associations,
            generation_comment=generation_comment,
        )

    def write(self, result: AnalysisResult, path: Path, generation_comment: str = "") -> None:
        """
        Export and write a model, honouring the output configuration.

        Raises:
            ExportError: If the file exists in error mode or validation fails
        """
        content = self.export(result, generation_comment)
        output = self.config.output

        if not output.atomic_write:
            if output.mode == OutputMode.ERROR_IF_EXISTS and path.exists():
                raise ExportError(f"Output file already exists: {path}. Use force mode to overwrite.")
            if output.validate_before_write:
                self.validate(content)
            path.write_text(content, encoding="utf-8")
            return

        writer = AtomicWriter(validate=self.validate)
        if output.mode == OutputMode.ERROR_IF_EXISTS:
            writer.write_if_not_exists(path, content, validate=output.validate_before_write)
        else:
            writer.write(path, content, validate=output.validate_before_write)

    def validate(self, content: str) -> None:
        lines = [line.strip() for line in content.strip().splitlines()]
        if not lines or lines[0] != "@startuml" or lines[-1] != "@enduml":
            raise ExportError("PlantUML document must start with @startuml and end with @enduml")
        if "package " not in content:
            raise ExportError("PlantUML document has no package for the model")

    def _alias(self, element: Concept | Enumeration) -> str:
        key = id(element)
        if key not in self._aliases:
            prefix = "E" if isinstance(element, Enumeration) else "C"
            self._aliases[key] = f"{prefix}{len(self._aliases) + 1}"
        return self._aliases[key]

    def _namespace_context(self, namespace: Namespace) -> dict[str, Any]:
        return {
            "name": namespace.name,
            "enumerations": [
                {"name": e.name, "alias": self._alias(e), "literals": e.literals} for e in namespace.enumerations
            ],
            "concepts": [self._concept_context(concept) for concept in namespace.concepts],
            "namespaces": [self._namespace_context(child) for child in namespace.namespaces],
        }

    def _concept_context(self, concept: Concept) -> dict[str, Any]:
        return {
            "name": concept.name,
            "alias": self._alias(concept),
            "abstract": concept.abstract,
            "attributes": [self._attribute_context(prop) for prop in concept.properties],
            "comments": concept.comments,
            "constraints": [{"name": c.name, "expression": c.expression} for c in concept.constraints],
        }

    def _attribute_context(self, prop: Property) -> dict[str, Any]:
        return {
            "name": prop.name,
            "type": prop.type.name if prop.type is not None else "?",
            "multiplicity": prop.multiplicity,
            "nullable": prop.nullable,
        }
