"""
Model node definitions.

These nodes form the class-diagram-shaped model produced by the analyzer:
namespaces own concepts and enumerations, concepts own properties,
associations and constraints. Associations reference (not own) their target.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from .reference import SchemaReference

logger = logging.getLogger(__name__)

# Upper bound value for multi-valued ends (UML `*`)
UNBOUNDED = None


def format_multiplicity(lower: int, upper: int | None) -> str:
    """Render a multiplicity as UML text (e.g. "0..1", "1", "0..*")."""
    upper_text = "*" if upper is UNBOUNDED else str(upper)
    if str(lower) == upper_text:
        return upper_text
    return f"{lower}..{upper_text}"


def is_single_valued(upper: int | None) -> bool:
    """Whether an upper bound allows at most one value."""
    return upper is not UNBOUNDED and upper <= 1


@dataclass(eq=False)
class PrimitiveType:
    """A primitive data type (String, Date, Integer, Boolean)."""

    name: str = ""


@dataclass(eq=False)
class Enumeration:
    """A named closed set of literal values."""

    name: str = ""
    namespace: Namespace | None = None
    literals: list[str] = field(default_factory=list)


@dataclass(eq=False)
class Property:
    """An attribute of a concept typed by a primitive or an enumeration."""

    name: str = ""
    owner: Concept | None = None
    type: PrimitiveType | Enumeration | None = None
    lower: int = 0
    upper: int | None = 1

    # A trailing "null" in a type array; metadata only, cardinality is untouched
    nullable: bool = False

    # Keywords present on the schema but not translated (e.g. "pattern")
    unimplemented: list[str] = field(default_factory=list)

    comments: list[str] = field(default_factory=list)

    @property
    def multiplicity(self) -> str:
        return format_multiplicity(self.lower, self.upper)


@dataclass(eq=False)
class AssociationEnd:
    """One end of an association."""

    name: str = ""
    type: Concept | None = None
    lower: int = 0
    upper: int | None = 1
    navigable: bool = True
    composite: bool = False

    @property
    def multiplicity(self) -> str:
        return format_multiplicity(self.lower, self.upper)


@dataclass(eq=False)
class Association:
    """A directed relationship from an owner concept to a target concept.

    `target_end` is the navigable end seen from the owner (named after the
    schema property); `owner_end` is the return end.
    """

    owner: Concept | None = None
    target_end: AssociationEnd = field(default_factory=AssociationEnd)
    owner_end: AssociationEnd = field(default_factory=AssociationEnd)
    comments: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.target_end.name

    @property
    def target(self) -> Concept | None:
        return self.target_end.type


@dataclass(eq=False)
class Constraint:
    """A named validation rule attached to a concept."""

    name: str = ""
    kind: str = ""  # e.g. "maxLengthConstraint"
    property_name: str = ""
    expression: str = ""
    language: str = "OCL"


@dataclass(eq=False)
class Concept:
    """A class-like element produced from a schema object type."""

    name: str = ""
    namespace: Namespace | None = None
    reference: SchemaReference | None = None
    abstract: bool = False

    properties: list[Property] = field(default_factory=list)
    associations: list[Association] = field(default_factory=list)
    superclasses: list[Concept] = field(default_factory=list)
    constraints: list[Constraint] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)

    @property
    def documentation(self) -> str | None:
        return "\n".join(self.comments) if self.comments else None

    def get_property(self, name: str) -> Property | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def get_association(self, name: str) -> Association | None:
        for association in self.associations:
            if association.name == name:
                return association
        return None

    def has_member(self, name: str) -> bool:
        return self.get_property(name) is not None or self.get_association(name) is not None

    def add_property(self, prop: Property) -> Property | None:
        """
        Add a property, keeping the first member when the name is already taken.

        Returns:
            `prop` once added, otherwise the property already holding the name
            (None when an association holds it)
        """
        if self.has_member(prop.name):
            logger.warning("Concept %s already has a member named %r, keeping the first", self.name, prop.name)
            return self.get_property(prop.name)
        prop.owner = self
        self.properties.append(prop)
        return prop

    def add_superclass(self, concept: Concept) -> None:
        if concept is self:
            logger.warning("Concept %s cannot be its own superclass", self.name)
            return
        if concept not in self.superclasses:
            self.superclasses.append(concept)

    def add_constraint(self, constraint: Constraint) -> None:
        if any(c.name == constraint.name for c in self.constraints):
            logger.warning("Concept %s already has a constraint named %r", self.name, constraint.name)
            return
        self.constraints.append(constraint)

    def create_association(
        self,
        end_name: str,
        target: Concept,
        lower: int,
        upper: int | None,
        composite: bool = False,
        owner_lower: int = 1,
        owner_upper: int | None = 1,
    ) -> Association | None:
        """
        Create an association from this concept to `target`.

        Returns:
            The association, or None when a member already holds `end_name`
        """
        if self.has_member(end_name):
            logger.warning("Concept %s already has a member named %r, keeping the first", self.name, end_name)
            return None
        association = Association(
            owner=self,
            target_end=AssociationEnd(
                name=end_name,
                type=target,
                lower=lower,
                upper=upper,
                navigable=True,
                composite=composite,
            ),
            owner_end=AssociationEnd(
                name=self.name,
                type=self,
                lower=owner_lower,
                upper=owner_upper,
                navigable=False,
            ),
        )
        self.associations.append(association)
        return association


@dataclass(eq=False)
class Namespace:
    """A node of the namespace tree (the root is the model itself)."""

    name: str = ""
    parent: Namespace | None = None
    namespaces: list[Namespace] = field(default_factory=list)
    concepts: list[Concept] = field(default_factory=list)
    enumerations: list[Enumeration] = field(default_factory=list)

    # Only populated on the root namespace
    primitive_types: dict[str, PrimitiveType] = field(default_factory=dict)

    @property
    def root(self) -> Namespace:
        namespace = self
        while namespace.parent is not None:
            namespace = namespace.parent
        return namespace

    @property
    def qualified_name(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.qualified_name}::{self.name}"

    def create_namespace(self, name: str) -> Namespace:
        namespace = Namespace(name=name, parent=self)
        self.namespaces.append(namespace)
        return namespace

    def create_concept(self, name: str, reference: SchemaReference | None = None, abstract: bool = False) -> Concept:
        concept = Concept(name=name, namespace=self, reference=reference, abstract=abstract)
        self.concepts.append(concept)
        return concept

    def create_enumeration(self, name: str, literals: list[str]) -> Enumeration:
        enumeration = Enumeration(name=name, namespace=self, literals=list(literals))
        self.enumerations.append(enumeration)
        return enumeration

    def primitive_type(self, name: str) -> PrimitiveType:
        """Return (or create on demand) the primitive type owned by the root namespace."""
        root = self.root
        found = root.primitive_types.get(name)
        if found is None:
            found = PrimitiveType(name=name)
            root.primitive_types[name] = found
        return found

    def iter_namespaces(self) -> Iterator[Namespace]:
        """This namespace and all nested ones, depth first."""
        yield self
        for namespace in self.namespaces:
            yield from namespace.iter_namespaces()

    def iter_concepts(self) -> Iterator[Concept]:
        for namespace in self.iter_namespaces():
            yield from namespace.concepts

    def iter_enumerations(self) -> Iterator[Enumeration]:
        for namespace in self.iter_namespaces():
            yield from namespace.enumerations

    def find_concept(self, name: str) -> Concept | None:
        """First concept with the given name anywhere below this namespace."""
        for concept in self.iter_concepts():
            if concept.name == name:
                return concept
        return None


@dataclass(eq=False)
class PendingSuperclassEdge:
    """A superclass reference awaiting resolution."""

    owner: Concept
    target: SchemaReference


@dataclass(eq=False)
class PendingAssociationEdge:
    """An association reference awaiting resolution, with all its end attributes."""

    owner: Concept
    target: SchemaReference
    end_name: str
    lower: int = 0
    upper: int | None = 1
    composite: bool = True
    owner_lower: int = 1
    owner_upper: int | None = 1
    comments: list[str] = field(default_factory=list)


@dataclass
class PendingEdges:
    """Arena of edges recorded during analysis, consumed once by the resolution pass."""

    superclasses: list[PendingSuperclassEdge] = field(default_factory=list)
    associations: list[PendingAssociationEdge] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.superclasses) + len(self.associations)

    def associations_of(self, owner: Concept) -> list[PendingAssociationEdge]:
        return [edge for edge in self.associations if edge.owner is owner]
