"""
Symbol table mapping schema references to the concepts created for them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from ...errors import DuplicateConceptError
from .model_nodes import Concept
from .reference import SchemaReference

logger = logging.getLogger(__name__)


class SymbolTable:
    """Reference-to-concept lookup built during analysis.

    Concepts are indexed by their canonical reference and, when registered
    with one, by the bare name they were derived from (document roots and
    `definitions` entries). The table only grows.
    """

    def __init__(self):
        self._by_reference: dict[SchemaReference, Concept] = {}
        self._by_name: dict[str, Concept] = {}

    def register(self, reference: SchemaReference, concept: Concept, name: str | None = None) -> None:
        """
        Bind a reference to a concept.

        Args:
            reference: Canonical reference of the schema the concept was built from
            concept: The concept
            name: Bare name used for fallback lookups, None to keep the concept
                reachable by reference only

        Raises:
            DuplicateConceptError: If the reference is already bound
        """
        existing = self._by_reference.get(reference)
        if existing is not None:
            raise DuplicateConceptError(reference, existing.name)
        self._by_reference[reference] = concept

        if name is None:
            return
        if name in self._by_name:
            logger.debug("Bare name %r already bound, %s is only reachable by reference", name, reference)
        else:
            self._by_name[name] = concept

    def lookup(self, reference: SchemaReference) -> Concept | None:
        """Fragment-qualified lookup first, then bare-name lookup."""
        found = self._by_reference.get(reference)
        if found is not None:
            return found
        return self.lookup_name(reference.digest_fragment_name())

    def lookup_reference(self, reference: SchemaReference) -> Concept | None:
        return self._by_reference.get(reference)

    def lookup_name(self, name: str) -> Concept | None:
        return self._by_name.get(name)

    def __contains__(self, reference: SchemaReference) -> bool:
        return reference in self._by_reference

    def __len__(self) -> int:
        return len(self._by_reference)

    def __iter__(self) -> Iterator[SchemaReference]:
        return iter(self._by_reference)

    def items(self):
        return self._by_reference.items()
