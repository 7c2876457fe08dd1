"""
Deferred resolution of pending superclass and association edges.

Runs once, after every document of the corpus has been analyzed, and binds
each pending edge to a concept of the symbol table or to the placeholder.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...errors import JsonSchemaToUmlError, UnresolvedReferenceWarning
from .model_nodes import Association, Concept, PendingEdges
from .symbol_table import SymbolTable

logger = logging.getLogger(__name__)


@dataclass
class ResolutionReport:
    """Outcome of the resolution pass."""

    superclasses: int = 0
    associations: list[Association] = field(default_factory=list)
    unresolved: list[UnresolvedReferenceWarning] = field(default_factory=list)


class ReferenceResolver:
    """Binds pending edges against a complete symbol table."""

    def __init__(self, symbol_table: SymbolTable, unknown: Concept):
        """
        Initialize the resolver.

        Args:
            symbol_table: The complete reference-to-concept table
            unknown: Placeholder concept used for references that never resolve
        """
        self.symbol_table = symbol_table
        self.unknown = unknown
        self._done = False

    def resolve(self, pending: PendingEdges) -> ResolutionReport:
        """
        Consume every pending edge exactly once.

        Args:
            pending: The pending-edge arena filled during analysis; it is
                drained by this call

        Returns:
            ResolutionReport with the created associations and the edges bound
            to the placeholder

        Raises:
            JsonSchemaToUmlError: If called a second time
        """
        if self._done:
            raise JsonSchemaToUmlError("The resolution pass has already run")
        self._done = True

        report = ResolutionReport()

        for edge in pending.superclasses:
            target = self._lookup(edge.owner, edge.target, "superclass", report)
            edge.owner.add_superclass(target)
            report.superclasses += 1

        for edge in pending.associations:
            target = self._lookup(edge.owner, edge.target, "association", report)
            association = edge.owner.create_association(
                edge.end_name,
                target,
                edge.lower,
                edge.upper,
                composite=edge.composite,
                owner_lower=edge.owner_lower,
                owner_upper=edge.owner_upper,
            )
            if association is None:
                # The name was taken by a member declared with the owner
                continue
            association.comments.extend(edge.comments)
            report.associations.append(association)

        pending.superclasses.clear()
        pending.associations.clear()

        logger.debug(
            "Resolved %d superclass and %d association edges, %d unresolved",
            report.superclasses,
            len(report.associations),
            len(report.unresolved),
        )
        return report

    def _lookup(self, owner: Concept, reference, kind: str, report: ResolutionReport) -> Concept:
        found = self.symbol_table.lookup(reference)
        if found is not None:
            return found

        warning = UnresolvedReferenceWarning(owner.name, reference, kind)
        logger.info("%s, using %s", warning, self.unknown.name)
        report.unresolved.append(warning)
        return self.unknown
