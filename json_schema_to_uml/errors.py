"""
Errors and warnings raised or collected while turning schemas into a model.
"""

from __future__ import annotations

from pathlib import Path


class JsonSchemaToUmlError(Exception):
    """Base class for all errors of the package."""


class MalformedReferenceError(JsonSchemaToUmlError, ValueError):
    """An `id` or `$ref` string has no usable path or fragment segments."""

    def __init__(self, raw: str, reason: str = "no usable segments"):
        self.raw = raw
        super().__init__(f"Malformed schema reference {raw!r}: {reason}")


class DuplicateConceptError(JsonSchemaToUmlError):
    """A schema reference was bound twice in the symbol table."""

    def __init__(self, reference, existing_name: str):
        self.reference = reference
        super().__init__(f"Reference {reference} is already bound to concept {existing_name!r}")


class DuplicateDocumentError(JsonSchemaToUmlError):
    """Two documents normalize to the same document key (e.g. "a.json" and "a.schema.json")."""

    def __init__(self, reference, existing_file: str):
        self.reference = reference
        super().__init__(f"Document {reference} is already defined by {existing_file!r}")


class InvalidSchemaError(JsonSchemaToUmlError):
    """A schema node has a shape the analyzer cannot interpret."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path or '#'}: {message}")


class InvalidDocumentWarning(UserWarning):
    """A document was skipped because it could not be parsed, validated or analyzed.

    Instances are collected as values on the analysis result, they are never raised.
    """

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"{self.path}: {reason}")


class UnresolvedReferenceWarning(UserWarning):
    """A pending edge was bound to the placeholder concept."""

    def __init__(self, owner_name: str, reference, kind: str):
        self.owner_name = owner_name
        self.reference = reference
        self.kind = kind
        super().__init__(f"Unresolved {kind} reference {reference} from {owner_name!r}")
