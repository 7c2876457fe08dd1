"""
Schema references.

Normalizes `id` and `$ref` strings into a canonical (document, fragment)
key used by the symbol table and the pending-edge arena.

A document key is the document's path relative to the corpus root, with
"/" separators and without its `.schema.json` or `.json` suffix, so
"hr/common.json" and "sales/common.json" stay distinct and
"order.v1.json" keys as "order.v1".
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass, field
from urllib.parse import unquote, urlsplit

from ...errors import MalformedReferenceError

# Suffixes stripped from the last segment of a document path, longest first
DOCUMENT_SUFFIXES = (".schema.json", ".json")

_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")


def _unescape_pointer(segment: str) -> str:
    """Decode a JSON pointer segment (percent-encoding, ~1 and ~0)."""
    return unquote(segment).replace("~1", "/").replace("~0", "~")


def _strip_suffix(name: str) -> str:
    for suffix in DOCUMENT_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def _document_key(path: str, folder: str = "") -> str:
    """
    Document key of a path.

    Relative paths are resolved against `folder` (the folder of the referring
    document). Absolute URIs keep their host and path. Leading ".." segments
    that climb above the corpus root are dropped.
    """
    path = path.replace("\\", "/")
    if _SCHEME.match(path):
        parts = urlsplit(path)
        path = f"{parts.netloc}/{parts.path}"
    if posixpath.basename(path) in ("", ".", ".."):
        # A folder, not a document
        return ""
    if not path.startswith("/"):
        path = posixpath.join(folder, path)

    segments = [s for s in posixpath.normpath("/" + path).split("/") if s]
    if not segments:
        return ""
    segments[-1] = _strip_suffix(segments[-1])
    return "/".join(segments)


@dataclass(frozen=True)
class SchemaReference:
    """Canonical identity of a schema: a (document, fragment) pair.

    Two references are equal iff both components match. The raw spelling
    is kept for diagnostics only.
    """

    document: str
    fragment: tuple[str, ...] = ()
    raw: str = field(default="", compare=False)

    @classmethod
    def parse(cls, raw: str, base: SchemaReference | None = None) -> SchemaReference:
        """
        Parse an `id` or `$ref` string.

        Args:
            raw: The reference string (e.g. "person.json#/definitions/Address")
            base: Reference of the enclosing document. A relative document
                part is resolved against its folder, and a missing one
                (e.g. "#/definitions/Address") designates it

        Returns:
            The normalized SchemaReference

        Raises:
            MalformedReferenceError: If the string has no usable segments
        """
        if not isinstance(raw, str):
            raise MalformedReferenceError(str(raw), "reference must be a string")

        doc_part, has_fragment, frag_part = raw.strip().partition("#")
        fragment = tuple(_unescape_pointer(s) for s in frag_part.split("/") if s) if has_fragment else ()

        folder = posixpath.dirname(base.document) if base is not None else ""
        document = _document_key(doc_part, folder) if doc_part else ""
        if not document and base is not None and has_fragment:
            document = base.document

        if not document and not fragment:
            raise MalformedReferenceError(raw)

        return cls(document=document, fragment=fragment, raw=raw)

    @classmethod
    def for_document(cls, path: str) -> SchemaReference:
        """Reference of a document identified by its path relative to the corpus root."""
        document = _document_key(path)
        if not document:
            raise MalformedReferenceError(path)
        return cls(document=document, raw=path)

    def child(self, *segments: str) -> SchemaReference:
        """Reference to a location nested under this one."""
        return SchemaReference(self.document, self.fragment + tuple(str(s) for s in segments))

    @property
    def root(self) -> SchemaReference:
        """Reference to the enclosing document itself."""
        return SchemaReference(self.document)

    def digest_name(self) -> str:
        """Display name from the last path segment before the fragment, up to its first dot."""
        last = self.document.rsplit("/", 1)[-1]
        return last.split(".", 1)[0] or last

    def digest_fragment_name(self) -> str:
        """Display name from the last fragment segment (e.g. a `definitions` entry)."""
        if self.fragment:
            return self.fragment[-1]
        return self.digest_name()

    def digest_id_name(self) -> str:
        """Display name for a document's own declared `id`."""
        return self.digest_fragment_name() if self.fragment else self.digest_name()

    def __str__(self) -> str:
        if not self.fragment:
            return f"{self.document}#"
        return f"{self.document}#/{'/'.join(self.fragment)}"
