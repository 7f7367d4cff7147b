"""Document handles and ID generation.

A Document is opaque to every device: operations only pass it along.
IDs are ``doc_`` plus 8 hex chars of a SHA-256 over the normalized title,
so the same title always yields the same handle.
"""

from __future__ import annotations

import hashlib
import re
import unicodedata
import uuid

from pydantic import BaseModel, field_validator

DOCUMENT_ID_PREFIX = "doc_"
DOCUMENT_ID_PATTERN = re.compile(r"^doc_[0-9a-f]{8}$")


def normalize_title(title: str) -> str:
    """Lowercase, NFKC-normalize, strip punctuation and collapse whitespace."""
    text = unicodedata.normalize("NFKC", title.lower())
    text = re.sub(r"[^\w\s]", "", text)
    return re.sub(r"\s+", " ", text).strip()


def generate_document_id(title: str | None = None) -> str:
    """Derive a document ID from *title*, or a random one when *title* is None.

    Titles that normalize to nothing (all punctuation) hash their stripped
    raw text instead, so every title maps to one stable ID.
    """
    if title is None:
        return f"{DOCUMENT_ID_PREFIX}{uuid.uuid4().hex[:8]}"
    key = normalize_title(title) or title.strip()
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:8]
    return f"{DOCUMENT_ID_PREFIX}{digest}"


def is_document_id(value: str) -> bool:
    return DOCUMENT_ID_PATTERN.match(value) is not None


class Document(BaseModel):
    """Opaque payload handle passed to device operations."""

    model_config = {"frozen": True}

    id: str
    title: str = ""

    @field_validator("id")
    @classmethod
    def _check_id(cls, value: str) -> str:
        if not is_document_id(value):
            msg = f"Invalid document id: {value!r}"
            raise ValueError(msg)
        return value

    @classmethod
    def from_title(cls, title: str) -> Document:
        return cls(id=generate_document_id(title), title=title)

    @classmethod
    def resolve(cls, ref: str) -> Document:
        """Accept either an existing ``doc_`` ID or a title."""
        if is_document_id(ref):
            return cls(id=ref)
        return cls.from_title(ref)
