# documents.py
# Input documents and boundary validation.
# Everything downstream trusts these objects; nothing re-checks them.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence

DOCUMENT_TYPES = ("document", "text", "website")


class InvalidInput(ValueError):
    """Raised when an analysis request cannot be accepted."""


@dataclass(frozen=True)
class InputDocument:
    id: str
    name: str
    content: str
    word_count: int
    type: str = "text"
    metadata: Optional[Mapping[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "wordCount": self.word_count,
            "type": self.type,
        }
        if self.metadata is not None:
            out["metadata"] = dict(self.metadata)
        return out


def count_words(text: str) -> int:
    return len((text or "").split())


def parse_document(raw: Any, index: int = 0) -> InputDocument:
    """Build one InputDocument from its wire shape (camelCase keys)."""
    if isinstance(raw, InputDocument):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidInput(f"Document {index + 1} must be an object")

    content = raw.get("content")
    if not isinstance(content, str):
        raise InvalidInput(f"Document {index + 1} is missing text 'content'")

    word_count = raw.get("wordCount", raw.get("word_count"))
    if word_count is None:
        word_count = count_words(content)
    if isinstance(word_count, bool) or not isinstance(word_count, int) or word_count < 0:
        raise InvalidInput(f"Document {index + 1} has an invalid 'wordCount'")

    doc_type = raw.get("type") or "text"
    if doc_type not in DOCUMENT_TYPES:
        raise InvalidInput(f"Document {index + 1} has unknown type '{doc_type}'. Options: {list(DOCUMENT_TYPES)}")

    metadata = raw.get("metadata")
    if metadata is not None and not isinstance(metadata, Mapping):
        raise InvalidInput(f"Document {index + 1} 'metadata' must be an object")

    return InputDocument(
        id=str(raw.get("id") or f"doc_{index + 1}"),
        name=str(raw.get("name") or f"Document {index + 1}"),
        content=content,
        word_count=word_count,
        type=doc_type,
        metadata=dict(metadata) if metadata is not None else None,
    )


def parse_documents(raw_documents: Any) -> List[InputDocument]:
    if not raw_documents:
        raise InvalidInput("No documents provided")
    if isinstance(raw_documents, (str, bytes, Mapping)) or not isinstance(raw_documents, Sequence):
        raise InvalidInput("'documents' must be a list")
    return [parse_document(d, i) for i, d in enumerate(raw_documents)]
