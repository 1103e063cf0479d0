"""Retrieval results returned by the backend.

A retrieval answers a query with scored chunks of text from files the user
provided. Preprocessing stages typically turn the best entries into
citation blocks.
"""

from typing import Literal

from pydantic import Field

from .base import InboundWireModel
from .processor import CitationSource

FileType = Literal["image", "text/plain", "application/pdf", "application/word", "text/other", "unknown"]


class RetrievalFileHandle(InboundWireModel):
    """A file known to the backend."""

    identifier: str
    name: str
    size_bytes: int | None = None
    type: FileType = "unknown"


class RetrievalResultEntry(InboundWireModel):
    """One matching chunk of a retrieved file."""

    content: str
    score: float
    source: RetrievalFileHandle

    def to_citation_source(self) -> CitationSource:
        """Describe this entry's file for a citation block."""
        return CitationSource(file_name=self.source.name)


class RetrievalResult(InboundWireModel):
    """Entries matching a retrieval query, in the order the backend ranked them."""

    entries: list[RetrievalResultEntry] = Field(default_factory=list)

    def top(self, limit: int) -> list[RetrievalResultEntry]:
        """Get at most limit entries with the highest score."""
        return sorted(self.entries, key=lambda entry: entry.score, reverse=True)[:limit]


__all__ = ["FileType", "RetrievalFileHandle", "RetrievalResult", "RetrievalResultEntry"]
