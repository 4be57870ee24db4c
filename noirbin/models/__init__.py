"""Data models for NRB score representation."""

from noirbin.models.note import Note
from noirbin.models.document import Document

__all__ = ["Note", "Document"]
