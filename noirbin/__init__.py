"""
noirbin - Reader and writer for NoiR Binary (NRB) score files.

This library provides tools to:
- Parse .nrb files into validated Document objects
- Build and edit documents section by section and note by note
- Serialize documents back to the NRB binary format

Example usage:
    from noirbin import Document, Note, NRBReader, NRBWriter

    result = NRBReader.read("score.nrb")
    doc = result.unwrap()
    doc.sort_notes()
    NRBWriter.write(doc, "sorted.nrb")
"""

__version__ = "1.0.0"
__author__ = "noirbin Contributors"

from noirbin.constants import VersionStatus
from noirbin.formats.nrb.reader import NRBReader, ParseResult
from noirbin.formats.nrb.writer import NRBWriter
from noirbin.models.document import Document
from noirbin.models.note import Note
from noirbin.utils.validation import ContractViolation, NRBFormatError

__all__ = [
    "NRBReader",
    "NRBWriter",
    "ParseResult",
    "Document",
    "Note",
    "VersionStatus",
    "ContractViolation",
    "NRBFormatError",
]
