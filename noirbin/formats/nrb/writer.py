"""
NRB file writer.

Serializes Document objects to the NRB binary format, always as
version 1.0.
"""

from io import BytesIO
from pathlib import Path
import logging
from typing import BinaryIO, Optional, Union

from noirbin.constants import (
    HEADER_SIZE,
    NOTE_RECORD_SIZE,
    SECTION_RECORD_SIZE,
    SIGNATURE_PRIMARY,
    SIGNATURE_SECONDARY,
    VERSION_MAJOR,
    VERSION_MINOR,
)
from noirbin.formats.nrb.header import NRBHeader
from noirbin.models.document import Document
from noirbin.utils.binary_io import (
    write_bias8,
    write_byte,
    write_uint16,
    write_uint64,
)
from noirbin.utils.validation import ContractViolation

logger = logging.getLogger(__name__)


class NRBWriter:
    """
    Writer for NRB score files.

    A document needs at least one note to be written. Documents are
    validated as they are built, so nothing is re-checked here.

    Example:
        doc = Document.create_empty()
        doc.append_note(Note(start=0, release=500_000))
        NRBWriter.write(doc, "score.nrb")
    """

    SIGNATURE = (SIGNATURE_PRIMARY, SIGNATURE_SECONDARY)
    VERSION = (VERSION_MAJOR, VERSION_MINOR)
    HEADER_SIZE = HEADER_SIZE

    @classmethod
    def write(cls, document: Document, filepath: Union[str, Path]) -> bool:
        """
        Write a document to an NRB file.

        Args:
            document: Document to write
            filepath: Output file path

        Returns:
            True if written, False if the document has no notes (no
            file is created in that case)
        """
        data = cls().to_bytes(document)
        if data is None:
            return False

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "wb") as f:
            f.write(data)

        return True

    def to_bytes(self, document: Document) -> Optional[bytes]:
        """
        Convert a document to NRB binary data.

        Args:
            document: Document to convert

        Returns:
            Complete NRB data, or None if the document has no notes
        """
        buffer = BytesIO()
        if not self.write_stream(document, buffer):
            return None
        return buffer.getvalue()

    def write_stream(self, document: Document, stream: BinaryIO) -> bool:
        """
        Serialize a document to a binary stream.

        Args:
            document: Document to serialize
            stream: Writable binary stream

        Returns:
            True if written, False if the document has no notes (nothing
            is written in that case)
        """
        if not isinstance(document, Document):
            raise ContractViolation(f"Expected a Document, got {type(document).__name__}")

        note_count = document.note_count()
        if note_count == 0:
            logger.debug("Refusing to serialize document with no notes")
            return False

        self._write_header(document, stream)
        self._write_sections(document, stream)
        self._write_notes(document, stream)
        return True

    @staticmethod
    def expected_size(document: Document) -> int:
        """Size in bytes of the serialized document."""
        return (
            HEADER_SIZE
            + document.section_count() * SECTION_RECORD_SIZE
            + document.note_count() * NOTE_RECORD_SIZE
        )

    def _write_header(self, document: Document, stream: BinaryIO) -> None:
        """Write signatures, version, counts and zeroed reserved fields."""
        header = NRBHeader(
            signature=self.SIGNATURE,
            major=self.VERSION[0],
            minor=self.VERSION[1],
            section_count=document.section_count(),
            note_count=document.note_count(),
        )
        stream.write(header.pack())

    def _write_sections(self, document: Document, stream: BinaryIO) -> None:
        for offset in document.sections:
            write_uint64(stream, offset)

    def _write_notes(self, document: Document, stream: BinaryIO) -> None:
        for note in document.iter_notes():
            write_uint64(stream, note.start)
            write_uint64(stream, note.release)
            write_bias8(stream, note.pitch)
            write_byte(stream, note.articulation)
            write_uint16(stream, note.ramp)
            write_uint16(stream, note.sect)
            write_uint16(stream, note.layer_i)
