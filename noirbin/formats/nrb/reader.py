"""
NRB file reader.

Parses NRB byte streams into Document objects. Parsing is strictly
sequential and stops at the first problem; a failed parse never returns
a partially built Document.
"""

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
import logging
from typing import BinaryIO, List, Optional, Union

from noirbin.constants import (
    HEADER_SIZE,
    MAX_NOTES,
    MAX_SECTIONS,
    RESERVED_FIELDS,
    SIGNATURE_PRIMARY,
    SIGNATURE_SECONDARY,
    VERSION_MAJOR,
    VERSION_MINOR,
    VersionStatus,
)
from noirbin.formats.nrb.header import NRBHeader
from noirbin.models.document import Document
from noirbin.models.note import Note
from noirbin.utils.binary_io import (
    fits_signed32,
    fits_signed64,
    read_bias8,
    read_byte,
    read_uint16,
    read_uint32,
    read_uint64,
)
from noirbin.utils.validation import NRBFormatError, note_problem, section_problem

logger = logging.getLogger(__name__)


@dataclass
class ParseResult:
    """
    Outcome of parsing an NRB stream.

    Attributes:
        document: Parsed document, or None if parsing failed
        version: Version status from the signature/version fields; set
            even when parsing fails
        error: Reason parsing failed, or None
    """

    document: Optional[Document]
    version: VersionStatus
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.document is not None

    def unwrap(self) -> Document:
        """
        Get the parsed document.

        Raises:
            NRBFormatError: If parsing failed
        """
        if self.document is None:
            raise NRBFormatError(self.error or self.version.description)
        return self.document


class NRBReader:
    """
    Reader for NRB score files.

    Example:
        result = NRBReader.read("score.nrb")
        if result.version is VersionStatus.MINOR_UNSUPPORTED:
            print("warning: newer minor version")
        doc = result.unwrap()
    """

    SIGNATURE = (SIGNATURE_PRIMARY, SIGNATURE_SECONDARY)
    VERSION = (VERSION_MAJOR, VERSION_MINOR)
    HEADER_SIZE = HEADER_SIZE

    def __init__(self):
        self.version = VersionStatus.UNREADABLE
        self._stream: Optional[BinaryIO] = None

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> ParseResult:
        """
        Read an NRB file.

        Args:
            filepath: Path to .nrb file

        Returns:
            ParseResult with the document or failure reason
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> ParseResult:
        """
        Parse an NRB file from a path.

        A file that cannot be opened is reported as UNREADABLE.

        Args:
            filepath: Path to .nrb file

        Returns:
            ParseResult
        """
        filepath = Path(filepath)

        try:
            f = open(filepath, "rb")
        except OSError as e:
            logger.warning("Cannot open %s: %s", filepath, e)
            self.version = VersionStatus.UNREADABLE
            return ParseResult(None, self.version, f"Cannot open {filepath}: {e}")

        with f:
            return self.parse_stream(f)

    def parse_bytes(self, data: bytes) -> ParseResult:
        """
        Parse NRB data from bytes.

        Args:
            data: Raw NRB data; anything after the note table is ignored

        Returns:
            ParseResult
        """
        return self.parse_stream(BytesIO(data))

    def parse_stream(self, stream: BinaryIO) -> ParseResult:
        """
        Parse NRB data from a binary stream, starting at its current position.

        Args:
            stream: Readable binary stream

        Returns:
            ParseResult; version is always set
        """
        self._stream = stream
        self.version = VersionStatus.UNREADABLE

        try:
            self._read_version()
            section_count, note_count = self._read_counts()
            self._skip_reserved()
            sections = self._read_sections(section_count)
            notes = self._read_notes(note_count, sections)
        except NRBFormatError as e:
            logger.debug("NRB parse failed (%s): %s", self.version.name, e)
            return ParseResult(None, self.version, str(e))
        finally:
            self._stream = None

        return ParseResult(Document._from_parsed(sections, notes), self.version)

    def _read_version(self) -> None:
        """Read signatures and version bytes, updating self.version."""
        for expected in self.SIGNATURE:
            value = read_uint32(self._stream)
            if not fits_signed32(value) or value != expected:
                raise NRBFormatError("Invalid NRB signature")

        major = read_byte(self._stream)
        minor = read_byte(self._stream) if major is not None else None
        if major is None or minor is None:
            raise NRBFormatError("Truncated NRB version")

        if major != self.VERSION[0]:
            self.version = VersionStatus.MAJOR_UNSUPPORTED
            raise NRBFormatError(f"Unsupported NRB major version {major}.{minor}")

        if minor != self.VERSION[1]:
            self.version = VersionStatus.MINOR_UNSUPPORTED
            logger.warning("Unsupported NRB minor version %d.%d, continuing", major, minor)
        else:
            self.version = VersionStatus.SUPPORTED

    def _read_counts(self):
        section_count = read_uint16(self._stream)
        if section_count is None or not 1 <= section_count <= MAX_SECTIONS:
            raise NRBFormatError(f"Invalid section count: {section_count}")

        note_count = read_uint32(self._stream)
        if not fits_signed32(note_count) or not 1 <= note_count <= MAX_NOTES:
            raise NRBFormatError(f"Invalid note count: {note_count}")

        return section_count, note_count

    def _skip_reserved(self) -> None:
        for _ in range(RESERVED_FIELDS):
            if read_uint32(self._stream) is None:
                raise NRBFormatError("Truncated NRB header")

    def _read_offset(self, what: str) -> int:
        value = read_uint64(self._stream)
        if value is None:
            raise NRBFormatError(f"Truncated {what}")
        if not fits_signed64(value):
            raise NRBFormatError(f"{what} out of range: {value}")
        return value

    def _read_sections(self, count: int) -> List[int]:
        sections: List[int] = []

        for i in range(count):
            offset = self._read_offset(f"section {i} offset")
            problem = section_problem(offset, sections)
            if problem:
                raise NRBFormatError(f"Section {i}: {problem}")
            sections.append(offset)

        return sections

    def _read_notes(self, count: int, sections: List[int]) -> List[Note]:
        notes: List[Note] = []

        for i in range(count):
            note = self._read_note(i)
            problem = note_problem(note, sections)
            if problem:
                raise NRBFormatError(f"Note {i}: {problem}")
            notes.append(note)

        return notes

    def _read_note(self, index: int) -> Note:
        """Read the seven fields of one note record."""
        start = self._read_offset(f"note {index} start")
        release = self._read_offset(f"note {index} release")
        pitch = read_bias8(self._stream)
        articulation = read_byte(self._stream)
        ramp = read_uint16(self._stream)
        sect = read_uint16(self._stream)
        layer_i = read_uint16(self._stream)

        if None in (pitch, articulation, ramp, sect, layer_i):
            raise NRBFormatError(f"Truncated note {index}")

        return Note(
            start=start,
            release=release,
            pitch=pitch,
            articulation=articulation,
            ramp=ramp,
            sect=sect,
            layer_i=layer_i,
        )

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file starts with the NRB signature.

        Args:
            filepath: Path to check

        Returns:
            True if the file appears to be NRB
        """
        filepath = Path(filepath)

        try:
            with open(filepath, "rb") as f:
                first = read_uint32(f)
                second = read_uint32(f)
        except OSError:
            return False

        return (first, second) == cls.SIGNATURE

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> dict:
        """
        Get header information about an NRB file without parsing its tables.

        Args:
            filepath: Path to .nrb file

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)

        with open(filepath, "rb") as f:
            data = f.read()

        info = {
            "valid": False,
            "size": len(data),
            "version": VersionStatus.UNREADABLE,
        }

        if len(data) < cls.HEADER_SIZE:
            return info

        header = NRBHeader.unpack(data)

        info.update(
            {
                "valid": header.is_valid() and len(data) >= header.data_size,
                "version": header.version_status,
                "version_string": f"{header.major}.{header.minor}",
                "sections": header.section_count,
                "notes": header.note_count,
                "expected_size": header.data_size,
            }
        )
        return info
