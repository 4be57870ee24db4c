"""
NRB file header structure.

Header layout (32 bytes):
    Offset  Size    Description
    0x00    4       Primary signature (0x72EDF078)
    0x04    4       Secondary signature (0x2E6E7262, ".nrb")
    0x08    1       Major version
    0x09    1       Minor version
    0x0A    2       Section count
    0x0C    4       Note count
    0x10    16      Reserved (4 x uint32)
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import struct

from noirbin.constants import (
    HEADER_SIZE,
    MAX_NOTES,
    MAX_SECTIONS,
    NOTE_RECORD_SIZE,
    SECTION_RECORD_SIZE,
    SIGNATURE_PRIMARY,
    SIGNATURE_SECONDARY,
    VERSION_MAJOR,
    VERSION_MINOR,
    VersionStatus,
)

HEADER_STRUCT = struct.Struct(">IIBBHI4I")


@dataclass
class NRBHeader:
    """
    NRB file header fields.
    """

    signature: Tuple[int, int] = (SIGNATURE_PRIMARY, SIGNATURE_SECONDARY)
    major: int = VERSION_MAJOR
    minor: int = VERSION_MINOR
    section_count: int = 1
    note_count: int = 0
    reserved: Tuple[int, int, int, int] = field(default=(0, 0, 0, 0))

    @classmethod
    def unpack(cls, data: bytes) -> Optional["NRBHeader"]:
        """
        Decode a header from the first 32 bytes of data.

        Args:
            data: Raw file data

        Returns:
            Decoded header, or None if data is too short
        """
        if len(data) < HEADER_SIZE:
            return None

        fields = HEADER_STRUCT.unpack_from(data, 0)
        return cls(
            signature=(fields[0], fields[1]),
            major=fields[2],
            minor=fields[3],
            section_count=fields[4],
            note_count=fields[5],
            reserved=tuple(fields[6:10]),
        )

    def pack(self) -> bytes:
        """Encode the header as 32 bytes."""
        return HEADER_STRUCT.pack(
            self.signature[0],
            self.signature[1],
            self.major,
            self.minor,
            self.section_count,
            self.note_count,
            *self.reserved,
        )

    @property
    def has_signature(self) -> bool:
        return self.signature == (SIGNATURE_PRIMARY, SIGNATURE_SECONDARY)

    @property
    def version_status(self) -> VersionStatus:
        """Version status as reported by the reader for this header."""
        if not self.has_signature:
            return VersionStatus.UNREADABLE
        if self.major != VERSION_MAJOR:
            return VersionStatus.MAJOR_UNSUPPORTED
        if self.minor != VERSION_MINOR:
            return VersionStatus.MINOR_UNSUPPORTED
        return VersionStatus.SUPPORTED

    @property
    def data_size(self) -> int:
        """Expected total size of header plus both tables."""
        return (
            HEADER_SIZE
            + self.section_count * SECTION_RECORD_SIZE
            + self.note_count * NOTE_RECORD_SIZE
        )

    def is_valid(self) -> bool:
        """Check signature, major version and table counts."""
        return (
            self.version_status.is_readable
            and 1 <= self.section_count <= MAX_SECTIONS
            and 1 <= self.note_count <= MAX_NOTES
        )
