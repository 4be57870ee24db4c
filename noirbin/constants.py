"""
Format constants for NoiR Binary (NRB) files.

File layout (big-endian throughout), version 1.0:
    Offset  Size    Description
    0x00    4       Primary signature
    0x04    4       Secondary signature
    0x08    1       Major version (1)
    0x09    1       Minor version (0)
    0x0A    2       Section count
    0x0C    4       Note count
    0x10    16      Reserved (4 x uint32, written as zero)
    0x20    8*S     Section table
    ...     24*N    Note table
"""

from enum import IntEnum

# Signatures
SIGNATURE_PRIMARY = 0x72EDF078
SIGNATURE_SECONDARY = 0x2E6E7262  # ".nrb"

VERSION_MAJOR = 1
VERSION_MINOR = 0

HEADER_SIZE = 32
RESERVED_FIELDS = 4
SECTION_RECORD_SIZE = 8
NOTE_RECORD_SIZE = 24

# Table ceilings
MAX_SECTIONS = 65535
MAX_NOTES = 1048576

# Initial table capacities
SECTION_CAPACITY_INIT = 16
NOTE_CAPACITY_INIT = 256

# Note field ranges
MIN_PITCH = -39
MAX_PITCH = 48
MAX_ARTICULATION = 61
MAX_RAMP = 16384

ARTICULATION_PEDAL = 0x80
ARTICULATION_GRACE = 0x40
ARTICULATION_INDEX_MASK = 0x3F

# Wire widths
BIAS8 = 128
MIN_BIAS8 = -128
MAX_BIAS8 = 127
MAX_UINT8 = 0xFF
MAX_UINT16 = 0xFFFF
MAX_UINT32 = 0xFFFFFFFF
MAX_UINT64 = 0xFFFFFFFFFFFFFFFF
MAX_INT32 = 0x7FFFFFFF
MAX_INT64 = 0x7FFFFFFFFFFFFFFF


class VersionStatus(IntEnum):
    """
    Outcome of reading the NRB signature and version fields.

    Values match the status codes of the reference NRB library.
    """

    SUPPORTED = 0  # Version 1.0
    MINOR_UNSUPPORTED = 1  # Major version 1, unknown minor; parse continues
    MAJOR_UNSUPPORTED = 2  # Parse always fails
    UNREADABLE = 3  # Not an NRB stream

    @property
    def is_readable(self) -> bool:
        """Check if a document may be produced under this status."""
        return self in (VersionStatus.SUPPORTED, VersionStatus.MINOR_UNSUPPORTED)

    @property
    def description(self) -> str:
        return _VERSION_DESCRIPTIONS[self]


_VERSION_DESCRIPTIONS = {
    VersionStatus.SUPPORTED: "NRB version supported",
    VersionStatus.MINOR_UNSUPPORTED: "NRB minor version unsupported",
    VersionStatus.MAJOR_UNSUPPORTED: "NRB major version unsupported",
    VersionStatus.UNREADABLE: "Can't read NRB version",
}
