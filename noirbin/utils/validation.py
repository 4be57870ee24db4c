"""
Validation rules for NRB document data.

The same predicates guard both ways data can enter a Document: parsing an
untrusted stream and programmatic mutation. Each predicate returns a
description of the first violated rule, or None when the data is valid,
and the caller picks the exception class:

- ContractViolation for invalid arguments passed to the API (caller error)
- NRBFormatError for malformed input data (recoverable)
"""

from typing import Optional, Sequence

from noirbin.constants import (
    ARTICULATION_INDEX_MASK,
    MAX_ARTICULATION,
    MAX_INT64,
    MAX_PITCH,
    MAX_RAMP,
    MAX_UINT8,
    MAX_UINT16,
    MIN_PITCH,
)


class ContractViolation(Exception):
    """Raised when the API is called with invalid arguments."""

    pass


class NRBFormatError(ValueError):
    """Raised when NRB input data is malformed."""

    pass


def is_int(value) -> bool:
    """Check for a plain integer (bool is rejected)."""
    return isinstance(value, int) and not isinstance(value, bool)


def _field_problem(name: str, value, low: int, high: int) -> Optional[str]:
    if not is_int(value):
        return f"{name} must be an integer, got {type(value).__name__}"
    if not low <= value <= high:
        return f"{name} must be {low}-{high}, got {value}"
    return None


def note_problem(note, sections: Sequence[int]) -> Optional[str]:
    """
    Check a note against the section table it will belong to.

    Rules, in order:
        1. start >= 0
        2. release > start
        3. pitch in [MIN_PITCH, MAX_PITCH]
        4. articulation index (low six bits) <= MAX_ARTICULATION
        5. ramp <= MAX_RAMP
        6. sect < section count
        7. start >= offset of the note's section

    Field widths are checked alongside, since the wire format cannot
    carry wider values. The pedal and grace flag bits are never checked.

    Args:
        note: Note-like object
        sections: Section offsets of the owning document

    Returns:
        Description of the first problem found, or None if valid
    """
    problem = _field_problem("start", note.start, 0, MAX_INT64)
    if problem:
        return problem

    if not is_int(note.release):
        return f"release must be an integer, got {type(note.release).__name__}"
    if note.release <= note.start:
        return f"release ({note.release}) must be greater than start ({note.start})"
    if note.release > MAX_INT64:
        return f"release must be at most {MAX_INT64}, got {note.release}"

    problem = _field_problem("pitch", note.pitch, MIN_PITCH, MAX_PITCH)
    if problem:
        return problem

    problem = _field_problem("articulation", note.articulation, 0, MAX_UINT8)
    if problem:
        return problem
    if (note.articulation & ARTICULATION_INDEX_MASK) > MAX_ARTICULATION:
        return (
            f"articulation index must be 0-{MAX_ARTICULATION}, "
            f"got {note.articulation & ARTICULATION_INDEX_MASK}"
        )

    problem = _field_problem("ramp", note.ramp, 0, MAX_RAMP)
    if problem:
        return problem

    if not is_int(note.sect) or note.sect < 0:
        return f"sect must be a non-negative integer, got {note.sect!r}"
    if note.sect >= len(sections):
        return f"sect {note.sect} out of range ({len(sections)} sections defined)"

    problem = _field_problem("layer_i", note.layer_i, 0, MAX_UINT16)
    if problem:
        return problem

    if note.start < sections[note.sect]:
        return (
            f"start ({note.start}) precedes offset of section {note.sect} "
            f"({sections[note.sect]})"
        )

    return None


def section_problem(offset, sections: Sequence[int]) -> Optional[str]:
    """
    Check an offset about to be appended to a section table.

    The first section must be at offset zero; every later section must
    not precede the one before it.

    Args:
        offset: New section offset in microseconds
        sections: Current section offsets (may be empty while parsing)

    Returns:
        Description of the problem, or None if valid
    """
    problem = _field_problem("section offset", offset, 0, MAX_INT64)
    if problem:
        return problem

    if not sections:
        if offset != 0:
            return f"first section must be at offset 0, got {offset}"
        return None

    if offset < sections[-1]:
        return f"section offset {offset} precedes previous section offset {sections[-1]}"

    return None


def validate_note(note, sections: Sequence[int]) -> None:
    """
    Validate a note passed to the API.

    Raises:
        ContractViolation: If the note breaks any rule
    """
    problem = note_problem(note, sections)
    if problem:
        raise ContractViolation(f"Invalid note: {problem}")


def validate_section_offset(offset, sections: Sequence[int]) -> None:
    """
    Validate a section offset passed to the API.

    Raises:
        ContractViolation: If the offset breaks ordering or range rules
    """
    problem = section_problem(offset, sections)
    if problem:
        raise ContractViolation(f"Invalid section: {problem}")


def validate_index(index, count: int, name: str = "index") -> None:
    """
    Validate a table index.

    Raises:
        ContractViolation: If index is not in [0, count)
    """
    if not is_int(index) or not 0 <= index < count:
        raise ContractViolation(f"{name} {index!r} out of range ({count} entries)")
