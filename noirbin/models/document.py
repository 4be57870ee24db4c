"""
Document model - the top-level container for NRB score data.
"""

import logging
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from noirbin.constants import (
    MAX_NOTES,
    MAX_SECTIONS,
    NOTE_CAPACITY_INIT,
    SECTION_CAPACITY_INIT,
)
from noirbin.models.note import Note
from noirbin.utils.ordering import sort_by_start
from noirbin.utils.validation import (
    ContractViolation,
    validate_index,
    validate_note,
    validate_section_offset,
)

logger = logging.getLogger(__name__)


def _grow(capacity: int, count: int, initial: int, ceiling: int) -> int:
    """
    Compute the table capacity needed to store one more entry.

    Doubles the capacity (never below the initial allocation) until it
    exceeds count, clamped to ceiling.
    """
    while capacity <= count:
        capacity = max(capacity * 2, initial)
    return min(capacity, ceiling)


class Document:
    """
    An NRB score: a section table and a note table.

    The section table always holds at least one section, section 0 is at
    offset 0, and offsets never decrease. Every note references an
    existing section and starts no earlier than that section's offset.
    Both tables are validated on every mutation, so a Document cannot
    hold data that would not survive a serialize/parse round trip.

    Notes are copied in on write and copied out on read; callers never
    hold a live reference into the tables.

    Example:
        doc = Document.create_empty()
        doc.append_section(2_000_000)
        doc.append_note(Note(start=2_000_000, release=2_500_000, sect=1))
        NRBWriter.write(doc, "score.nrb")
    """

    def __init__(self):
        self._sections: List[int] = [0]
        self._notes: List[Note] = []
        self._section_capacity = SECTION_CAPACITY_INIT
        self._note_capacity = NOTE_CAPACITY_INIT
        self._released = False

    @classmethod
    def create_empty(cls) -> "Document":
        """
        Create an empty document.

        Returns:
            Document with section 0 at offset 0 and no notes
        """
        return cls()

    @classmethod
    def from_tables(cls, sections: Iterable[int], notes: Iterable[Note] = ()) -> "Document":
        """
        Build a document from plain section offsets and notes.

        Every entry goes through append_section/append_note, so the
        result obeys the same rules as any other document.

        Args:
            sections: Section offsets; the first must be 0
            notes: Notes to append in order

        Returns:
            New Document

        Raises:
            ContractViolation: If any offset or note is invalid, or a
                table would exceed its ceiling
        """
        doc = cls()
        offsets = list(sections)
        if not offsets or offsets[0] != 0:
            raise ContractViolation("Invalid section: first section must be at offset 0")

        for offset in offsets[1:]:
            if not doc.append_section(offset):
                raise ContractViolation(f"Too many sections (max {MAX_SECTIONS})")
        for note in notes:
            if not doc.append_note(note):
                raise ContractViolation(f"Too many notes (max {MAX_NOTES})")
        return doc

    @classmethod
    def _from_parsed(cls, sections: List[int], notes: List[Note]) -> "Document":
        """Wrap tables that the reader has already validated."""
        doc = cls()
        doc._sections = sections
        doc._notes = notes
        doc._section_capacity = len(sections)
        doc._note_capacity = len(notes)
        return doc

    def _check_live(self) -> None:
        if self._released:
            raise ContractViolation("Document has been released")

    def _check_note(self, note: Note) -> None:
        if not isinstance(note, Note):
            raise ContractViolation(f"Expected a Note, got {type(note).__name__}")
        validate_note(note, self._sections)

    # Counts and capacities

    def section_count(self) -> int:
        """Number of sections, 1-65535."""
        self._check_live()
        return len(self._sections)

    def note_count(self) -> int:
        """Number of notes, 0-1048576."""
        self._check_live()
        return len(self._notes)

    @property
    def section_capacity(self) -> int:
        self._check_live()
        return self._section_capacity

    @property
    def note_capacity(self) -> int:
        self._check_live()
        return self._note_capacity

    @property
    def is_released(self) -> bool:
        return self._released

    # Sections

    def section_offset(self, index: int) -> int:
        """
        Get the start offset of a section.

        Args:
            index: Section index, 0 to section_count() - 1

        Returns:
            Offset in microseconds

        Raises:
            ContractViolation: If index is out of range
        """
        self._check_live()
        validate_index(index, len(self._sections), "section index")
        return self._sections[index]

    @property
    def sections(self) -> Tuple[int, ...]:
        """All section offsets, in order."""
        self._check_live()
        return tuple(self._sections)

    def append_section(self, offset: int) -> bool:
        """
        Define a new section starting at the given offset.

        Args:
            offset: Offset in microseconds, not less than the offset of
                the current last section

        Returns:
            True if added, False if the section table is full

        Raises:
            ContractViolation: If offset is negative or out of order
        """
        self._check_live()
        validate_section_offset(offset, self._sections)

        count = len(self._sections)
        if count >= MAX_SECTIONS:
            logger.debug("append_section refused: section table full (%d)", count)
            return False

        if count >= self._section_capacity:
            self._section_capacity = _grow(
                self._section_capacity, count, SECTION_CAPACITY_INIT, MAX_SECTIONS
            )

        self._sections.append(offset)
        return True

    # Notes

    def get_note(self, index: int) -> Note:
        """
        Get a copy of a note.

        Args:
            index: Note index, 0 to note_count() - 1

        Returns:
            Copy of the stored note

        Raises:
            ContractViolation: If index is out of range
        """
        self._check_live()
        validate_index(index, len(self._notes), "note index")
        return self._notes[index].copy()

    def set_note(self, index: int, note: Note) -> None:
        """
        Replace an existing note.

        Args:
            index: Note index, 0 to note_count() - 1
            note: New note data (copied in)

        Raises:
            ContractViolation: If index is out of range or note is invalid
        """
        self._check_live()
        validate_index(index, len(self._notes), "note index")
        self._check_note(note)
        self._notes[index] = note.copy()

    def append_note(self, note: Note) -> bool:
        """
        Append a new note.

        Notes may be appended in any order, but a note can only reference
        sections that are already defined.

        Args:
            note: Note to append (copied in)

        Returns:
            True if added, False if the note table is full

        Raises:
            ContractViolation: If note is invalid
        """
        self._check_live()
        self._check_note(note)

        count = len(self._notes)
        if count >= MAX_NOTES:
            logger.debug("append_note refused: note table full (%d)", count)
            return False

        if count >= self._note_capacity:
            self._note_capacity = _grow(self._note_capacity, count, NOTE_CAPACITY_INIT, MAX_NOTES)

        self._notes.append(note.copy())
        return True

    def iter_notes(self) -> Iterator[Note]:
        """Iterate over copies of all notes, in table order."""
        self._check_live()
        for note in self._notes:
            yield note.copy()

    def notes(self) -> List[Note]:
        """Get copies of all notes, in table order."""
        return list(self.iter_notes())

    def sort_notes(self) -> None:
        """Sort notes by ascending start time."""
        self._check_live()
        sort_by_start(self._notes)

    # Lifecycle

    def release(self) -> None:
        """
        Release both tables.

        Any further use of the document is a contract violation.
        Releasing twice is allowed.
        """
        self._sections = []
        self._notes = []
        self._section_capacity = 0
        self._note_capacity = 0
        self._released = True

    def __enter__(self) -> "Document":
        self._check_live()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    # Comparison and export

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        self._check_live()
        return {
            "sections": list(self._sections),
            "notes": [note.to_dict() for note in self._notes],
        }

    def __len__(self) -> int:
        return self.note_count()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        if self._released or other._released:
            return self is other
        return self._sections == other._sections and self._notes == other._notes

    __hash__ = None

    def __repr__(self) -> str:
        if self._released:
            return "Document(released)"
        return f"Document(sections={len(self._sections)}, notes={len(self._notes)})"
