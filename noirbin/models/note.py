"""
Note event model for NRB documents.
"""

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict

from noirbin.constants import (
    ARTICULATION_GRACE,
    ARTICULATION_INDEX_MASK,
    ARTICULATION_PEDAL,
    MAX_RAMP,
)


@dataclass
class Note:
    """
    A timed note event anchored to a section.

    Attributes:
        start: Start time offset in microseconds (>= 0, and not before
            the offset of the note's section)
        release: Release time offset in microseconds (> start)
        pitch: Semitones from middle C, -39 to 48
        articulation: Bit 7 sustain pedal, bit 6 grace note,
            bits 0-5 articulation index (0-61)
        ramp: Ramp value 0-16384, encoding 0.0-1.0
        sect: Index of the section this note belongs to
        layer_i: Zero-based layer index within the section
    """

    start: int
    release: int
    pitch: int = 0
    articulation: int = 0
    ramp: int = 0
    sect: int = 0
    layer_i: int = 0

    @classmethod
    def from_fields(
        cls,
        start: int,
        release: int,
        pitch: int = 0,
        articulation_index: int = 0,
        pedal: bool = False,
        grace: bool = False,
        ramp: int = 0,
        sect: int = 0,
        layer: int = 1,
    ) -> "Note":
        """
        Create a note from unpacked articulation flags and a one-based layer.

        Args:
            start: Start time in microseconds
            release: Release time in microseconds
            pitch: Semitones from middle C
            articulation_index: Articulation index (low six bits)
            pedal: Sustain pedal flag
            grace: Grace note flag
            ramp: Integer ramp value
            sect: Section index
            layer: One-based layer number

        Returns:
            New Note
        """
        articulation = articulation_index & ARTICULATION_INDEX_MASK
        if pedal:
            articulation |= ARTICULATION_PEDAL
        if grace:
            articulation |= ARTICULATION_GRACE

        return cls(
            start=start,
            release=release,
            pitch=pitch,
            articulation=articulation,
            ramp=ramp,
            sect=sect,
            layer_i=layer - 1,
        )

    @property
    def duration(self) -> int:
        """Duration in microseconds."""
        return self.release - self.start

    @property
    def pedal(self) -> bool:
        """Check if the note was modified by a sustain pedal."""
        return bool(self.articulation & ARTICULATION_PEDAL)

    @property
    def grace(self) -> bool:
        """Check if this is a grace note."""
        return bool(self.articulation & ARTICULATION_GRACE)

    @property
    def articulation_index(self) -> int:
        """Articulation index (low six bits), 0-61."""
        return self.articulation & ARTICULATION_INDEX_MASK

    @property
    def ramp_fraction(self) -> float:
        """Ramp as a fraction in [0.0, 1.0]."""
        return self.ramp / MAX_RAMP

    @property
    def layer(self) -> int:
        """One-based layer number."""
        return self.layer_i + 1

    def copy(self) -> "Note":
        """Create an independent copy of this note."""
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary of the stored fields."""
        return asdict(self)
