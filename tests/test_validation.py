"""Tests for note and section validation rules."""

import pytest

from noirbin.models.note import Note
from noirbin.utils.validation import (
    ContractViolation,
    NRBFormatError,
    note_problem,
    section_problem,
    validate_index,
    validate_note,
    validate_section_offset,
)

SECTIONS = [0, 1000, 5000]


class TestNoteRules:
    """Test cases for the per-note rules."""

    def test_valid_note(self):
        assert note_problem(Note(start=1000, release=1001, sect=1), SECTIONS) is None

    @pytest.mark.parametrize(
        "fields,message",
        [
            ({"start": -1, "release": 10}, "start"),
            ({"start": 10, "release": 10}, "release"),
            ({"start": 10, "release": 5}, "release"),
            ({"pitch": -40}, "pitch"),
            ({"pitch": 49}, "pitch"),
            ({"articulation": 62}, "articulation index"),
            ({"articulation": 0x80 | 63}, "articulation index"),
            ({"articulation": 256}, "articulation"),
            ({"ramp": 16385}, "ramp"),
            ({"ramp": -1}, "ramp"),
            ({"sect": 3}, "sect"),
            ({"sect": -1}, "sect"),
            ({"layer_i": 0x10000}, "layer_i"),
            ({"start": 4999, "release": 6000, "sect": 2}, "precedes"),
            ({"start": 1 << 63, "release": (1 << 63) + 1}, "start"),
            ({"start": 0, "release": 1 << 63}, "release"),
        ],
    )
    def test_rule_violations(self, fields, message):
        base = {"start": 0, "release": 100}
        base.update(fields)
        problem = note_problem(Note(**base), SECTIONS)

        assert problem is not None
        assert message in problem

    def test_boundary_values_accepted(self):
        """Test the inclusive ends of every range."""
        for pitch in (-39, 48):
            assert note_problem(Note(start=0, release=1, pitch=pitch), SECTIONS) is None
        assert note_problem(Note(start=0, release=1, ramp=16384), SECTIONS) is None
        assert note_problem(Note(start=0, release=1, layer_i=65535), SECTIONS) is None
        assert note_problem(Note(start=0, release=(1 << 63) - 1), SECTIONS) is None

    def test_flag_bits_are_not_validated(self):
        """Test that any pedal/grace combination is accepted."""
        for flags in (0x00, 0x40, 0x80, 0xC0):
            note = Note(start=0, release=1, articulation=flags | 61)
            assert note_problem(note, SECTIONS) is None

    def test_non_integer_fields_rejected(self):
        assert "integer" in note_problem(Note(start=0.5, release=2), SECTIONS)
        assert "integer" in note_problem(Note(start=0, release=2, pitch=True), SECTIONS)
        assert "integer" in note_problem(Note(start=0, release="2"), SECTIONS)


class TestSectionRules:
    """Test cases for section offset ordering."""

    def test_first_section_must_be_zero(self):
        assert section_problem(0, []) is None
        assert "offset 0" in section_problem(5, [])

    def test_non_decreasing(self):
        assert section_problem(1000, SECTIONS[:2]) is None
        assert section_problem(2000, SECTIONS[:2]) is None
        assert "precedes" in section_problem(999, SECTIONS[:2])

    def test_negative_rejected(self):
        assert section_problem(-1, [0]) is not None


class TestErrorChannels:
    """Test that API checks raise contract violations, not format errors."""

    def test_validate_note_raises_contract_violation(self):
        with pytest.raises(ContractViolation, match="Invalid note"):
            validate_note(Note(start=5, release=5), SECTIONS)

    def test_validate_section_offset_raises_contract_violation(self):
        with pytest.raises(ContractViolation, match="Invalid section"):
            validate_section_offset(10, SECTIONS)

    def test_validate_index(self):
        validate_index(2, 3)
        with pytest.raises(ContractViolation, match="out of range"):
            validate_index(3, 3)
        with pytest.raises(ContractViolation):
            validate_index(-1, 3)

    def test_channels_are_distinct(self):
        assert not issubclass(ContractViolation, NRBFormatError)
        assert not issubclass(NRBFormatError, ContractViolation)
