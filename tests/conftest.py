"""Test configuration and fixtures."""

import struct

import pytest

from noirbin.constants import SIGNATURE_PRIMARY, SIGNATURE_SECONDARY
from noirbin.models.document import Document
from noirbin.models.note import Note


def build_nrb(
    sections=(0,),
    notes=((0, 1000, 0, 0, 0, 0, 0),),
    major=1,
    minor=0,
    section_count=None,
    note_count=None,
    signature=(SIGNATURE_PRIMARY, SIGNATURE_SECONDARY),
    reserved=(0, 0, 0, 0),
):
    """
    Build raw NRB bytes field by field, bypassing the writer.

    Notes are (start, release, pitch, articulation, ramp, sect, layer_i)
    tuples. Counts default to the table lengths.
    """
    if section_count is None:
        section_count = len(sections)
    if note_count is None:
        note_count = len(notes)

    data = bytearray()
    data += struct.pack(">II", *signature)
    data += bytes((major, minor))
    data += struct.pack(">HI", section_count, note_count)
    data += struct.pack(">4I", *reserved)
    for offset in sections:
        data += struct.pack(">Q", offset)
    for start, release, pitch, art, ramp, sect, layer in notes:
        data += struct.pack(">QQBBHHH", start, release, pitch + 128, art, ramp, sect, layer)
    return bytes(data)


@pytest.fixture
def nrb_builder():
    """Return the raw NRB byte builder."""
    return build_nrb


@pytest.fixture
def minimal_nrb():
    """One section at 0, one note at 0-1000."""
    return build_nrb()


@pytest.fixture
def sample_document():
    """A document with four sections and notes across them."""
    doc = Document.create_empty()
    doc.append_section(1_000_000)
    doc.append_section(1_000_000)
    doc.append_section(4_000_000)
    doc.append_note(Note(start=4_500_000, release=5_000_000, pitch=48, sect=3, layer_i=2))
    doc.append_note(Note(start=0, release=250_000, pitch=-39, articulation=0xC0 | 61))
    doc.append_note(Note(start=1_000_000, release=1_000_001, pitch=0, ramp=16384, sect=1))
    doc.append_note(Note(start=1_200_000, release=2_000_000, pitch=7, ramp=8192, sect=2))
    return doc


@pytest.fixture
def nrb_file(tmp_path, minimal_nrb):
    """Write the minimal NRB stream to a file and return its path."""
    path = tmp_path / "minimal.nrb"
    path.write_bytes(minimal_nrb)
    return path
