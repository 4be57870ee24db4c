"""Utility functions for noirbin."""

from noirbin.utils.validation import (
    ContractViolation,
    NRBFormatError,
    note_problem,
    section_problem,
)

__all__ = [
    "ContractViolation",
    "NRBFormatError",
    "note_problem",
    "section_problem",
]
