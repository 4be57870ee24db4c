"""Format handlers for NRB files."""

from noirbin.formats.nrb import NRBReader, NRBWriter, ParseResult

__all__ = ["NRBReader", "NRBWriter", "ParseResult"]
