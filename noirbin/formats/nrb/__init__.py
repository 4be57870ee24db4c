"""NRB format handlers."""

from noirbin.formats.nrb.header import NRBHeader
from noirbin.formats.nrb.reader import NRBReader, ParseResult
from noirbin.formats.nrb.writer import NRBWriter

__all__ = ["NRBReader", "NRBWriter", "NRBHeader", "ParseResult"]
