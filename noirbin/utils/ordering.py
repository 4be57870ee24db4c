"""
Note ordering helpers.
"""

from operator import attrgetter
from typing import List

from noirbin.models.note import Note

_by_start = attrgetter("start")


def sort_by_start(notes: List[Note]) -> None:
    """
    Sort notes in place by ascending start time.

    Notes that share a start time may end up in any relative order.
    Sorting an already sorted list leaves it unchanged.
    """
    if len(notes) > 1:
        notes.sort(key=_by_start)
