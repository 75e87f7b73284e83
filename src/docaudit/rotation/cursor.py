"""Rotation cursor — round-robin candidate selection.

The file list is the lexicographically sorted directory listing, recomputed
every run. The cursor is the index of the last document checked; the next
candidate is the one after it, wrapping to the start. If the listing shrank
since the cursor was saved, the modulo re-normalises it silently.

Persisting the chosen index is the service's job, not this module's.
"""

from __future__ import annotations

from typing import Optional, Sequence

from docaudit.models.document import Selection


def select_next(sorted_files: Sequence[str], last_index: int) -> Optional[Selection]:
    """Return the candidate after ``last_index``, or None for an empty list."""
    if not sorted_files:
        return None
    index = (last_index + 1) % len(sorted_files)
    return Selection(file=sorted_files[index], index=index)
