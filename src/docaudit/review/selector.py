"""Assignment selector — uniform-random reviewer choice.

No memory of past assignments and no fairness guarantee across runs; each
run is an independent draw. The randomness source is pluggable so tests
can use a seeded PRNG.
"""

from __future__ import annotations

import random
from typing import Optional, Sequence, Union

from docaudit.errors import NoAssigneesError
from docaudit.review.roster import AssigneePool


def choose_assignee(
    pool: Union[AssigneePool, Sequence[str]],
    rng: Optional[random.Random] = None,
) -> str:
    """Pick one reviewer uniformly at random.

    Raises NoAssigneesError if the pool is empty after trimming blanks.
    """
    if not isinstance(pool, AssigneePool):
        pool = AssigneePool(pool)
    members = pool.members()
    if not members:
        raise NoAssigneesError("No team members available")
    rng = rng or random.Random()
    return members[rng.randrange(len(members))]

