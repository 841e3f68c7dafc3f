"""Overall grade to 1.0-5.0 equivalent (lower is better).

Bands are checked top-down; the first lower bound the grade reaches wins.
Anything below the last band is a failing 5.0.
"""

from __future__ import annotations

from typing import Sequence, Tuple

EQUIVALENCE_TABLE: Sequence[Tuple[float, float]] = (
    (97.0, 1.0),
    (94.0, 1.25),
    (91.0, 1.5),
    (88.0, 1.75),
    (85.0, 2.0),
    (82.0, 2.25),
    (79.0, 2.5),
    (76.0, 2.75),
    (75.0, 3.0),
)
FAILING_EQUIVALENT = 5.0


def lookup(overall_grade: float, table: Sequence[Tuple[float, float]] = EQUIVALENCE_TABLE) -> float:
    for lower_bound, equivalent in table:
        if overall_grade >= lower_bound:
            return equivalent
    return FAILING_EQUIVALENT
