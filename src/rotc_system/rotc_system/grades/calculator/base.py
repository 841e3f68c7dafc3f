from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import GradeInputs, GradeResult


class GradeCalculator(ABC):
    """Calculator interface (Strategy Pattern for grading).

    Implementations must be pure: same inputs, same result, no state.
    """

    @abstractmethod
    def compute(self, inputs: GradeInputs) -> GradeResult:
        raise NotImplementedError
