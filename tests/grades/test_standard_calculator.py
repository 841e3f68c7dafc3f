import pytest

from src.rotc_system.rotc_system.core.enums import GradeStatus
from src.rotc_system.rotc_system.core.exceptions import InvalidGradeInput
from src.rotc_system.rotc_system.grades.calculator.standard_calculator import (
    StandardRotcCalculator,
    aptitude_score,
    attendance_score,
    exam_grade,
    ttl,
)
from src.rotc_system.rotc_system.grades.model import GradeInputs


def test_full_attendance_perfect_merit_exam_80():
    inputs = GradeInputs(attendance_days_present=15, merit=100, demerit=0, exam_score_raw=80)

    result = StandardRotcCalculator().compute(inputs)

    assert result.attendance_score == 30
    assert result.ttl == 0
    assert result.aptitude_score == 30
    assert result.final_grade == 60
    assert result.exam_grade == 32
    assert result.overall_grade == 62
    assert result.equivalent == 5.0
    assert result.status == GradeStatus.FAILED
    assert not result.passed


def test_equivalent_decides_pass_or_fail():
    calc = StandardRotcCalculator()

    # 30 + 3 + 40
    failing = calc.compute(GradeInputs(attendance_days_present=15, merit=90, demerit=10, exam_score_raw=100))
    assert failing.overall_grade == pytest.approx(73)
    assert failing.aptitude_score == pytest.approx(24)
    assert failing.status == GradeStatus.FAILED

    # 30 + 7.5 + 40
    passing = calc.compute(GradeInputs(attendance_days_present=15, merit=100, demerit=25, exam_score_raw=100))
    assert passing.overall_grade == pytest.approx(77.5)
    assert passing.aptitude_score == pytest.approx(22.5)
    assert passing.equivalent == 2.75
    assert passing.passed


def test_compute_is_deterministic():
    inputs = GradeInputs(attendance_days_present=11, merit=87.5, demerit=12.5, exam_score_raw=73)
    calc = StandardRotcCalculator()

    assert calc.compute(inputs) == calc.compute(inputs)


def test_attendance_score_is_capped_at_30():
    assert attendance_score(0) == 0
    assert attendance_score(7) == 14
    assert attendance_score(15) == 30
    assert attendance_score(20) == 30


def test_component_formulas():
    assert ttl(10) == pytest.approx(3)
    assert aptitude_score(80, 20) == pytest.approx(18)
    assert exam_grade(50) == pytest.approx(20)
    for raw in (33.3, 57.7, 91.1):
        assert exam_grade(raw) == raw / 100 * 40


def test_more_than_fifteen_days_is_rejected_by_compute():
    with pytest.raises(InvalidGradeInput):
        StandardRotcCalculator().compute(GradeInputs(attendance_days_present=20, exam_score_raw=80))


@pytest.mark.parametrize(
    "inputs",
    [
        GradeInputs(attendance_days_present=-1, exam_score_raw=80),
        GradeInputs(attendance_days_present=10.5, exam_score_raw=80),
        GradeInputs(attendance_days_present=10, exam_score_raw=101),
        GradeInputs(attendance_days_present=10, exam_score_raw=80, merit=-5),
        GradeInputs(attendance_days_present=10, exam_score_raw=80, demerit=100.1),
        GradeInputs(attendance_days_present=10, exam_score_raw=float("nan")),
        GradeInputs(attendance_days_present=10, exam_score_raw="80"),
    ],
)
def test_out_of_domain_inputs_are_rejected(inputs):
    with pytest.raises(InvalidGradeInput):
        StandardRotcCalculator().compute(inputs)
