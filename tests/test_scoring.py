from datetime import date

from conftest import make_round
from scoreboard.services.scoring import (
    calculate_batch_metrics,
    calculate_student_metrics,
    get_student_metrics_array,
    group_rounds_by_student,
)


def test_two_students_three_rounds():
    rounds = [make_round("A", 7), make_round("A", 9), make_round("B", 5)]

    student = calculate_student_metrics(group_rounds_by_student(rounds)["A"])
    assert student.average_score == 8
    assert student.total_score == 16
    assert student.interviews_given == 2
    assert student.highest_score == 9

    batch = calculate_batch_metrics(rounds)
    assert batch.total_students == 2
    assert batch.total_interviews == 3
    assert batch.average_score == 7
    assert batch.highest_individual_score == 9


def test_average_is_rounded_to_two_places():
    rounds = [make_round("A", 7), make_round("A", 8), make_round("A", 8)]
    metrics = calculate_student_metrics(rounds)
    assert metrics.average_score == round(23 / 3, 2) == 7.67


def test_empty_rounds():
    assert calculate_student_metrics([]) is None
    batch = calculate_batch_metrics([])
    assert batch.total_students == 0
    assert batch.total_interviews == 0
    assert batch.average_score == 0
    assert batch.highest_individual_score == 0
    assert get_student_metrics_array([]) == []


def test_grouping_is_exhaustive_and_disjoint():
    rounds = [
        make_round("Ann", 3),
        make_round("ann", 4),
        make_round("Ben", 5),
        make_round("Ann", 6),
        make_round("Ann ", 7),
    ]
    grouped = group_rounds_by_student(rounds)

    # Exact, case-sensitive names
    assert list(grouped) == ["Ann", "ann", "Ben", "Ann "]
    assert sum(len(group) for group in grouped.values()) == len(rounds)
    for name, group in grouped.items():
        assert all(round_.student_name == name for round_ in group)
    assert [r.score for r in grouped["Ann"]] == [3, 6]


def test_batch_average_of_equal_scores():
    rounds = [make_round(f"S{i}", 6.5) for i in range(7)]
    assert calculate_batch_metrics(rounds).average_score == 6.5


def test_batch_average_is_over_rounds_not_students():
    # Per-student averages would be (10 + 2) / 2 = 6
    rounds = [make_round("A", 10), make_round("B", 2), make_round("B", 2), make_round("B", 2)]
    assert calculate_batch_metrics(rounds).average_score == 4


def test_last_interview_date_is_latest():
    rounds = [
        make_round("A", 5, date(2024, 3, 1)),
        make_round("A", 6, date(2024, 5, 2)),
        make_round("A", 7, date(2024, 4, 9)),
    ]
    assert calculate_student_metrics(rounds).last_interview_date == date(2024, 5, 2)


def test_metrics_array_follows_grouping_order():
    rounds = [make_round("Zed", 1), make_round("Amy", 2), make_round("Zed", 3)]
    names = [metric.name for metric in get_student_metrics_array(rounds)]
    assert names == ["Zed", "Amy"]
