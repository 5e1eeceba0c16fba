from conftest import make_score
from scoreboard.services.activeness import (
    TOTAL_MODULES,
    calculate_batch_activeness_metrics,
    calculate_student_activeness_metrics,
    get_modules_list,
    get_student_activeness_array,
    group_scores_by_student,
)


def test_modules_list():
    assert TOTAL_MODULES == 10
    assert get_modules_list() == list(range(1, 11))


def test_completion_ignores_module_numbers():
    first = [make_score("A", n, 5) for n in (1, 2, 3, 4)]
    second = [make_score("A", n, 5) for n in (7, 8, 9, 10)]

    assert calculate_student_activeness_metrics(first).completion_percentage == 40
    assert calculate_student_activeness_metrics(second).completion_percentage == 40


def test_student_metrics():
    scores = [make_score("A", 1, 6), make_score("A", 2, 9), make_score("A", 3, 8)]
    metrics = calculate_student_activeness_metrics(scores)

    assert metrics.name == "A"
    assert metrics.total_score == 23
    assert metrics.average_score == 7.67
    assert metrics.modules_completed == 3
    assert metrics.completion_percentage == 30
    assert metrics.module_scores == {1: 6, 2: 9, 3: 8}


def test_repeated_module_keeps_last_score_but_counts_both():
    scores = [make_score("A", 2, 4), make_score("A", 2, 7)]
    metrics = calculate_student_activeness_metrics(scores)

    assert metrics.module_scores == {2: 7}
    assert metrics.modules_completed == 2
    assert metrics.total_score == 11


def test_empty_scores():
    assert calculate_student_activeness_metrics([]) is None
    batch = calculate_batch_activeness_metrics([])
    assert batch.total_students == 0
    assert batch.most_active_student == ""
    assert batch.highest_score == 0


def test_batch_metrics():
    scores = [
        make_score("A", 1, 5),
        make_score("B", 1, 9),
        make_score("A", 2, 6),
    ]
    batch = calculate_batch_activeness_metrics(scores)

    assert batch.total_students == 2
    assert batch.total_modules_completed == 3
    assert batch.average_batch_activeness == round(20 / 3, 2)
    assert batch.most_active_student == "A"
    assert batch.highest_score == 11


def test_most_active_tie_goes_to_first_student():
    scores = [make_score("Late", 1, 8), make_score("Early", 1, 8)]
    assert calculate_batch_activeness_metrics(scores).most_active_student == "Late"


def test_all_zero_board_has_no_most_active_student():
    scores = [make_score("A", 1, 0), make_score("B", 1, 0)]
    batch = calculate_batch_activeness_metrics(scores)
    assert batch.most_active_student == ""
    assert batch.highest_score == 0


def test_activeness_array_groups_by_exact_name():
    scores = [make_score("A", 1, 5), make_score("a", 1, 5), make_score("A", 2, 5)]
    assert list(group_scores_by_student(scores)) == ["A", "a"]
    metrics = get_student_activeness_array(scores)
    assert [(m.name, m.modules_completed) for m in metrics] == [("A", 2), ("a", 1)]
