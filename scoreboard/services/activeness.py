# scoreboard/services/activeness.py
from typing import Dict, Iterable, List, Optional, Sequence

from scoreboard.schema.activeness import (
    TOTAL_MODULES,
    BatchActivenessMetrics,
    StudentActivenessMetrics,
)


def get_modules_list() -> List[int]:
    return list(range(1, TOTAL_MODULES + 1))


def group_scores_by_student(scores: Iterable) -> Dict[str, List]:
    """Partition module scores by exact student name, in first-seen order."""
    grouped: Dict[str, List] = {}
    for score in scores:
        grouped.setdefault(score.student_name, []).append(score)
    return grouped


def calculate_student_activeness_metrics(
    scores: Sequence,
) -> Optional[StudentActivenessMetrics]:
    """
    Summarize one student's module scores.

    `modules_completed` counts records, and completion is measured against
    TOTAL_MODULES. When a module was recorded twice the later record wins
    in `module_scores` but both still count towards the totals.
    """
    if not scores:
        return None

    module_scores: Dict[int, float] = {}
    total_score = 0
    for score in scores:
        module_scores[score.module_number] = score.activeness_score
        total_score += score.activeness_score

    modules_completed = len(scores)

    return StudentActivenessMetrics(
        name=scores[0].student_name,
        total_score=total_score,
        average_score=round(total_score / modules_completed, 2),
        modules_completed=modules_completed,
        completion_percentage=round(modules_completed / TOTAL_MODULES * 100, 1),
        module_scores=module_scores,
    )


def calculate_batch_activeness_metrics(all_scores: Sequence) -> BatchActivenessMetrics:
    """
    Summarize every module score on a board.

    The most active student is the one with the highest total. Ties go to
    the student seen first, and a board where every total is zero has no
    most active student.
    """
    if not all_scores:
        return BatchActivenessMetrics()

    values = [score.activeness_score for score in all_scores]

    student_totals: Dict[str, float] = {}
    for score in all_scores:
        student_totals[score.student_name] = (
            student_totals.get(score.student_name, 0) + score.activeness_score
        )

    most_active_student = ""
    highest_score = 0
    for name, total in student_totals.items():
        if total > highest_score:
            highest_score = total
            most_active_student = name

    return BatchActivenessMetrics(
        total_students=len(student_totals),
        average_batch_activeness=round(sum(values) / len(all_scores), 2),
        total_modules_completed=len(all_scores),
        most_active_student=most_active_student,
        highest_score=highest_score,
    )


def get_student_activeness_array(scores: Iterable) -> List[StudentActivenessMetrics]:
    metrics = []
    for student_scores in group_scores_by_student(scores).values():
        metric = calculate_student_activeness_metrics(student_scores)
        if metric:
            metrics.append(metric)
    return metrics
