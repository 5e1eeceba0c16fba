# scoreboard/services/scoring.py
"""
Interview round aggregation.

Every function here is pure: it takes rounds that were already fetched
(ORM rows or `InterviewRoundData` models, anything with `student_name`,
`score` and `interview_date` attributes) and derives summaries. Nothing is
stored.
"""
from typing import Dict, Iterable, List, Optional, Sequence

from scoreboard.schema.scoring import BatchMetrics, StudentMetrics


def group_rounds_by_student(rounds: Iterable) -> Dict[str, List]:
    """
    Partition rounds by exact student name.

    Names are compared as-is, so two spellings of the same student end up
    in two groups. Groups keep the order their first round was seen in.
    """
    grouped: Dict[str, List] = {}
    for round_ in rounds:
        grouped.setdefault(round_.student_name, []).append(round_)
    return grouped


def calculate_student_metrics(rounds: Sequence) -> Optional[StudentMetrics]:
    """
    Summarize one student's rounds.

    Args:
        rounds: Rounds belonging to a single student

    Returns:
        StudentMetrics, or None when there are no rounds
    """
    if not rounds:
        return None

    scores = [round_.score for round_ in rounds]
    total_score = sum(scores)

    last_interview_date = rounds[0].interview_date
    for round_ in rounds[1:]:
        if round_.interview_date > last_interview_date:
            last_interview_date = round_.interview_date

    return StudentMetrics(
        name=rounds[0].student_name,
        highest_score=max(scores),
        total_score=total_score,
        average_score=round(total_score / len(scores), 2),
        interviews_given=len(rounds),
        last_interview_date=last_interview_date,
    )


def calculate_batch_metrics(all_rounds: Sequence) -> BatchMetrics:
    """
    Summarize every round on a leaderboard.

    The average is taken over all rounds, not over per-student averages.
    """
    if not all_rounds:
        return BatchMetrics()

    unique_students = {round_.student_name for round_ in all_rounds}
    scores = [round_.score for round_ in all_rounds]

    return BatchMetrics(
        total_students=len(unique_students),
        total_interviews=len(all_rounds),
        average_score=round(sum(scores) / len(all_rounds), 2),
        highest_individual_score=max(scores),
    )


def get_student_metrics_array(rounds: Iterable) -> List[StudentMetrics]:
    metrics = []
    for student_rounds in group_rounds_by_student(rounds).values():
        metric = calculate_student_metrics(student_rounds)
        if metric:
            metrics.append(metric)
    return metrics
