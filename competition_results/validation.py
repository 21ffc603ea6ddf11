"""
Submission validation.

The same rules guard both create and update, and always run before the
store is touched.
"""

from typing import Any

from .exceptions import ValidationError
from .models import ResultSubmission, Score


def _require_positive_int(value: Any, field: str, message: str) -> None:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field} must be an integer, got {value!r}", field=field, value=value)
    if value <= 0:
        raise ValidationError(message, field=field, value=value)


def validate_submission(submission: ResultSubmission) -> None:
    """
    Check a submission batch, raising on the first rule it breaks.

    Args:
        submission: The batch to check

    Raises:
        ValidationError: Naming the offending field and value
    """
    _require_positive_int(
        submission.competition_id, "competitionId", "CompetitionId must be greater than 0"
    )
    _require_positive_int(submission.judge_id, "judgeId", "JudgeId must be greater than 0")

    if not submission.results:
        raise ValidationError("At least one result is required", field="results", value=[])

    for result in submission.results:
        _require_positive_int(
            result.contestant_id,
            "contestantId",
            f"ContestantId must be greater than 0, got {result.contestant_id}",
        )

        score = result.score
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ValidationError(
                f"Score for contestant {result.contestant_id} must be a number, got {score!r}",
                field="score",
                value=score,
            )
        if not Score.is_allowed(score):
            raise ValidationError(
                f"Invalid score {score} for contestant {result.contestant_id}. "
                f"Valid scores are: {Score.describe_allowed()}",
                field="score",
                value=score,
            )
