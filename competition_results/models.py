"""
Core dataclasses for the competition results system.

Defines the score verdicts, the submission batch a judge sends, and the
ContestantResult records the store hands back.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, NamedTuple

from .exceptions import ValidationError


class Score(Enum):
    """The fixed verdict values a judge may award."""

    YES = 10.0
    ALT1 = 4.5
    ALT2 = 4.3
    ALT3 = 4.2
    NO = 0.0

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def is_allowed(cls, value: float) -> bool:
        """Exact match against the verdict values, no tolerance."""
        return any(value == member.value for member in cls)

    @classmethod
    def verdict(cls, value: float) -> str:
        """Return the verdict label for an allowed score value."""
        return cls(value).label

    @classmethod
    def describe_allowed(cls) -> str:
        """Human readable list of allowed values, lowest first."""
        members = sorted(cls, key=lambda s: s.value)
        return ", ".join(f"{m.value:g} ({m.label})" for m in members)


class ResultKey(NamedTuple):
    """Storage key: one batch per judge per competition."""

    competition_id: int
    judge_id: int


@dataclass
class ContestantScore:
    """One line of a judge's submission."""

    contestant_id: int
    name: str
    score: float


@dataclass
class ResultSubmission:
    """A judge's full batch of scores for one competition."""

    competition_id: int
    judge_id: int
    results: list[ContestantScore] = field(default_factory=list)

    @property
    def key(self) -> ResultKey:
        return ResultKey(self.competition_id, self.judge_id)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResultSubmission":
        """
        Build a submission from its camelCase wire payload.

        Only the shape is checked here; value rules are applied by the store.

        Raises:
            ValidationError: If a required field is missing or not a list/object
        """
        try:
            raw_results = data["results"]
            if not isinstance(raw_results, list):
                raise ValidationError("results must be a list", field="results", value=raw_results)
            results = [
                ContestantScore(
                    contestant_id=item["contestantId"],
                    name=item.get("name", ""),
                    score=item["score"],
                )
                for item in raw_results
            ]
            return cls(
                competition_id=data["competitionId"],
                judge_id=data["judgeId"],
                results=results,
            )
        except KeyError as e:
            raise ValidationError(f"Missing required field: {e.args[0]}", field=str(e.args[0])) from e
        except (TypeError, AttributeError) as e:
            raise ValidationError(f"Malformed submission: {e}") from e


@dataclass(frozen=True)
class ContestantResult:
    """A stored score for one contestant from one judge."""

    id: int
    contestant_id: int
    name: str
    score: float
    competition_id: int
    judge_id: int
    submitted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def key(self) -> ResultKey:
        return ResultKey(self.competition_id, self.judge_id)

    @property
    def verdict(self) -> str:
        return Score.verdict(self.score)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the camelCase field names of the HTTP payload."""
        return {
            "id": self.id,
            "contestantId": self.contestant_id,
            "name": self.name,
            "score": self.score,
            "competitionId": self.competition_id,
            "judgeId": self.judge_id,
            "submittedAt": self.submitted_at.isoformat(timespec="microseconds"),
        }
