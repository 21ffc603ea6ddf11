"""
Competition Results - judge score submission service

Judges submit one batch of verdict scores per competition; batches are
kept in memory keyed by (competition, judge) and served over HTTP.
"""

from .exceptions import ConflictError, NotFoundError, ResultStoreError, ValidationError
from .interfaces import ResultStore
from .models import ContestantResult, ContestantScore, ResultKey, ResultSubmission, Score
from .storage import InMemoryResultStore

__version__ = "0.1.0"
__all__ = [
    "ConflictError",
    "ContestantResult",
    "ContestantScore",
    "InMemoryResultStore",
    "NotFoundError",
    "ResultKey",
    "ResultStore",
    "ResultStoreError",
    "ResultSubmission",
    "Score",
    "ValidationError",
]
