"""
Abstract base class defining the result store interface.

Implementations must be safe to call from several threads at once; the
HTTP layer serves requests from a threadpool.
"""

from abc import ABC, abstractmethod

from .models import ContestantResult, ResultSubmission


class ResultStore(ABC):
    """Interface for storing judges' result batches."""

    @abstractmethod
    def create_results(self, submission: ResultSubmission) -> list[ContestantResult]:
        """
        Store a judge's first batch for a competition.

        Args:
            submission: The batch to store

        Returns:
            The stored results with their assigned ids

        Raises:
            ValidationError: If the batch breaks a validation rule
            ConflictError: If a batch already exists for the competition/judge pair
        """
        pass

    @abstractmethod
    def update_results(self, submission: ResultSubmission) -> list[ContestantResult]:
        """
        Replace a judge's existing batch for a competition.

        Contestants already present keep their result id.

        Raises:
            ValidationError: If the batch breaks a validation rule
            NotFoundError: If no batch exists for the competition/judge pair
        """
        pass

    @abstractmethod
    def get_results_by_competition(self, competition_id: int) -> list[ContestantResult]:
        """All results for a competition across judges (empty if none)."""
        pass

    @abstractmethod
    def get_results_by_judge(self, competition_id: int, judge_id: int) -> list[ContestantResult]:
        """The batch a judge submitted for a competition (empty if none)."""
        pass
