"""
In-memory result store.

Keeps one immutable batch of results per (competition, judge) key for the
lifetime of the process. Nothing is written to disk.
"""

import threading
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from typing_extensions import override

from ..exceptions import ConflictError, NotFoundError
from ..interfaces import ResultStore
from ..logging_config import get_logger
from ..models import ContestantResult, ContestantScore, ResultKey, ResultSubmission
from ..validation import validate_submission

# Module-level logger
logger = get_logger("memory_storage")


class InMemoryResultStore(ResultStore):
    """
    Dictionary-backed result store.

    Thread Safety: a single lock guards both the key -> batch mapping and
    the id counter. Create's existence check, id assignment and insert run
    in one critical section. Batches are stored as tuples and never mutated
    in place, so readers always see a whole batch.
    """

    def __init__(self) -> None:
        self._batches = dict[ResultKey, tuple[ContestantResult, ...]]()
        self._next_id: int = 1
        self._lock: threading.Lock = threading.Lock()

        logger.info("In-memory result store initialized")

    def _allocate_id(self) -> int:
        """Hand out the next store-wide id. Caller must hold the lock."""
        result_id = self._next_id
        self._next_id += 1
        return result_id

    @staticmethod
    def _build_result(
        result_id: int, item: ContestantScore, key: ResultKey, submitted_at: datetime
    ) -> ContestantResult:
        return ContestantResult(
            id=result_id,
            contestant_id=item.contestant_id,
            name=item.name,
            score=float(item.score),
            competition_id=key.competition_id,
            judge_id=key.judge_id,
            submitted_at=submitted_at,
        )

    @override
    def create_results(self, submission: ResultSubmission) -> list[ContestantResult]:
        """Store a judge's first batch for a competition."""
        validate_submission(submission)
        key = submission.key

        with self._lock:
            if key in self._batches:
                raise ConflictError(
                    f"Results already exist for competition {key.competition_id} "
                    f"from judge {key.judge_id}. Use PUT to update."
                )

            submitted_at = datetime.now(timezone.utc)
            batch = tuple(
                self._build_result(self._allocate_id(), item, key, submitted_at)
                for item in submission.results
            )
            self._batches[key] = batch

        logger.info(
            f"Created {len(batch)} results for competition {key.competition_id} "
            f"from judge {key.judge_id} (ids {batch[0].id}-{batch[-1].id})"
        )
        return list(batch)

    @override
    def update_results(self, submission: ResultSubmission) -> list[ContestantResult]:
        """Replace a judge's batch, keeping ids of contestants that reappear."""
        validate_submission(submission)
        key = submission.key

        with self._lock:
            existing = self._batches.get(key)
            if existing is None:
                raise NotFoundError(
                    f"No results found for competition {key.competition_id} "
                    f"from judge {key.judge_id}. Use POST to create new results."
                )

            # First stored occurrence wins; each id may be reused only once
            reusable = dict[int, int]()
            for result in existing:
                _ = reusable.setdefault(result.contestant_id, result.id)

            # Never at or before the replaced batch, even if the clock steps back
            submitted_at = max(
                datetime.now(timezone.utc),
                existing[0].submitted_at + timedelta(microseconds=1),
            )
            updated = list[ContestantResult]()
            for item in submission.results:
                result_id = reusable.pop(item.contestant_id, None)
                if result_id is None:
                    result_id = self._allocate_id()
                updated.append(self._build_result(result_id, item, key, submitted_at))

            batch = tuple(updated)
            self._batches[key] = batch

        logger.info(
            f"Updated results for competition {key.competition_id} from judge {key.judge_id}: "
            f"{len(existing)} -> {len(batch)} results"
        )
        return list(batch)

    @override
    def get_results_by_competition(self, competition_id: int) -> list[ContestantResult]:
        """All results for a competition, batches in key creation order."""
        with self._lock:
            batches = [
                batch for key, batch in self._batches.items()
                if key.competition_id == competition_id
            ]

        results = list[ContestantResult]()
        for batch in batches:
            results.extend(batch)

        logger.debug(f"Found {len(results)} results for competition {competition_id}")
        return results

    @override
    def get_results_by_judge(self, competition_id: int, judge_id: int) -> list[ContestantResult]:
        """The stored batch for the exact key, or an empty list."""
        with self._lock:
            batch = self._batches.get(ResultKey(competition_id, judge_id), ())

        logger.debug(
            f"Found {len(batch)} results for competition {competition_id} from judge {judge_id}"
        )
        return list(batch)

    def keys(self) -> Iterable[ResultKey]:
        """Snapshot of the stored keys."""
        with self._lock:
            return list(self._batches.keys())

    def get_batch_count(self) -> int:
        """Get number of stored batches."""
        with self._lock:
            return len(self._batches)
