"""
HTTP API for judges' result submissions.

Thin FastAPI layer over a ResultStore: request schemas, routes, and the
mapping from store exceptions to status codes.
"""

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from .exceptions import ConflictError, NotFoundError, ValidationError
from .interfaces import ResultStore
from .logging_config import get_logger
from .models import ContestantScore, ResultSubmission
from .storage.memory_storage import InMemoryResultStore

logger = get_logger("api")

API_PREFIX = "/api/competitionresults"


class ContestantScoreIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    contestant_id: StrictInt = Field(alias="contestantId")
    name: str = ""
    score: StrictFloat


class ResultSubmissionIn(BaseModel):
    """Request body for POST and PUT."""

    model_config = ConfigDict(populate_by_name=True)

    competition_id: StrictInt = Field(alias="competitionId")
    judge_id: StrictInt = Field(alias="judgeId")
    results: list[ContestantScoreIn] = Field(default_factory=list)

    def to_submission(self) -> ResultSubmission:
        return ResultSubmission(
            competition_id=self.competition_id,
            judge_id=self.judge_id,
            results=[
                ContestantScore(contestant_id=r.contestant_id, name=r.name, score=r.score)
                for r in self.results
            ],
        )


def problem(status_code: int, title: str, detail: str) -> JSONResponse:
    """Problem-details style error body."""
    return JSONResponse(
        status_code=status_code,
        content={"title": title, "detail": detail, "status": status_code},
        media_type="application/problem+json",
    )


def get_store(request: Request) -> ResultStore:
    return request.app.state.store


router = APIRouter(prefix=API_PREFIX)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_results(
    body: ResultSubmissionIn,
    request: Request,
    response: Response,
    store: ResultStore = Depends(get_store),
):
    logger.info(
        f"Creating results for competition {body.competition_id} from judge {body.judge_id} "
        f"with {len(body.results)} results"
    )
    results = store.create_results(body.to_submission())
    response.headers["Location"] = str(
        request.url_for(
            "get_results_by_judge",
            competition_id=body.competition_id,
            judge_id=body.judge_id,
        )
    )
    return [r.to_dict() for r in results]


@router.put("")
def update_results(body: ResultSubmissionIn, store: ResultStore = Depends(get_store)):
    logger.info(
        f"Updating results for competition {body.competition_id} from judge {body.judge_id} "
        f"with {len(body.results)} results"
    )
    results = store.update_results(body.to_submission())
    return [r.to_dict() for r in results]


@router.get("/competition/{competition_id}")
def get_results_by_competition(competition_id: int, store: ResultStore = Depends(get_store)):
    logger.info(f"Getting results for competition {competition_id}")
    return [r.to_dict() for r in store.get_results_by_competition(competition_id)]


@router.get("/competition/{competition_id}/judge/{judge_id}")
def get_results_by_judge(
    competition_id: int, judge_id: int, store: ResultStore = Depends(get_store)
):
    logger.info(f"Getting results for competition {competition_id} from judge {judge_id}")
    return [r.to_dict() for r in store.get_results_by_judge(competition_id, judge_id)]


def create_app(store: ResultStore | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        store: Result store to serve (defaults to a fresh InMemoryResultStore)

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(title="Competition Results")
    app.state.store = store if store is not None else InMemoryResultStore()
    app.include_router(router)

    @app.exception_handler(ValidationError)
    async def _invalid(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning(f"Invalid request data: {exc}")
        return problem(status.HTTP_400_BAD_REQUEST, "Invalid request", str(exc))

    @app.exception_handler(RequestValidationError)
    async def _malformed(request: Request, exc: RequestValidationError) -> JSONResponse:
        detail = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        )
        logger.warning(f"Malformed request: {detail}")
        return problem(status.HTTP_400_BAD_REQUEST, "Invalid request", detail)

    @app.exception_handler(ConflictError)
    async def _conflict(request: Request, exc: ConflictError) -> JSONResponse:
        logger.warning(f"Results already exist: {exc}")
        return problem(status.HTTP_409_CONFLICT, "Results already exist", str(exc))

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        logger.warning(f"Results not found: {exc}")
        return problem(status.HTTP_404_NOT_FOUND, "Results not found", str(exc))

    logger.info(f"API ready with {type(app.state.store).__name__}")
    return app
