"""
CLI entry point for competition results.

Serves the HTTP API, or replays a file of judge submissions through an
in-memory store and prints what was stored.
"""

import argparse
import json
import sys
from argparse import Namespace
from collections.abc import Sequence
from pathlib import Path
from typing import Any, TypedDict

from prettytable import PrettyTable

from .config import LOG_LEVELS, ServerConfig
from .exceptions import ConfigurationError, ConflictError, ValidationError
from .interfaces import ResultStore
from .logging_config import get_logger, setup_logging
from .models import ContestantResult, ResultSubmission
from .storage.memory_storage import InMemoryResultStore


class CLIArgs(TypedDict):
    """Typed representation of parsed CLI arguments."""
    command: str
    host: str
    port: int
    log_level: str
    debug: bool
    log_file: str | None
    submissions_file: str | None


def parse_args(argv: Sequence[str] | None = None) -> Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Competition Results - judge score submission service"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    _ = common.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    _ = common.add_argument(
        "--log-level",
        choices=list(LOG_LEVELS),
        default="INFO",
        help="Set logging level (default: INFO)"
    )

    serve = subparsers.add_parser("serve", parents=[common], help="Run the HTTP API")
    _ = serve.add_argument(
        "--host",
        default="127.0.0.1",
        help="Interface to bind (default: 127.0.0.1)"
    )
    _ = serve.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to listen on (default: 8000)"
    )
    _ = serve.add_argument(
        "--log-file",
        help="Also write logs to this rotating file"
    )

    replay = subparsers.add_parser(
        "replay", parents=[common], help="Replay submissions from a JSON file and print results"
    )
    _ = replay.add_argument(
        "submissions_file",
        help="JSON array of submissions ({competitionId, judgeId, results: [...]})"
    )

    return parser.parse_args(argv)


def args_to_typed(ns: Namespace) -> CLIArgs:
    """Convert argparse Namespace to typed CLIArgs."""
    return CLIArgs(
        command=ns.command,
        host=getattr(ns, "host", "127.0.0.1"),
        port=getattr(ns, "port", 8000),
        log_level=ns.log_level,
        debug=ns.debug,
        log_file=getattr(ns, "log_file", None),
        submissions_file=getattr(ns, "submissions_file", None),
    )


def load_submissions(path: Path) -> list[dict[str, Any]]:
    """
    Read the replay file.

    Raises:
        ConfigurationError: If the file is missing or not a JSON array
    """
    if not path.exists():
        raise ConfigurationError(f"Submissions file does not exist: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Submissions file is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise ConfigurationError("Submissions file must contain a JSON array")
    return data


def replay_submissions(store: ResultStore, payloads: Sequence[Any]) -> tuple[int, int, int]:
    """
    Submit each payload, switching to update when the key already exists.

    Returns:
        (created, updated, rejected) counts
    """
    logger = get_logger("replay")
    created = updated = rejected = 0

    for index, payload in enumerate(payloads, 1):
        try:
            if not isinstance(payload, dict):
                raise ValidationError("Submission must be a JSON object")
            submission = ResultSubmission.from_dict(payload)
            try:
                _ = store.create_results(submission)
                created += 1
            except ConflictError:
                logger.debug(f"Submission {index} exists already, updating")
                _ = store.update_results(submission)
                updated += 1
        except ValidationError as e:
            rejected += 1
            logger.warning(f"Rejected submission {index}: {e}")
            print(f"  ✗ Submission {index} rejected: {e}")

    return created, updated, rejected


def results_table(results: Sequence[ContestantResult]) -> PrettyTable:
    """Tabulate one competition's results."""
    table = PrettyTable()
    table.field_names = ["Id", "Contestant", "Name", "Judge", "Score", "Verdict", "Submitted"]
    table.align["Id"] = "r"
    table.align["Contestant"] = "r"
    table.align["Judge"] = "r"
    table.align["Score"] = "r"
    table.align["Name"] = "l"

    for r in results:
        table.add_row([
            r.id,
            r.contestant_id,
            r.name,
            r.judge_id,
            f"{r.score:g}",
            r.verdict,
            r.submitted_at.strftime("%Y-%m-%d %H:%M:%S"),
        ])
    return table


def run_replay(args: CLIArgs) -> None:
    """Replay a submissions file and print one table per competition."""
    logger = get_logger("run_replay")
    assert args["submissions_file"] is not None, "replay requires a submissions file"

    payloads = load_submissions(Path(args["submissions_file"]))
    logger.info(f"Replaying {len(payloads)} submissions from {args['submissions_file']}")

    store = InMemoryResultStore()
    created, updated, rejected = replay_submissions(store, payloads)

    competition_ids = sorted({key.competition_id for key in store.keys()})
    for competition_id in competition_ids:
        print(f"\nCompetition {competition_id}")
        print(results_table(store.get_results_by_competition(competition_id)))

    print(
        f"\n{created} created, {updated} updated, {rejected} rejected "
        f"({store.get_batch_count()} batches stored)"
    )
    logger.info(f"Replay complete: {created} created, {updated} updated, {rejected} rejected")


def run_server(args: CLIArgs) -> None:
    """Run the HTTP API under uvicorn."""
    import uvicorn

    from .api import create_app

    config = ServerConfig(
        host=args["host"],
        port=args["port"],
        log_level=args["log_level"],
        debug=args["debug"],
        log_file=args["log_file"],
    )
    logger = get_logger("run_server")
    logger.info(f"Starting API on http://{config.host}:{config.port}")

    uvicorn.run(
        create_app(),
        host=config.host,
        port=config.port,
        log_level=config.effective_log_level.lower(),
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main CLI entry point."""
    args = args_to_typed(parse_args(argv))

    setup_logging(level=args["log_level"], debug=args["debug"], log_file=args["log_file"])
    logger = get_logger("main")

    try:
        if args["command"] == "serve":
            run_server(args)
        else:
            run_replay(args)
    except ConfigurationError as e:
        logger.error(str(e))
        print(f"Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        print("\nInterrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
