"""
Tests for the command-line entry point and server configuration.
"""

import json
import tempfile
from pathlib import Path

import pytest

from competition_results.__main__ import (
    args_to_typed,
    load_submissions,
    main,
    parse_args,
    replay_submissions,
    results_table,
)
from competition_results.config import ServerConfig
from competition_results.exceptions import ConfigurationError
from competition_results.storage.memory_storage import InMemoryResultStore


SUBMISSIONS = [
    {
        "competitionId": 1,
        "judgeId": 1,
        "results": [
            {"contestantId": 10, "name": "Alice", "score": 10},
            {"contestantId": 11, "name": "Bob", "score": 4.3},
        ],
    },
    {
        "competitionId": 1,
        "judgeId": 2,
        "results": [{"contestantId": 10, "name": "Alice", "score": 4.5}],
    },
    # Same key as the first: replayed as an update
    {
        "competitionId": 1,
        "judgeId": 1,
        "results": [{"contestantId": 10, "name": "Alice", "score": 0}],
    },
    # Invalid score: reported and skipped
    {
        "competitionId": 2,
        "judgeId": 1,
        "results": [{"contestantId": 10, "name": "Alice", "score": 7}],
    },
    "not an object",
]


class TestReplay:
    """Replay of a submissions file through the store."""

    def test_replay_creates_updates_and_rejects(self) -> None:
        # Arrange
        store = InMemoryResultStore()

        # Act
        counts = replay_submissions(store, SUBMISSIONS)

        # Assert
        assert counts == (2, 1, 2)
        judge_one = store.get_results_by_judge(1, 1)
        assert [(r.id, r.score) for r in judge_one] == [(1, 0.0)]
        assert store.get_results_by_competition(2) == []

    def test_results_table_shows_verdicts(self) -> None:
        # Arrange
        store = InMemoryResultStore()
        _ = replay_submissions(store, SUBMISSIONS[:2])

        # Act
        rendered = results_table(store.get_results_by_competition(1)).get_string()

        # Assert
        assert "Verdict" in rendered
        assert "Alice" in rendered
        assert "Yes" in rendered
        assert "Alt2" in rendered
        assert "Alt1" in rendered

    def test_main_replay_prints_tables(self, capsys: pytest.CaptureFixture[str]) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            # Arrange
            path = Path(temp_dir) / "submissions.json"
            path.write_text(json.dumps(SUBMISSIONS), encoding="utf-8")

            # Act
            main(["replay", str(path), "--log-level", "ERROR"])

        # Assert
        out = capsys.readouterr().out
        assert "Competition 1" in out
        assert "2 created, 1 updated, 2 rejected (2 batches stored)" in out

    def test_main_replay_missing_file_exits(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            missing = Path(temp_dir) / "nope.json"

            with pytest.raises(SystemExit) as exc_info:
                main(["replay", str(missing), "--log-level", "ERROR"])

        assert exc_info.value.code == 1

    def test_load_submissions_requires_array(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "submissions.json"
            path.write_text(json.dumps({"competitionId": 1}), encoding="utf-8")

            with pytest.raises(ConfigurationError, match="JSON array"):
                _ = load_submissions(path)

            path.write_text("{broken", encoding="utf-8")
            with pytest.raises(ConfigurationError, match="not valid JSON"):
                _ = load_submissions(path)


class TestArgs:
    """Argument parsing."""

    def test_serve_defaults(self) -> None:
        args = args_to_typed(parse_args(["serve"]))

        assert args["command"] == "serve"
        assert args["host"] == "127.0.0.1"
        assert args["port"] == 8000
        assert args["log_level"] == "INFO"
        assert args["debug"] is False
        assert args["submissions_file"] is None

    def test_replay_args(self) -> None:
        args = args_to_typed(parse_args(["replay", "data.json", "--debug"]))

        assert args["command"] == "replay"
        assert args["submissions_file"] == "data.json"
        assert args["debug"] is True
        assert args["log_file"] is None


class TestServerConfig:
    """ServerConfig validation."""

    def test_defaults_valid(self) -> None:
        config = ServerConfig()

        assert config.port == 8000
        assert config.effective_log_level == "INFO"

    def test_debug_overrides_level(self) -> None:
        assert ServerConfig(log_level="warning", debug=True).effective_log_level == "DEBUG"

    def test_log_level_normalized(self) -> None:
        assert ServerConfig(log_level="error").log_level == "ERROR"

    @pytest.mark.parametrize(
        "kwargs",
        [{"port": 0}, {"port": 70000}, {"host": ""}, {"log_level": "LOUD"}],
    )
    def test_invalid_values_rejected(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(ConfigurationError):
            _ = ServerConfig(**kwargs)  # type: ignore[arg-type]
