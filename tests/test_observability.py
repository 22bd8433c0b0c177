import json
import logging
import threading
from pathlib import Path

import pytest

from dillc.observability import BuildLogger


def test_channels_record_levels_and_operation() -> None:
    logger = BuildLogger(operation="build")

    logger.print_error("bad")
    logger.print_trace("detail")
    logger.print_status("done")

    assert [record["level"] for record in logger.records] == ["error", "trace", "status"]
    assert all(record["operation"] == "build" for record in logger.records)
    assert logger.messages("error") == ["bad"]
    assert logger.messages("trace") == ["detail"]


def test_records_are_mirrored_to_stdlib_logging(caplog: pytest.LogCaptureFixture) -> None:
    logger = BuildLogger()

    with caplog.at_level(logging.DEBUG, logger="dillc"):
        logger.print_error("compile error")
        logger.print_trace("compile trace")

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.ERROR, "compile error"),
        (logging.DEBUG, "compile trace"),
    ]


def test_progress_cancel_is_recorded_once() -> None:
    logger = BuildLogger()

    status = logger.start_progress("Building Fuchsia application...", timeout=None)
    status.cancel()
    status.cancel()

    assert status.cancelled
    assert status.timeout is None
    progress = [record["extra"]["progress"] for record in logger.records_for_level("status")]
    assert progress == ["started", "cancelled"]
    assert logger.records[-1]["extra"]["elapsed_seconds"] >= 0


def test_concurrent_writers_do_not_lose_records() -> None:
    logger = BuildLogger()

    def write(prefix: str) -> None:
        for i in range(500):
            logger.print_trace(f"{prefix} {i}")

    threads = [threading.Thread(target=write, args=(name,)) for name in ("a", "b")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    messages = logger.messages("trace")
    assert len(messages) == 1000
    assert [m for m in messages if m.startswith("a ")] == [f"a {i}" for i in range(500)]


def test_to_json_lines_writes_one_record_per_line(tmp_path: Path) -> None:
    logger = BuildLogger()
    logger.print_error("e")
    logger.print_trace("t")

    path = logger.to_json_lines(tmp_path / "logs" / "build.jsonl")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["e", "t"]


def test_progress_records_timeout_and_logs_start_once_at_info(caplog: pytest.LogCaptureFixture) -> None:
    logger = BuildLogger()

    with caplog.at_level(logging.INFO, logger="dillc"):
        status = logger.start_progress("Building Fuchsia application...", timeout=30.0)
        status.cancel()

    assert logger.records[0]["extra"] == {"progress": "started", "timeout_seconds": 30.0}
    assert [r.getMessage() for r in caplog.records] == ["Building Fuchsia application..."]
