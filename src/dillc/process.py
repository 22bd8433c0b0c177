"""Subprocess launching and line-oriented output forwarding.

``stream_process_output`` drains stdout and stderr on two daemon threads, one
per pipe, so neither pipe can fill up and stall the child. Each channel keeps
the order the child wrote its lines in; there is no ordering between them.
"""

from __future__ import annotations

import io
import os
import shutil
import subprocess
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import IO, Protocol

LineSink = Callable[[str], None]

_DRAIN_CHUNK = 64 * 1024


class RunningProcess(Protocol):
    stdout: IO[bytes] | None
    stderr: IO[bytes] | None

    def wait(self) -> int:
        """Block until the process exits and return its exit code."""


class ProcessManager(Protocol):
    def can_run(self, executable: str | Path) -> bool:
        """Return whether *executable* can be launched on this host."""

    def start(self, command: Sequence[str]) -> RunningProcess:
        """Launch *command* with piped stdout and stderr."""


@dataclass(slots=True)
class LocalProcessManager:
    cwd: Path | None = None

    def can_run(self, executable: str | Path) -> bool:
        path = Path(executable)
        if path.is_file():
            return os.access(path, os.X_OK)
        if path.parent == Path("."):
            return shutil.which(str(executable)) is not None
        return False

    def start(self, command: Sequence[str]) -> RunningProcess:
        return subprocess.Popen(
            list(command),
            cwd=str(self.cwd) if self.cwd is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )


def forward_lines(stream: IO[bytes], sink: LineSink) -> None:
    """Decode *stream* as UTF-8 and pass each line to *sink* without its terminator.

    ``\\n``, ``\\r\\n`` and a lone ``\\r`` all end a line. Undecodable bytes are
    replaced rather than aborting the stream.
    """
    text = io.TextIOWrapper(stream, encoding="utf-8", errors="replace", newline=None)
    try:
        for line in text:
            sink(line[:-1] if line.endswith("\n") else line)
    finally:
        # Hand the pipe back open; the caller owns it.
        text.detach()


class _LinePump(threading.Thread):
    def __init__(self, name: str, stream: IO[bytes], sink: LineSink) -> None:
        super().__init__(name=name, daemon=True)
        self.stream = stream
        self.sink = sink
        self.error: BaseException | None = None

    def run(self) -> None:
        try:
            forward_lines(self.stream, self.sink)
        except Exception as exc:
            self.error = exc
            # Keep reading so the child never blocks on a full pipe.
            while self.stream.read(_DRAIN_CHUNK):
                pass


def stream_process_output(
    process: RunningProcess,
    *,
    on_stdout: LineSink,
    on_stderr: LineSink,
) -> int:
    """Forward both output pipes of *process* until it exits and return its exit code.

    An exception raised by a sink is re-raised here once the process has
    exited and both pipes are drained. Both pipes are closed on return.
    """
    pumps: list[_LinePump] = []
    if process.stderr is not None:
        pumps.append(_LinePump("dillc-stderr", process.stderr, on_stderr))
    if process.stdout is not None:
        pumps.append(_LinePump("dillc-stdout", process.stdout, on_stdout))

    try:
        for pump in pumps:
            pump.start()
        exit_code = process.wait()
        for pump in pumps:
            pump.join()
    finally:
        for pump in pumps:
            pump.stream.close()

    for pump in pumps:
        if pump.error is not None:
            raise pump.error
    return exit_code
