from __future__ import annotations

"""backend/unravel/services/interpreter/subprocess_runner.py

Process-isolated interpreter for submitted programs.

This module provides:

- detect_python_version: cached ``<binary> --version`` probe used by
  initialize() to check that the configured Python can be started
- SubprocessInterpreter: writes the submission into a RunWorkspace and runs
  it through ``bootstrap.py`` in a child Python started in isolated mode

The child talks JSON lines on its stdout (see bootstrap.py). Output frames
are forwarded to the output sink as they arrive and input frames are
answered from the input source, so prompts interleave with output in the
order the program produced them. The child's own stderr (interpreter crash
text, never the program's stderr) goes to ``logs/stderr.log``.
"""

import json
import logging
import os
import subprocess
from functools import lru_cache
from pathlib import Path
from typing import IO, Optional

from unravel.services.interpreter.base import (
    InputSource,
    InterpreterConfig,
    InterpreterUnavailableError,
    OutputSink,
    ProgramFailedError,
)
from unravel.services.interpreter.workspace import RunWorkspace, create_run_workspace

logger = logging.getLogger(__name__)

BOOTSTRAP_PATH = Path(__file__).with_name("bootstrap.py")


def _safe_read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError:
        return ""


@lru_cache(maxsize=32)
def detect_python_version(binary: str) -> str | None:
    """Best-effort version detection for the configured Python binary."""
    try:
        proc = subprocess.run(
            [binary, "--version"],
            capture_output=True,
            text=True,
            timeout=10,
            check=False,
        )
        output = (proc.stdout or proc.stderr or "").strip()
        if proc.returncode != 0:
            return None
        return output.splitlines()[0] if output else None
    except (OSError, subprocess.TimeoutExpired):
        return None


def _decode_frame(line: str) -> Optional[dict]:
    try:
        frame = json.loads(line)
    except json.JSONDecodeError:
        return None
    return frame if isinstance(frame, dict) and "type" in frame else None


class SubprocessInterpreter:
    """Interpreter implementation backed by a child Python process."""

    name = "subprocess"
    supports_input = True

    def __init__(self) -> None:
        self.config: InterpreterConfig | None = None
        self.version: str | None = None
        self._output_sink: OutputSink | None = None
        self._input_source: InputSource | None = None

    def initialize(self, config: InterpreterConfig) -> None:
        version = detect_python_version(config.python_binary)
        if version is None:
            raise InterpreterUnavailableError(
                f"Python interpreter '{config.python_binary}' could not be started"
            )
        self.config = config
        self.version = version
        logger.info("Subprocess interpreter ready: %s (%s)", config.python_binary, version)

    def install_hooks(
        self,
        *,
        output_sink: OutputSink,
        input_source: InputSource | None = None,
    ) -> None:
        self._output_sink = output_sink
        self._input_source = input_source

    def execute(self, source: str) -> None:
        if self.config is None:
            raise InterpreterUnavailableError("Subprocess interpreter has not been initialized")
        if self._output_sink is None:
            raise InterpreterUnavailableError("No output sink installed before execution")

        workspace = create_run_workspace(self.config.workspace_root)
        try:
            self._run(source, workspace)
        finally:
            if not self.config.keep_workspaces:
                workspace.remove()

    def _run(self, source: str, workspace: RunWorkspace) -> None:
        assert self.config is not None
        source_path = workspace.write_source(source)
        stderr_path = workspace.logs_dir / "stderr.log"

        cmd = [self.config.python_binary, "-I", "-u", str(BOOTSTRAP_PATH), str(source_path)]
        environment = os.environ.copy()
        environment.update(self.config.env or {})

        try:
            with stderr_path.open("w", encoding="utf-8", errors="ignore") as stderr:
                proc = subprocess.Popen(
                    cmd,
                    stdin=subprocess.PIPE,
                    stdout=subprocess.PIPE,
                    stderr=stderr,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    cwd=str(workspace.root),
                    env=environment,
                )
                try:
                    finished, error_text = self._pump(proc)
                except BaseException:
                    proc.kill()
                    raise
                finally:
                    if proc.stdin:
                        proc.stdin.close()
                    return_code = proc.wait()
        except OSError as exc:
            raise InterpreterUnavailableError(str(exc)) from exc

        if error_text is not None:
            raise ProgramFailedError(error_text)
        if not finished:
            crash = _safe_read(stderr_path).strip()
            raise InterpreterUnavailableError(
                f"Interpreter exited with code {return_code} before finishing the program"
                + (f": {crash}" if crash else "")
            )

    def _pump(self, proc: subprocess.Popen) -> tuple[bool, Optional[str]]:
        """Relay frames until the child closes its stdout."""
        assert proc.stdout is not None
        finished = False
        error_text: Optional[str] = None

        for line in proc.stdout:
            frame = _decode_frame(line)
            if frame is None:
                # Bytes written around the redirection (e.g. to sys.__stdout__)
                self._emit(line)
                continue

            kind = frame["type"]
            if kind == "output":
                self._emit(frame.get("text", ""))
            elif kind == "input":
                self._answer(proc.stdin, frame.get("prompt"))
            elif kind == "error":
                error_text = str(frame.get("traceback") or "")
            elif kind == "done":
                finished = True

        return finished, error_text

    def _emit(self, text: str) -> None:
        if text and self._output_sink is not None:
            self._output_sink(text)

    def _answer(self, stdin: IO[str] | None, prompt: Optional[str]) -> None:
        reply = self._input_source(prompt) if self._input_source else ""
        if stdin is None:
            return
        stdin.write(json.dumps(reply or "") + "\n")
        stdin.flush()
