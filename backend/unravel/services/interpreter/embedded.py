from __future__ import annotations

"""backend/unravel/services/interpreter/embedded.py

In-process interpreter: runs the submitted program inside the current Python.

The program gets a fresh ``__main__`` namespace and its own copy of the
builtins with ``input`` replaced by the installed input source. stdout and
stderr are redirected to the output sink for the duration of the run, and
sys.stdin reads as empty.

SECURITY NOTE: this is not a sandbox. It is meant for tests and trusted local
use; the service defaults to SubprocessInterpreter.
"""

import builtins
import contextlib
import io
import sys
from typing import Optional

from unravel.services.interpreter.base import (
    InputSource,
    InterpreterConfig,
    InterpreterUnavailableError,
    OutputSink,
    ProgramFailedError,
)
from unravel.services.interpreter.bootstrap import (
    PROGRAM_FILENAME,
    format_program_traceback,
    is_clean_exit,
)


class _SinkWriter:
    def __init__(self, sink: OutputSink) -> None:
        self._sink = sink

    def write(self, text: str) -> int:
        if text:
            self._sink(str(text))
        return len(text)

    def flush(self) -> None:
        pass


class EmbeddedInterpreter:
    """Interpreter implementation backed by ``exec`` in this process."""

    name = "embedded"
    supports_input = True

    def __init__(self) -> None:
        self.config: InterpreterConfig | None = None
        self._ready = False
        self._output_sink: OutputSink | None = None
        self._input_source: InputSource | None = None

    def initialize(self, config: InterpreterConfig | None = None) -> None:
        self.config = config
        self._ready = True

    def install_hooks(
        self,
        *,
        output_sink: OutputSink,
        input_source: InputSource | None = None,
    ) -> None:
        self._output_sink = output_sink
        self._input_source = input_source

    def _read_input(self, prompt: Optional[str] = None) -> str:
        if self._input_source is None:
            return ""
        return self._input_source(None if prompt is None else str(prompt))

    def _build_builtins(self) -> dict:
        scoped = dict(vars(builtins))
        scoped["input"] = self._read_input
        return scoped

    def execute(self, source: str) -> None:
        if not self._ready:
            raise InterpreterUnavailableError("Embedded interpreter has not been initialized")
        if self._output_sink is None:
            raise InterpreterUnavailableError("No output sink installed before execution")

        writer = _SinkWriter(self._output_sink)
        namespace = {"__name__": "__main__", "__builtins__": self._build_builtins()}

        host_stdin = sys.stdin
        sys.stdin = io.StringIO("")
        try:
            with contextlib.redirect_stdout(writer), contextlib.redirect_stderr(writer):
                exec(compile(source, PROGRAM_FILENAME, "exec"), namespace)
        except SystemExit as exc:
            if not is_clean_exit(exc):
                raise ProgramFailedError(format_program_traceback(exc)) from exc
        except BaseException as exc:  # noqa: BLE001
            raise ProgramFailedError(format_program_traceback(exc)) from exc
        finally:
            sys.stdin = host_stdin
