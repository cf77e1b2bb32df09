from __future__ import annotations

"""backend/unravel/services/execution/coordinator.py

Core execution orchestration.

Responsibilities:
- Lazily initialize the interpreter on first use
- Give every run its own OutputAccumulator and (re)install the output and
  input hooks before the run starts
- Drive one execution through an InterpreterProtocol implementation
- Update the status deterministically:
  NOT_READY -> PREPARING -> RUNNING -> FINISHED | FINISHED_WITH_ERRORS | FAILED
- Convert every failure into data (ExecutionResult / FailureInfo); nothing
  raised by the interpreter propagates to the caller

Runs on one coordinator are serialized. There is no timeout: a program that
never terminates keeps its run (and the lock) until it is killed externally.
"""

import logging
import threading
from typing import Callable, List, Optional

from unravel.models import ExecutionResult, ExecutionStatus
from unravel.services.diagnostics import build_failure_info, unexpected_failure_info
from unravel.services.interpreter import build_interpreter_config
from unravel.services.interpreter.base import (
    DismissingInputProvider,
    InputProvider,
    InputSource,
    InterpreterConfig,
    InterpreterProtocol,
    ProgramFailedError,
)

logger = logging.getLogger(__name__)

NO_OUTPUT = "(no output)"
NO_OUTPUT_DUE_TO_ERROR = "(no output due to error)"

StatusListener = Callable[[ExecutionStatus], None]


class OutputAccumulator:
    """Collects output chunks of a single run in emission order."""

    def __init__(self) -> None:
        self._chunks: List[str] = []

    def write(self, text: str) -> None:
        if text:
            self._chunks.append(str(text))

    @property
    def text(self) -> str:
        return "".join(self._chunks).rstrip()

    def render(self, placeholder: str) -> str:
        return self.text or placeholder


def _input_source_for(provider: InputProvider) -> InputSource:
    def read(prompt: Optional[str]) -> str:
        return provider.read(prompt) or ""

    return read


class ExecutionCoordinator:
    """Runs submitted programs through one interpreter, one run at a time."""

    def __init__(
        self,
        interpreter: InterpreterProtocol,
        *,
        config: InterpreterConfig | None = None,
        input_provider: InputProvider | None = None,
        on_status: StatusListener | None = None,
    ) -> None:
        self.interpreter = interpreter
        self.config = config or build_interpreter_config()
        self.input_provider: InputProvider = input_provider or DismissingInputProvider()
        self.on_status = on_status
        self.status = ExecutionStatus.NOT_READY
        self._initialized = False
        self._lock = threading.Lock()

    @property
    def status_message(self) -> str:
        return self.status.message

    def _set_status(self, status: ExecutionStatus) -> None:
        self.status = status
        logger.info("[%s] %s", self.interpreter.name, status.message)
        if self.on_status is None:
            return
        try:
            self.on_status(status)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Status listener failed on %s: %s", status.value, exc)

    def _prepare(self, accumulator: OutputAccumulator, input_provider: InputProvider) -> None:
        if not self._initialized:
            self.interpreter.initialize(self.config)
            self._initialized = True
        self.interpreter.install_hooks(
            output_sink=accumulator.write,
            input_source=(
                _input_source_for(input_provider)
                if getattr(self.interpreter, "supports_input", False)
                else None
            ),
        )

    def _failed(self, exc: BaseException) -> ExecutionResult:
        logger.warning(
            "[%s] interpreter failure: %s", self.interpreter.name, exc, exc_info=exc
        )
        self._set_status(ExecutionStatus.FAILED)
        return ExecutionResult(
            captured_output="",
            failure=unexpected_failure_info(str(exc)),
            status=ExecutionStatus.FAILED,
        )

    def run(self, source: str, *, input_provider: InputProvider | None = None) -> ExecutionResult:
        """Execute ``source`` and return its captured output and failure, if any."""
        with self._lock:
            return self._run_locked(source or "", input_provider or self.input_provider)

    def _run_locked(self, source: str, input_provider: InputProvider) -> ExecutionResult:
        self._set_status(ExecutionStatus.PREPARING)
        accumulator = OutputAccumulator()

        try:
            self._prepare(accumulator, input_provider)
        except Exception as exc:  # noqa: BLE001
            return self._failed(exc)

        self._set_status(ExecutionStatus.RUNNING)
        try:
            self.interpreter.execute(source)
        except ProgramFailedError as exc:
            failure = build_failure_info(exc.raw_message)
            logger.info(
                "[%s] program failed: %s", self.interpreter.name, failure.category.value
            )
            self._set_status(ExecutionStatus.FINISHED_WITH_ERRORS)
            return ExecutionResult(
                captured_output=accumulator.render(NO_OUTPUT_DUE_TO_ERROR),
                failure=failure,
                status=ExecutionStatus.FINISHED_WITH_ERRORS,
            )
        except Exception as exc:  # noqa: BLE001
            return self._failed(exc)

        self._set_status(ExecutionStatus.FINISHED)
        return ExecutionResult(
            captured_output=accumulator.render(NO_OUTPUT),
            status=ExecutionStatus.FINISHED,
        )


def run_and_translate(
    source: str,
    interpreter: InterpreterProtocol,
    *,
    config: InterpreterConfig | None = None,
    input_provider: InputProvider | None = None,
) -> ExecutionResult:
    """One-shot helper: run ``source`` on ``interpreter`` and translate failures."""
    coordinator = ExecutionCoordinator(
        interpreter,
        config=config,
        input_provider=input_provider,
    )
    return coordinator.run(source)
