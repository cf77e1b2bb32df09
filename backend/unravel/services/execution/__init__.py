# backend/unravel/services/execution/__init__.py
from __future__ import annotations

"""
Execution service package.

This package provides:
- Core execution orchestration (coordinator.py)
- A process-wide default coordinator wired to the configured interpreter

Concrete interpreters (subprocess, embedded) live under
unravel.services.interpreter and are selected at runtime by
get_default_coordinator.
"""

from functools import lru_cache
from typing import Iterable, List, Tuple

from unravel.models import ExecutionResult, ExplanationRecord

from .coordinator import (  # noqa: F401
    NO_OUTPUT,
    NO_OUTPUT_DUE_TO_ERROR,
    ExecutionCoordinator,
    OutputAccumulator,
    run_and_translate,
)


@lru_cache(maxsize=1)
def get_default_coordinator() -> ExecutionCoordinator:
    """
    Shared coordinator for the current process.

    It is safe to use from:
    - FastAPI routes (runs are serialized by the coordinator's lock)
    - Celery tasks
    - synchronous scripts
    """
    # Import inside the function to avoid circular imports at module load time.
    from unravel.config import get_settings
    from unravel.services.interpreter import build_interpreter_config, get_default_interpreter

    settings = get_settings()
    return ExecutionCoordinator(
        get_default_interpreter(settings),
        config=build_interpreter_config(settings),
    )


def analyze_and_run(
    source: str,
    stdin: Iterable[str] = (),
    *,
    coordinator: ExecutionCoordinator | None = None,
) -> Tuple[List[ExplanationRecord], ExecutionResult]:
    """
    High-level entrypoint behind "Analyze & Run".

    This helper:
    - explains ``source`` line by line (available even if the run fails)
    - runs it on the default coordinator, answering input() prompts from
      ``stdin`` in order and dismissing any prompt past the end of it
    """
    from unravel.services.analysis import produce_line_explanations
    from unravel.services.interpreter import ScriptedInputProvider

    records = produce_line_explanations(source)
    coordinator = coordinator or get_default_coordinator()
    result = coordinator.run(source, input_provider=ScriptedInputProvider(stdin))
    return records, result
