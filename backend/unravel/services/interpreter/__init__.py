from __future__ import annotations

"""backend/unravel/services/interpreter/__init__.py

Interpreter registry.

This module exposes `get_default_interpreter`, which constructs the
interpreter selected by ``settings.interpreter_backend``:

- subprocess: child Python process per run (default)
- embedded: ``exec`` inside the current process

The execution coordinator accepts any object implementing
`InterpreterProtocol`; both implementations are wired here in one place so
the API, Celery tasks and tests obtain them the same way.
"""

from typing import Callable, Dict

from unravel.config import Settings, get_settings
from unravel.services.interpreter.base import (  # noqa: F401
    DismissingInputProvider,
    InputProvider,
    InputSource,
    InterpreterConfig,
    InterpreterError,
    InterpreterProtocol,
    InterpreterUnavailableError,
    OutputSink,
    ProgramFailedError,
    ScriptedInputProvider,
)
from unravel.services.interpreter.embedded import EmbeddedInterpreter
from unravel.services.interpreter.subprocess_runner import SubprocessInterpreter

INTERPRETER_BACKENDS: Dict[str, Callable[[], InterpreterProtocol]] = {
    SubprocessInterpreter.name: SubprocessInterpreter,
    EmbeddedInterpreter.name: EmbeddedInterpreter,
}


def build_interpreter_config(settings: Settings | None = None) -> InterpreterConfig:
    settings = settings or get_settings()
    return InterpreterConfig(
        python_binary=settings.python_binary,
        workspace_root=settings.workspace_root,
        keep_workspaces=settings.keep_workspaces,
    )


def get_default_interpreter(settings: Settings | None = None) -> InterpreterProtocol:
    settings = settings or get_settings()
    try:
        factory = INTERPRETER_BACKENDS[settings.interpreter_backend]
    except KeyError:
        raise ValueError(
            f"Unknown interpreter backend '{settings.interpreter_backend}'. "
            f"Expected one of: {', '.join(sorted(INTERPRETER_BACKENDS))}"
        ) from None
    return factory()
