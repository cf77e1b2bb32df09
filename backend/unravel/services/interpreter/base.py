from __future__ import annotations

"""backend/unravel/services/interpreter/base.py

Shared contract for the interpreters that run submitted programs.

This module provides:

- InterpreterConfig: per-interpreter runtime configuration
- InterpreterProtocol: the three operations the execution coordinator needs
  (initialize, install_hooks, execute)
- InterpreterError and its two subclasses, which let the coordinator tell a
  broken interpreter apart from a submitted program that raised
- InputProvider implementations that answer input() prompts

Output is never returned by ``execute``; it only reaches the host through
the output sink installed with ``install_hooks``.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Optional, Protocol

OutputSink = Callable[[str], None]
InputSource = Callable[[Optional[str]], str]


@dataclass
class InterpreterConfig:
    """Per-interpreter runtime settings."""

    python_binary: str
    workspace_root: str
    keep_workspaces: bool = False
    env: Dict[str, str] = field(default_factory=dict)


class InterpreterError(Exception):
    """Base class for interpreter failures."""


class InterpreterUnavailableError(InterpreterError):
    """The interpreter could not be started or stopped without reporting back."""


class ProgramFailedError(InterpreterError):
    """The submitted program raised; ``raw_message`` holds its traceback text."""

    def __init__(self, raw_message: str) -> None:
        super().__init__(raw_message)
        self.raw_message = raw_message


class InterpreterProtocol(Protocol):
    """Minimal interface that concrete interpreters must implement."""

    name: str
    supports_input: bool

    def initialize(self, config: InterpreterConfig) -> None:
        """Boot the interpreter; raise InterpreterUnavailableError if it cannot."""
        ...

    def install_hooks(
        self,
        *,
        output_sink: OutputSink,
        input_source: InputSource | None = None,
    ) -> None:
        """Register the host callbacks used by the next ``execute`` call."""
        ...

    def execute(self, source: str) -> None:
        """Run ``source`` as a whole program.

        Raises ProgramFailedError when the program raised and
        InterpreterUnavailableError when the interpreter itself failed.
        """
        ...


class InputProvider(Protocol):
    def read(self, prompt: Optional[str]) -> Optional[str]:
        """Return the user's answer, or None when the prompt was dismissed."""
        ...


class ScriptedInputProvider:
    """Answers prompts from a fixed script; dismisses prompts once it runs out."""

    def __init__(self, lines: Iterable[str] = ()) -> None:
        self._lines = deque(lines)
        self.prompts: list[Optional[str]] = []

    def read(self, prompt: Optional[str]) -> Optional[str]:
        self.prompts.append(prompt)
        if not self._lines:
            return None
        return self._lines.popleft()


class DismissingInputProvider:
    def read(self, prompt: Optional[str]) -> Optional[str]:
        return None
