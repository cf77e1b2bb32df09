import os
import sys
import tempfile
from pathlib import Path

import pytest

# Settings are cached on first import, so the environment must be in place
# before anything from unravel is imported.
_TMP_ROOT = Path(tempfile.mkdtemp(prefix="unravel-tests-"))
os.environ.setdefault("INTERPRETER_BACKEND", "embedded")
os.environ.setdefault("WORKSPACE_ROOT", str(_TMP_ROOT / "runs"))
os.environ.setdefault("REPORTS_DIR", str(_TMP_ROOT / "reports"))
os.environ.setdefault("CELERY_BROKER_URL", "memory://")
os.environ.setdefault("CELERY_RESULT_BACKEND", "cache+memory://")
os.environ.setdefault("CELERY_TASK_ALWAYS_EAGER", "true")
os.environ.pop("STATSIG_SERVER_SECRET", None)

BACKEND_PATH = Path(__file__).resolve().parent.parent
if BACKEND_PATH.as_posix() not in sys.path:
    sys.path.insert(0, BACKEND_PATH.as_posix())

from unravel.services.interpreter import (  # noqa: E402
    EmbeddedInterpreter,
    InterpreterConfig,
    SubprocessInterpreter,
)


@pytest.fixture
def interpreter_config(tmp_path: Path) -> InterpreterConfig:
    return InterpreterConfig(
        python_binary=sys.executable,
        workspace_root=str(tmp_path / "runs"),
    )


@pytest.fixture
def embedded_interpreter() -> EmbeddedInterpreter:
    return EmbeddedInterpreter()


@pytest.fixture
def subprocess_interpreter() -> SubprocessInterpreter:
    return SubprocessInterpreter()


@pytest.fixture
def name_error_traceback() -> str:
    return (
        "Traceback (most recent call last):\n"
        '  File "<string>", line 2, in <module>\n'
        "NameError: name 'foo' is not defined"
    )
