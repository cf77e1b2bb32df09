from __future__ import annotations

"""
Workspace management for subprocess runs.

Each run gets its own isolated directory tree under the configured
workspace_root:

    <workspace_root>/<run_id>/
      submission.py - the submitted source, as received
      logs/         - interpreter logs (child stderr)

The child process runs with the workspace root as its working directory,
so relative file paths in a submitted program resolve inside it.

All paths are computed using pathlib, so this works on Windows for local
dev and inside Linux containers.
"""

import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path

SOURCE_FILENAME = "submission.py"


@dataclass
class RunWorkspace:
    """
    Represents the on-disk layout for a single run's workspace.
    """

    run_id: str
    root: Path
    source_path: Path
    logs_dir: Path

    def ensure_created(self) -> None:
        """
        Create all workspace directories if they do not already exist.
        """
        self.root.mkdir(parents=True, exist_ok=True)
        self.logs_dir.mkdir(parents=True, exist_ok=True)

    def write_source(self, source: str) -> Path:
        self.source_path.write_text(source, encoding="utf-8")
        return self.source_path

    def remove(self) -> None:
        shutil.rmtree(self.root, ignore_errors=True)


def create_run_workspace(workspace_root: str | Path, run_id: str | None = None) -> RunWorkspace:
    """
    Create a RunWorkspace under ``workspace_root`` and ensure that its
    directories exist on disk.
    """
    run_id = run_id or uuid.uuid4().hex
    root = Path(workspace_root).expanduser() / run_id
    workspace = RunWorkspace(
        run_id=run_id,
        root=root,
        source_path=root / SOURCE_FILENAME,
        logs_dir=root / "logs",
    )
    workspace.ensure_created()
    return workspace
