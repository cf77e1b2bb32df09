from __future__ import annotations

"""backend/unravel/config/settings.py

Application configuration using environment-driven settings.

This module centralizes:
- logging level
- Celery / Redis configuration
- CORS configuration
- interpreter backend selection and the Python binary it runs
- workspace root for per-run sandboxes and generated reports
- the example program shown by the playground
"""
import sys
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXAMPLE_SOURCE = "# Example:\nfor i in range(3):\n    print(i)\n"


class Settings(BaseSettings):
  app_name: str = "unravel-backend"
  environment: str = "development"
  log_level: str = "INFO"

  # Celery / Redis
  celery_broker_url: str = "redis://redis:6379/1"
  celery_result_backend: str = "redis://redis:6379/2"
  celery_task_always_eager: bool = False

  # CORS
  allowed_origins: List[AnyHttpUrl] = [
      "http://localhost:3000",
      "http://127.0.0.1:3000",
      "http://localhost:5173",
      "http://127.0.0.1:5173",
  ]

  # Interpreter: "subprocess" (isolated child process) or "embedded" (in-process)
  interpreter_backend: str = "subprocess"
  python_binary: str = Field(default_factory=lambda: sys.executable)

  # On-disk workspace root for submitted programs
  workspace_root: str = str(Path(tempfile.gettempdir()) / "unravel" / "runs")
  keep_workspaces: bool = False
  reports_dir: str = str(Path(tempfile.gettempdir()) / "unravel" / "reports")

  example_source: str = DEFAULT_EXAMPLE_SOURCE

  statsig_server_secret: str | None = None

  model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
  """Return a cached Settings instance."""
  return Settings()
