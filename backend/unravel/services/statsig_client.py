"""Playground usage events sent to Statsig.

Events are only sent when ``statsig_server_secret`` is configured; without it
every helper here is a no-op. Statsig failures are logged and never reach the
request or task that emitted the event.
"""
from __future__ import annotations

import logging
from typing import Iterable, Mapping

from statsig import StatsigEvent, StatsigOptions, StatsigUser
from statsig.statsig_server import StatsigServer

from unravel.config import get_settings
from unravel.models import ExecutionResult, ExplanationRecord

logger = logging.getLogger(__name__)

EXPLAIN_EVENT = "source_explained"
RUN_EVENT = "code_run"


def _stringify(metadata: Mapping[str, object] | None) -> dict[str, str] | None:
    # Statsig metadata values must be strings
    if not metadata:
        return None
    return {key: str(value) for key, value in metadata.items() if value is not None}


class _PlaygroundEvents:
    def __init__(self, secret_key: str | None, environment: str, source: str):
        self._server: StatsigServer | None = None
        self._source = source
        if not secret_key:
            return

        try:
            server = StatsigServer()
            server.initialize(secret_key, StatsigOptions(tier=environment))
            self._server = server
        except Exception as exc:  # noqa: BLE001
            logger.warning("Statsig initialization failed: %s", exc)

    @property
    def enabled(self) -> bool:
        return self._server is not None

    def send(
        self,
        event_name: str,
        *,
        value: float | int | str | None = None,
        metadata: Mapping[str, object] | None = None,
    ) -> None:
        if not self._server:
            return

        try:
            self._server.log_event(
                StatsigEvent(
                    StatsigUser(self._source),
                    event_name,
                    value=value,
                    metadata=_stringify(metadata),
                )
            )
        except Exception as exc:  # noqa: BLE001
            logger.debug("Statsig event %s failed: %s", event_name, exc)

    def shutdown(self) -> None:
        if not self._server:
            return

        try:
            self._server.shutdown()
        except Exception as exc:  # noqa: BLE001
            logger.debug("Statsig shutdown failed: %s", exc)


_events: _PlaygroundEvents | None = None


def get_statsig_client() -> _PlaygroundEvents:
    global _events
    if _events is None:
        settings = get_settings()
        _events = _PlaygroundEvents(
            settings.statsig_server_secret,
            settings.environment,
            source=settings.app_name,
        )
    return _events


def log_explanation_event(records: Iterable[ExplanationRecord]) -> None:
    """One event per explained submission; value is the number of lines."""
    records = list(records)
    kinds = sorted({record.kind.value for record in records})
    get_statsig_client().send(
        EXPLAIN_EVENT,
        value=len(records),
        metadata={"kinds": ",".join(kinds)},
    )


def log_run_event(
    records: Iterable[ExplanationRecord],
    result: ExecutionResult,
    *,
    execution_mode: str = "inline",
) -> None:
    """One event per executed submission; value is the terminal status."""
    get_statsig_client().send(
        RUN_EVENT,
        value=result.status.value,
        metadata={
            "lines": len(list(records)),
            "category": result.failure.category.value if result.failure else None,
            "mode": execution_mode,
        },
    )


def shutdown_statsig() -> None:
    get_statsig_client().shutdown()
