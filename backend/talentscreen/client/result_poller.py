"""
Consumer-side poller for assessment results.

Fetches the result once immediately, then every ``interval`` seconds until a
result carrying a narrative is observed or the server answers with a
definitive client error (4xx). Transport failures and 5xx responses are
transient: they are logged and polling continues. There is no retry cap;
callers end the loop with ``stop()``.

Usage:
  python -m talentscreen.client.result_poller http://localhost:8000 42 [--interval 5]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

import httpx

from ..platform.config import settings
from ..platform.logging import setup_logging

logger = logging.getLogger(__name__)

RESULT_PATH = "/api/v1/assessment/result/{assessment_id}"


@dataclass(frozen=True)
class Loading:
    pass


@dataclass(frozen=True)
class HasResult:
    result: dict[str, Any] = field(default_factory=dict)

    @property
    def has_narrative(self) -> bool:
        return self.result.get("analise_ia") is not None


@dataclass(frozen=True)
class PollError:
    status_code: int
    detail: str = ""


PollState = Union[Loading, HasResult, PollError]


def is_terminal(state: PollState) -> bool:
    if isinstance(state, PollError):
        return True
    return isinstance(state, HasResult) and state.has_narrative


class ResultPoller:
    def __init__(
        self,
        base_url: str,
        assessment_id: int,
        *,
        interval: float | None = None,
        client: httpx.Client | None = None,
        sleep: Callable[[float], Any] | None = None,
        on_state: Callable[[PollState], None] | None = None,
        timeout: float = 10.0,
    ):
        self.url = base_url.rstrip("/") + RESULT_PATH.format(assessment_id=assessment_id)
        self.interval = settings.RESULT_POLL_INTERVAL_SECONDS if interval is None else interval
        self.client = client or httpx.Client(timeout=timeout)
        self._owns_client = client is None
        self._stop = threading.Event()
        self._sleep = sleep or self._stop.wait
        self.on_state = on_state
        self.state: PollState = Loading()
        self.fetches = 0

    def stop(self) -> None:
        self._stop.set()

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def fetch_once(self) -> PollState:
        """One fetch; returns the new state, or the current one on a transient failure."""
        self.fetches += 1
        try:
            response = self.client.get(self.url)
        except httpx.HTTPError as exc:
            logger.warning("Result fetch failed url=%s: %s", self.url, exc)
            return self.state

        # Throttling is temporary; keep polling like a server error
        if response.status_code >= 500 or response.status_code == 429:
            logger.warning("Result fetch got %s url=%s; retrying", response.status_code, self.url)
            return self.state
        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            detail = str(body.get("detail") or "") if isinstance(body, dict) else response.text
            return PollError(status_code=response.status_code, detail=detail)

        try:
            payload = response.json()
        except ValueError:
            logger.warning("Result fetch returned non-JSON body url=%s", self.url)
            return self.state
        result = payload.get("result") if isinstance(payload, dict) else None
        if not isinstance(result, dict):
            logger.warning("Result fetch returned no result object url=%s", self.url)
            return self.state
        return HasResult(result=result)

    def _set_state(self, state: PollState) -> None:
        if state != self.state and self.on_state is not None:
            self.on_state(state)
        self.state = state

    def run(self) -> PollState:
        """Poll until a terminal state or ``stop()``; returns the last state."""
        try:
            while not self.stopped:
                self._set_state(self.fetch_once())
                if is_terminal(self.state):
                    break
                self._sleep(self.interval)
        finally:
            if self._owns_client:
                self.client.close()
        return self.state


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Wait for an assessment result and its narrative")
    parser.add_argument("base_url", help="API base URL, e.g. http://localhost:8000")
    parser.add_argument("assessment_id", type=int)
    parser.add_argument("--interval", type=float, default=None, help="Seconds between fetches")
    args = parser.parse_args(argv)

    setup_logging()

    def _report(state: PollState) -> None:
        if isinstance(state, HasResult) and not state.has_narrative:
            print("Result stored; waiting for narrative...", file=sys.stderr)

    poller = ResultPoller(args.base_url, args.assessment_id, interval=args.interval, on_state=_report)
    try:
        state = poller.run()
    except KeyboardInterrupt:
        poller.stop()
        return 130

    if isinstance(state, PollError):
        print(f"Error {state.status_code}: {state.detail}", file=sys.stderr)
        return 1
    if isinstance(state, HasResult):
        print(json.dumps(state.result, ensure_ascii=False, indent=2))
        return 0
    return 1


if __name__ == "__main__":
    sys.exit(main())
