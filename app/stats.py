from contextlib import contextmanager
from datetime import timedelta
import time
from typing import Any, Callable, Awaitable, Generator

import statsd
from statsd.client.timer import Timer
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.config import ConfigStats


class Stats:
    def timing(self, key: str, value: int) -> None:
        raise NotImplementedError

    def inc(self, key: str, count: int = 1, rate: int = 1) -> None:
        raise NotImplementedError

    def timer(self, key: str) -> Any:
        raise NotImplementedError


class NoopStats(Stats):
    def timing(self, key: str, value: int) -> None:
        """Stats are disabled"""
        pass

    def inc(self, key: str, count: int = 1, rate: int = 1) -> None:
        """Stats are disabled"""
        pass

    def timer(self, key: str) -> Any:
        @contextmanager
        def noop_context_manager() -> Generator[Any, Any, Any]:
            yield

        return noop_context_manager()


class MemoryClient:
    """
    Keeps stats in memory when no statsd host is configured.
    """

    def __init__(self) -> None:
        self.memory: dict[str, Any] = {}

    def timer(self, stat: str, rate: int = 1) -> Timer:
        return Timer(self, stat, rate)

    def timing(self, stat: str, delta: timedelta | float, rate: int = 1) -> None:
        if isinstance(delta, timedelta):
            delta = delta.total_seconds() * 1000.0
        self.memory.setdefault(stat, []).append(delta)

    def incr(self, stat: str, count: int = 1, rate: int = 1) -> None:
        self.memory[stat] = self.memory.get(stat, 0) + count

    def get_memory(self) -> dict[str, Any]:
        return self.memory


class Statsd(Stats):
    def __init__(self, client: statsd.StatsClient | MemoryClient):
        self.client = client

    def timing(self, key: str, value: int) -> None:
        self.client.timing(key, value)

    def inc(self, key: str, count: int = 1, rate: int = 1) -> None:
        self.client.incr(key, count, rate)

    def timer(self, key: str) -> Timer:
        return self.client.timer(key)


_STATS: Stats = NoopStats()


def setup_stats(config: ConfigStats) -> None:
    global _STATS

    if config.enabled is False:
        _STATS = NoopStats()
        return

    client = (
        MemoryClient()
        if config.host is None
        else statsd.StatsClient(config.host, config.port or 8125, prefix=config.module_name)
    )
    _STATS = Statsd(client)


def get_stats() -> Stats:
    return _STATS


class StatsdMiddleware(BaseHTTPMiddleware):
    """
    Records a counter and the response time of every request.
    """

    def __init__(self, app: ASGIApp, module_name: str):
        super().__init__(app)
        self.module_name = module_name

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        key = f"{self.module_name}.http.request.{request.method.lower()}.{request.url.path}"
        get_stats().inc(key)

        start_time = time.monotonic()
        response = await call_next(request)
        response_time = int((time.monotonic() - start_time) * 1000)
        get_stats().timing(f"{self.module_name}.http.response_time", response_time)

        return response
