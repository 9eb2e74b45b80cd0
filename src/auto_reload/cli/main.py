# src/auto_reload/cli/main.py

"""
Demo CLI entrypoint.

Initializes logging, builds the manager, registers a few simulated requests that fail
a configurable number of times, and waits until every request completed.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime

from ..cli.bootstrap import create_manager
from ..config import get_settings
from ..connectivity.manual import ManualConnectivitySource
from ..connectivity.models import ConnectionKind, parse_kinds
from ..core.ports import ConnectivitySource
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class SimulatedRequest:
    """Pretend network request: raises `failures` times, then succeeds."""

    def __init__(self, name: str, failures: int) -> None:
        self.name = name
        self.remaining_failures = max(0, failures)
        self.attempts = 0

    async def __call__(self) -> None:
        self.attempts += 1
        await asyncio.sleep(0)
        if self.remaining_failures > 0:
            self.remaining_failures -= 1
            raise ConnectionError(f"{self.name}: server unreachable (attempt {self.attempts})")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="auto-reload-demo",
        description="Register simulated requests and watch them being retried with backoff.",
    )
    p.add_argument("--requests", type=int, default=3, help="number of simulated requests (default: 3)")
    p.add_argument("--failures", type=int, default=2, help="failures before each request succeeds (default: 2)")
    p.add_argument(
        "--offline-for",
        type=float,
        default=None,
        metavar="SECONDS",
        help="use a scripted source: report no connection, then --online-kinds after SECONDS",
    )
    p.add_argument(
        "--online-kinds",
        default="wifi",
        help="kinds reported when the scripted source goes online (default: wifi)",
    )
    p.add_argument("--timeout", type=float, default=None, help="give up after SECONDS")
    return p


async def _go_online_later(source: ManualConnectivitySource, delay: float, kinds: list[ConnectionKind]) -> None:
    await asyncio.sleep(delay)
    _print_ts(f"[NET] connectivity -> {', '.join(kinds)}")
    source.emit(kinds)


async def run_demo(args: argparse.Namespace) -> int:
    settings = get_settings()

    source: ConnectivitySource | None = None
    scripted: asyncio.Task[None] | None = None
    if args.offline_for is not None:
        manual = ManualConnectivitySource([ConnectionKind.NONE])
        source = manual
        scripted = asyncio.create_task(
            _go_online_later(manual, max(0.0, args.offline_for), parse_kinds(args.online_kinds))
        )

    manager = create_manager(settings, source=source)

    done = asyncio.Event()
    completed: list[str] = []
    total = max(0, int(args.requests))

    def _on_complete(request_id: str) -> None:
        completed.append(request_id)
        _print_ts(f"[DONE] {request_id} ({len(completed)}/{total})")
        if len(completed) >= total:
            done.set()

    if total == 0:
        done.set()

    async with manager:
        for i in range(total):
            request_id = f"request-{i + 1}"
            await manager.register(request_id, SimulatedRequest(request_id, args.failures), _on_complete)
        _print_ts(f"[QUEUE] {total} request(s) registered; waiting for connectivity...")

        try:
            if args.timeout is None:
                await done.wait()
            else:
                await asyncio.wait_for(done.wait(), timeout=args.timeout)
        except TimeoutError:
            _print_ts(f"[TIMEOUT] still pending: {', '.join(manager.pending_ids) or '-'}")
            return 1
        finally:
            if scripted is not None:
                scripted.cancel()

    _print_ts("[OK] all requests completed.")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.log_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        return asyncio.run(run_demo(args))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down...")
        return 130
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    raise SystemExit(main())
