"""Background dispatch of log records.

The dispatcher owns a private asyncio event loop running on a daemon
thread. Capture callbacks hand each record over with
asyncio.run_coroutine_threadsafe, which only enqueues a callback on the
loop, so event-emitting code never waits on the network.

Concurrency model:
- One task per record; tasks never await each other.
- All submissions against the shared intake are serialized by a single
  asyncio.Lock held for the duration of submit().
- No ordering between records and no drain at shutdown. stop() cancels
  whatever is still in flight.

Usage:
    dispatcher = IntakeDispatcher()
    dispatcher.start()
    client = dispatcher.run(IntakeSessionClient.establish(config))

    dispatcher.dispatch(client, record)  # returns immediately
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Coroutine
from concurrent.futures import Future
from typing import Any, TypeVar

from intake_forwarder.application.ports import LogIntakeProtocol
from intake_forwarder.domain.errors import IntakeSubmitError
from intake_forwarder.domain.models import LogRecord
from intake_forwarder.infrastructure.diagnostics import get_diagnostic_logger

log = get_diagnostic_logger()

T = TypeVar("T")

DEFAULT_RUN_TIMEOUT_SECONDS = 30.0
STOP_TIMEOUT_SECONDS = 5.0


class IntakeDispatcher:
    """Runs submissions on a dedicated event loop thread.

    Attributes:
        _loop: Event loop owned by the dispatcher thread.
        _thread: Daemon thread running the loop.
        _submit_lock: Serializes access to the shared intake. Created on
            the loop so it is bound to it.
    """

    def __init__(self, thread_name: str = "intake-dispatcher") -> None:
        """Initialize dispatcher. The loop thread starts on start().

        Args:
            thread_name: Name of the background thread.
        """
        self._thread_name = thread_name
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None
        self._submit_lock: asyncio.Lock | None = None
        self._state_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the loop thread. Calling start() twice is a no-op."""
        with self._state_lock:
            if self.is_running:
                return

            loop = asyncio.new_event_loop()
            ready = threading.Event()

            def _run_loop() -> None:
                asyncio.set_event_loop(loop)
                self._submit_lock = asyncio.Lock()
                loop.call_soon(ready.set)
                loop.run_forever()

            self._loop = loop
            self._thread = threading.Thread(
                target=_run_loop, name=self._thread_name, daemon=True
            )
            self._thread.start()
            ready.wait()

        log.debug("intake_dispatcher_started", thread=self._thread_name)

    def stop(self) -> None:
        """Stop the loop thread, cancelling in-flight submissions."""
        with self._state_lock:
            loop, thread = self._loop, self._thread
            if loop is None or thread is None:
                return
            if thread.is_alive():
                try:
                    asyncio.run_coroutine_threadsafe(_cancel_pending(), loop).result(
                        STOP_TIMEOUT_SECONDS
                    )
                except TimeoutError:
                    log.warning("intake_dispatcher_cancel_timeout", thread=self._thread_name)
            loop.call_soon_threadsafe(loop.stop)
            thread.join(timeout=STOP_TIMEOUT_SECONDS)
            if not thread.is_alive():
                loop.close()
            self._loop = None
            self._thread = None
            self._submit_lock = None

        log.debug("intake_dispatcher_stopped", thread=self._thread_name)

    def run(
        self,
        coro: Coroutine[Any, Any, T],
        timeout: float = DEFAULT_RUN_TIMEOUT_SECONDS,
    ) -> T:
        """Run a coroutine on the dispatcher loop and wait for its result.

        Used at startup so objects created by the coroutine (such as the
        httpx client) are bound to the dispatcher loop. Must not be
        called from the dispatcher thread itself.

        Args:
            coro: Coroutine to run.
            timeout: Seconds to wait for the result.

        Returns:
            The coroutine's result. Its exception propagates unchanged.

        Raises:
            RuntimeError: If the dispatcher is not running.
            TimeoutError: If the coroutine did not finish in time. It is
                cancelled before the error is raised.
        """
        loop = self._loop
        if loop is None or not self.is_running:
            coro.close()
            raise RuntimeError("Intake dispatcher is not running")
        try:
            future = asyncio.run_coroutine_threadsafe(coro, loop)
        except RuntimeError:
            coro.close()
            raise

        try:
            return future.result(timeout)
        except TimeoutError:
            future.cancel()
            raise

    def dispatch(self, intake: LogIntakeProtocol, record: LogRecord) -> Future[None]:
        """Schedule one submission and return immediately.

        The returned future completes after the submission finished or
        failed; callers on the logging path ignore it. When the
        dispatcher is not running the record is dropped with a warning
        and an already-completed future is returned.

        Args:
            intake: Shared intake the record is submitted to.
            record: Fully built record.

        Returns:
            Future of the scheduled task.
        """
        loop = self._loop
        if loop is None or not self.is_running:
            log.warning("intake_dispatcher_not_running", severity=record.severity)
            dropped: Future[None] = Future()
            dropped.set_result(None)
            return dropped
        coro = self._submit(intake, record)
        try:
            return asyncio.run_coroutine_threadsafe(coro, loop)
        except RuntimeError:
            # Loop closed after the running check
            coro.close()
            raise

    async def _submit(self, intake: LogIntakeProtocol, record: LogRecord) -> None:
        lock = self._submit_lock
        if lock is None:
            # Dispatcher stopped between scheduling and execution
            return

        try:
            async with lock:
                await intake.submit(record)
        except IntakeSubmitError as e:
            log.error(
                "intake_submit_failed",
                error=str(e),
                status_code=e.status_code,
                severity=record.severity,
            )
        except Exception:
            log.exception("intake_dispatch_crashed", severity=record.severity)
            raise


async def _cancel_pending() -> None:
    current = asyncio.current_task()
    tasks = [task for task in asyncio.all_tasks() if task is not current]
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
