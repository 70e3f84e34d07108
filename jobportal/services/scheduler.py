"""
JobPortal - Scheduled background tasks.

Fixed-interval ticks (activity refresh, notification emission) run as asyncio
tasks with explicit cancellation handles, grouped per client scope so that a
logout cancels exactly that client's ticks.

Usage:
    task_registry.ensure(client_id, "activity", 300, refresh_callback)
    task_registry.cancel_client(client_id)
"""
import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger("jobportal.scheduler")


class PeriodicTask:
    """
    Run a callback every `interval` seconds on the running event loop.

    The callback may be a plain function or a coroutine function. Exceptions
    raised by the callback are logged and the task keeps ticking. Once
    cancelled, the callback is never invoked again.
    """

    def __init__(self, name: str, interval: float, callback: Callable[[], Any]):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.name = name
        self.interval = interval
        self.callback = callback
        self.ticks = 0
        self._task: Optional[asyncio.Task] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._cancelled = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done() and not self._cancelled

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def start(self) -> "PeriodicTask":
        """Schedule the task on the running loop. No-op if already running."""
        if self._cancelled:
            raise RuntimeError(f"Task {self.name} was cancelled and cannot be restarted")
        if self.running:
            return self
        self._loop = asyncio.get_running_loop()
        self._task = self._loop.create_task(self._run(), name=self.name)
        logger.debug("Started task %s (every %.1fs)", self.name, self.interval)
        return self

    async def _run(self) -> None:
        while not self._cancelled:
            await asyncio.sleep(self.interval)
            if self._cancelled:
                break
            await self.run_once()

    async def run_once(self) -> None:
        """Invoke the callback once, logging any failure."""
        if self._cancelled:
            return
        self.ticks += 1
        try:
            result = self.callback()
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Task %s tick failed", self.name)

    def cancel(self) -> None:
        """Stop the task. Safe to call more than once and from any thread."""
        if self._cancelled:
            return
        self._cancelled = True
        task, loop = self._task, self._loop
        if task is None or task.done() or loop is None or loop.is_closed():
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            task.cancel()
        else:
            loop.call_soon_threadsafe(task.cancel)
        logger.debug("Cancelled task %s", self.name)


class TaskRegistry:
    """Periodic tasks keyed by client scope and task name."""

    def __init__(self):
        self._tasks: Dict[str, Dict[str, PeriodicTask]] = {}

    def ensure(self, client_id: str, name: str, interval: float, callback: Callable[[], Any]) -> PeriodicTask:
        """Start the named task for a client unless it is already running."""
        tasks = self._tasks.setdefault(client_id, {})
        existing = tasks.get(name)
        if existing is not None and existing.running:
            return existing

        task = PeriodicTask(f"{name}:{client_id}", interval, callback)
        tasks[name] = task
        return task.start()

    def get(self, client_id: str, name: str) -> Optional[PeriodicTask]:
        return self._tasks.get(client_id, {}).get(name)

    def has_tasks(self, client_id: str) -> bool:
        return any(task.running for task in self._tasks.get(client_id, {}).values())

    def cancel_client(self, client_id: str) -> int:
        """Cancel every task of a client. Returns how many were cancelled."""
        tasks = self._tasks.pop(client_id, {})
        for task in tasks.values():
            task.cancel()
        if tasks:
            logger.debug("Cancelled %d task(s) for client %s", len(tasks), client_id)
        return len(tasks)

    def cancel_all(self) -> int:
        count = 0
        for client_id in list(self._tasks):
            count += self.cancel_client(client_id)
        return count


# Global registry instance
task_registry = TaskRegistry()
