# engagement_harness/forms/scheduler.py
import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Set, Union

logger = logging.getLogger(__name__)

TaskCallback = Callable[[], Union[None, Awaitable[None]]]
ErrorHook = Callable[[str, BaseException], None]


def _log_callback_error(key: str, error: BaseException) -> None:
    logger.error(f"Scheduled task '{key}' failed: {error}", exc_info=error)


class _ScheduledTask:
    def __init__(self, key: str, delay: float, callback: TaskCallback):
        self.key = key
        self.delay = delay
        self.callback = callback
        self.started = False
        self.task: Optional["asyncio.Task[Any]"] = None


class DebounceScheduler:
    """
    Keyed delayed tasks with cancel-on-reschedule semantics.

    Scheduling a key that already has a waiting task cancels that task and
    restarts the delay, so only the last schedule per key ever fires. Once a
    callback has started it is never cancelled by a reschedule; it runs to
    completion or failure. Failures are handed to `on_error`.
    """

    def __init__(self, on_error: Optional[ErrorHook] = None):
        self._on_error = on_error or _log_callback_error
        self._waiting: Dict[str, _ScheduledTask] = {}
        self._tasks: Set["asyncio.Task[Any]"] = set()

    def schedule(self, key: str, delay: float, callback: TaskCallback) -> None:
        previous = self._waiting.get(key)
        if previous is not None and not previous.started and previous.task is not None:
            logger.debug(f"Rescheduling '{key}': cancelling the pending task.")
            previous.task.cancel()

        entry = _ScheduledTask(key, delay, callback)
        entry.task = asyncio.get_running_loop().create_task(self._run(entry))
        self._waiting[key] = entry
        self._tasks.add(entry.task)
        entry.task.add_done_callback(self._tasks.discard)

    def pending(self, key: str) -> bool:
        """True if `key` has a task still waiting for its delay to elapse."""
        entry = self._waiting.get(key)
        return entry is not None and not entry.started

    async def _run(self, entry: _ScheduledTask) -> None:
        await asyncio.sleep(entry.delay)
        entry.started = True
        if self._waiting.get(entry.key) is entry:
            del self._waiting[entry.key]
        try:
            result = entry.callback()
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self._on_error(entry.key, e)

    async def wait_idle(self) -> None:
        """Wait until no task is waiting or running, including ones scheduled meanwhile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def cancel_all(self) -> None:
        for task in list(self._tasks):
            task.cancel()
        self._waiting.clear()
