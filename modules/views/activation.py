import asyncio
import logging
from typing import List

logger = logging.getLogger(__name__)


class ViewActivation:
    """Cancellation scope for the requests started by one view activation.

    Tasks are independent: one failing or finishing never cancels another.
    ``deactivate`` cancels whatever is still outstanding so late responses
    cannot write into a view that is gone.

    The Streamlit pages drive ``load()``, which waits for every task inside
    one ``asyncio.run`` call, so by the time another page deactivates the
    view nothing is pending. Cancellation only takes effect for callers
    that ``activate()`` and leave before the tasks settle.
    """

    def __init__(self, name: str):
        self.name = name
        self._tasks: List[asyncio.Task] = []
        self.active = True

    def launch(self, coro) -> asyncio.Task:
        if not self.active:
            coro.close()
            raise RuntimeError(f"Activation of {self.name} is no longer active")
        task = asyncio.create_task(coro)
        self._tasks.append(task)
        return task

    async def wait(self):
        """Wait for every launched task to settle."""
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def deactivate(self) -> int:
        self.active = False
        cancelled = 0
        for task in self._tasks:
            if not task.done():
                task.cancel()
                cancelled += 1
        if cancelled:
            logger.info(f"Cancelled {cancelled} outstanding request(s) for {self.name}")
        return cancelled

    @property
    def pending(self) -> int:
        return sum(1 for task in self._tasks if not task.done())
