"""
Periodic poll loop for chat ingestion.

Runs one ingestion cycle at a fixed interval on the asyncio event loop.
Cycles never overlap and a failing cycle never stops the loop.
"""

import asyncio
import logging
from typing import Callable, Optional

from .processor import ChatStreamProcessor, CycleResult, TrackerStatus
from .source import LineSource

logger = logging.getLogger(__name__)

StatusSink = Callable[[TrackerStatus, str], None]


class PollLoop:
    """
    On/off periodic driver for a stream processor.

    Features:
    - Fetches run in the default executor so a slow source does not block the loop
    - The next cycle is only scheduled after the previous one finished
    - Source outages and cycle errors are reported as status and retried next cycle
    - Stopping cancels the pending cycle; nothing runs after stop() returns
    """

    def __init__(
        self,
        source: LineSource,
        processor: ChatStreamProcessor,
        interval: float = 0.45,
        status_sink: Optional[StatusSink] = None,
    ):
        """
        Initialize poll loop.

        Args:
            source: Chat line source
            processor: Stream processor owning session and store writes
            interval: Seconds between the end of one cycle and the next
            status_sink: Callback receiving (status, message) after each change
        """
        self.source = source
        self.processor = processor
        self.interval = interval
        self.status_sink = status_sink

        self.status = TrackerStatus.READY
        self.status_message = "Ready."
        self.cycles_run = 0
        self.cycle_errors = 0

        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self):
        """Start polling. Does nothing if already running."""
        if self._running:
            return

        self._running = True
        self.processor.start_session()
        self._task = asyncio.create_task(self._poll_loop())
        logger.info(f"Poll loop started (interval={self.interval * 1000:.0f}ms)")

    async def stop(self):
        """Stop polling and wait for the loop task to finish."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        self._report(TrackerStatus.STOPPED, "Stopped.")
        logger.info("Poll loop stopped")

    async def wait(self):
        """Block until the loop is stopped or cancelled."""
        if self._task:
            try:
                await self._task
            except asyncio.CancelledError:
                pass

    async def run_cycle(self) -> CycleResult:
        """
        Run a single ingestion cycle.

        Returns:
            Cycle summary (status ERROR if the cycle raised)
        """
        try:
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(None, self.source.fetch_recent)
            cycle = self.processor.process_result(result)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.cycle_errors += 1
            logger.error(f"Error in poll cycle: {e}", exc_info=True)
            cycle = CycleResult(status=TrackerStatus.ERROR, note=str(e))

        self.cycles_run += 1
        self._report(cycle.status, self._describe(cycle))
        return cycle

    async def run_for(self, cycles: int):
        """Run a fixed number of cycles back to back, sleeping in between."""
        for i in range(cycles):
            await self.run_cycle()
            if i < cycles - 1:
                await asyncio.sleep(self.interval)

    async def _poll_loop(self):
        """Background task running cycles until stopped."""
        while self._running:
            await self.run_cycle()
            if self._running:
                await asyncio.sleep(self.interval)

    def _describe(self, cycle: CycleResult) -> str:
        if cycle.status is TrackerStatus.RUNNING:
            return f"Running (poll {self.interval * 1000:.0f}ms) via {cycle.note}"
        if cycle.status is TrackerStatus.SOURCE_UNAVAILABLE:
            return cycle.note or "Chat source unavailable."
        return f"Cycle failed: {cycle.note}"

    def _report(self, status: TrackerStatus, message: str):
        changed = (status, message) != (self.status, self.status_message)
        self.status = status
        self.status_message = message

        if changed and self.status_sink:
            try:
                self.status_sink(status, message)
            except Exception as e:
                logger.warning(f"Status sink failed: {e}")
