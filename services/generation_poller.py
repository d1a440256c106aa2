"""
Generation Status Poller - waits for an asynchronous plan generation to finish
"""

import asyncio
import logging
from typing import Any, Callable, Dict, Optional

import aiohttp

from .generation_jobs import TERMINAL_STATUSES

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.5


class GenerationStatusPoller:
    """Polls ``{base_url}/generate-plan/jobs/{execution_id}`` on a fixed interval.

    A 404 means the job is not visible yet. Any other failure is logged and
    polling continues. There is no retry limit or overall timeout: cancel the
    task running ``poll`` to stop it.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str,
        interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.interval = interval

    def status_url(self, execution_id: str) -> str:
        return f"{self.base_url}/generate-plan/jobs/{execution_id}"

    async def fetch_status(self, execution_id: str) -> Optional[Dict[str, Any]]:
        """One status request; ``None`` when the job is not ready to be read."""
        async with self.session.get(self.status_url(execution_id)) as resp:
            if resp.status == 404:
                return None
            resp.raise_for_status()
            return await resp.json()

    async def poll(
        self,
        execution_id: str,
        on_progress: Optional[Callable[[Dict[str, Any]], None]] = None,
    ) -> Dict[str, Any]:
        while True:
            try:
                status = await self.fetch_status(execution_id)
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                logger.error("Status check for %s failed: %s", execution_id, e)
                status = None

            if status is not None and not isinstance(status, dict):
                logger.error("Status check for %s returned %r", execution_id, status)
                status = None

            if status is not None:
                if status.get("status") in TERMINAL_STATUSES:
                    return status
                if on_progress:
                    on_progress(status)

            await asyncio.sleep(self.interval)
