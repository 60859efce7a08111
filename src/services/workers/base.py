"""Base worker functionality for cooperative background loops."""

from __future__ import annotations

import asyncio
import logging
import os
import uuid
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BaseWorker(ABC):
    """Abstract base class for async workers.

    The halt signal is only checked between iterations of ``run_forever``.
    """

    def __init__(self, worker_name: str | None = None):
        self.worker_name = worker_name or self._build_worker_name()
        self._shutdown_event = asyncio.Event()

    @abstractmethod
    async def run_forever(self) -> None:
        """Main worker loop. Should be implemented by subclasses."""
        pass

    def _build_worker_name(self) -> str:
        """Build a unique name for this worker instance."""
        return f"{type(self).__name__.lower()}-{os.getpid()}-{uuid.uuid4().hex[:6]}"

    def shutdown(self) -> None:
        """Signal the worker to shut down gracefully."""
        self._shutdown_event.set()

    def resume(self) -> None:
        """Clear a pending shutdown request."""
        self._shutdown_event.clear()

    def is_shutdown_requested(self) -> bool:
        """Check if shutdown has been requested."""
        return self._shutdown_event.is_set()
