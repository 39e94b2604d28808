"""
Common lifecycle for StrideBeat device adapters.
"""

import asyncio
import structlog
from abc import ABC, abstractmethod
from typing import Dict, Any, Optional

class BaseHardware(ABC):
    """
    A device that must be opened before use and closed afterwards.

    `initialize` and `shutdown` are idempotent and serialised by a lock.
    Failures in the backend hooks are logged and re-raised so the owning
    service decides whether to carry on without the device.
    """

    def __init__(self, config: Optional[Any] = None, name: Optional[str] = None):
        self.config = config
        self.name = name or self.__class__.__name__
        self.logger = structlog.get_logger(hardware=self.name)
        self._initialized = False
        self._lock = asyncio.Lock()

    async def initialize(self) -> None:
        async with self._lock:
            if self._initialized:
                return
            try:
                await self._initialize_impl()
            except Exception as e:
                self.logger.error(f"Could not open {self.name}: {e}")
                raise
            self._initialized = True
            self.logger.info("Device ready")

    async def shutdown(self) -> None:
        async with self._lock:
            if not self._initialized:
                return
            try:
                await self._shutdown_impl()
            except Exception as e:
                self.logger.error(f"Could not close {self.name}: {e}")
                raise
            finally:
                self._initialized = False
            self.logger.info("Device closed")

    def is_initialized(self) -> bool:
        return self._initialized

    @abstractmethod
    async def _initialize_impl(self) -> None:
        pass

    @abstractmethod
    async def _shutdown_impl(self) -> None:
        pass

    async def check_health(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "initialized": self._initialized,
            "status": "ok" if self._initialized else "offline",
        }
