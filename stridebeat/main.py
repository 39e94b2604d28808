"""
Main entry point for StrideBeat.

This module initializes the core components of the system and starts the application.
It handles signal management, logging setup, and system lifecycle.
"""

import asyncio
import logging
import signal
import sys
import structlog
from typing import Dict, Optional

from stridebeat.core import (
    EventRegistry, ServiceRegistry, EventBus, EventTracer, BaseService, get_config, ApplicationConfig
)
from stridebeat.core.events import EventType
from stridebeat.events.system import ApplicationStartupCompletedEvent
from stridebeat.services import MotionService, CadenceService, StatusService

def setup_logging(level: str = "INFO"):
    """Configure structured logging for the application."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level),
        stream=sys.stdout,
    )

class StrideBeatApplication:
    """
    Main application class for StrideBeat.

    This class initializes and manages the core components of the system,
    including the event system, service registry, and services.
    """

    def __init__(self, config: Optional[ApplicationConfig] = None):
        self.logger = structlog.get_logger(app="stridebeat")
        self.config = config or get_config()

        self.event_registry = EventRegistry()
        self.service_registry = ServiceRegistry()

        if self.config.event.tracing_enabled:
            self.event_tracer = EventTracer(max_events=self.config.event.max_trace_events)
        else:
            self.event_tracer = None

        self.event_bus = EventBus(self.event_registry, self.event_tracer)
        self.event_registry.register_event(
            EventType.APPLICATION_STARTUP_COMPLETED,
            ApplicationStartupCompletedEvent,
            "All services started"
        )

        self.services: Dict[str, BaseService] = {}
        self._running = True

        if self.config.debug:
            self.event_bus.subscribe(None, self._log_event, "stridebeat")

    async def _log_event(self, event):
        """Debug mode: echo every event on the bus except the raw sample stream."""
        if event.type != EventType.MOTION_SAMPLE:
            self.logger.debug("Event", event_type=event.type, producer=event.producer_name)

    async def initialize(self):
        """Start all services in dependency order."""
        self.logger.info("Initializing StrideBeat")

        try:
            # Consumers first so no sample or status event is published into the void
            self.services["status"] = await self._init_service(StatusService)
            self.services["cadence"] = await self._init_service(CadenceService)
            self.services["motion"] = await self._init_service(MotionService)

            await self.event_bus.publish(
                ApplicationStartupCompletedEvent(producer_name="stridebeat"),
                "stridebeat"
            )

            for event_type, flow in self.event_registry.describe().items():
                self.logger.debug("Event flow", event_type=event_type, **flow)
            self.logger.info("StrideBeat initialization complete")

        except Exception as e:
            self.logger.error("Failed to initialize application", error=str(e), exc_info=True)
            raise

    async def _init_service(self, service_class, **kwargs):
        """
        Initialize and start a service.

        Args:
            service_class: The service class to initialize
            **kwargs: Additional arguments to pass to the service constructor

        Returns:
            The started service instance
        """
        service_name = service_class.__name__
        self.logger.info(f"Initializing service: {service_name}")

        service = service_class(
            event_bus=self.event_bus,
            service_registry=self.service_registry,
            config=self.config,
            **kwargs
        )

        try:
            await service.start()
            return service
        except Exception as e:
            self.logger.error(f"Failed to start service: {service_name}",
                              error=str(e), exc_info=True)
            raise

    async def run(self):
        """Run the application main loop."""
        try:
            while self._running:
                await asyncio.sleep(1)

        except asyncio.CancelledError:
            self.logger.info("Application task cancelled")

        finally:
            await self.shutdown()

    async def shutdown(self):
        """Shut down all services and clean up resources."""
        if not self.services:
            return

        self._running = False
        self.logger.info("Shutting down StrideBeat")

        # Reverse start order: stop the sample source before the pipeline
        for name, service in reversed(list(self.services.items())):
            try:
                self.logger.info(f"Stopping service: {name}")
                await service.stop()
            except Exception as e:
                self.logger.error(f"Error stopping service {name}: {e}")
        self.services.clear()

        if self.event_tracer:
            self.logger.info("Event statistics", **self.event_tracer.get_event_stats())
        self.logger.info("StrideBeat shutdown complete")

    def handle_signal(self, sig):
        """
        Handle termination signals.

        Args:
            sig: The signal received
        """
        self.logger.info(f"Received signal {sig.name}, shutting down")
        self._running = False

async def main():
    """Application entry point."""
    config = get_config()
    setup_logging("DEBUG" if config.debug else config.log_level.value)

    app = StrideBeatApplication(config)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(
            sig, lambda s=sig: app.handle_signal(s))

    await app.initialize()
    await app.run()

def run():
    """Console script entry point."""
    try:
        asyncio.run(main())
    except Exception as e:
        logging.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    run()
