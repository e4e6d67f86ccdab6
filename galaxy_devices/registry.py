"""Handler registry: pick and connect a command sink by name"""

import logging
from typing import Dict, List, Type

from .base import CommandSink

logger = logging.getLogger(__name__)


class HandlerRegistry:
    """Maps handler names to command sink classes"""

    def __init__(self, debug: bool = False):
        """Initialize registry with available handlers

        Args:
            debug: Enable debug output on created handlers
        """
        self.debug = debug

        # Import handlers here to avoid circular imports
        from .handlers.galaxy import GalaxyHandler
        from .handlers.dry_run import DryRunHandler

        self.handlers: Dict[str, Type[CommandSink]] = {
            'galaxy': GalaxyHandler,
            'dry-run': DryRunHandler,
        }

    def available(self) -> List[str]:
        return sorted(self.handlers)

    def create(self, name: str, **kwargs) -> CommandSink:
        """Create (but do not connect) a handler

        Raises:
            ValueError: If no handler has that name
        """
        key = str(name or '').strip().lower()
        if key not in self.handlers:
            raise ValueError(
                f"Unknown handler '{name}'. Available: {', '.join(self.available())}"
            )
        handler = self.handlers[key](debug=self.debug, **kwargs)
        logger.debug("Created %s handler", handler.name)
        return handler

    def connect(self, name: str, **kwargs) -> CommandSink:
        """Create and connect a handler

        Raises:
            ValueError: If no handler has that name
            DeviceCommunicationError: If connection fails
        """
        handler = self.create(name, **kwargs)
        handler.connect()
        logger.debug("Connected via %s", handler.name)
        return handler
