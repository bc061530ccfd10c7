"""
Console event publisher adapter - Implements EventPublisher protocol.

This module provides a logging-based implementation of the domain's
event publisher port, writing each committed registrar event to the
application log.
"""

import logging
from dataclasses import asdict

from registrar.domain.events import RegistrarEvent

logger = logging.getLogger(__name__)


class ConsoleEventPublisher:
    """
    Implements EventPublisher protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    Events are logged at INFO level to be visible in docker-compose logs.
    """

    def publish(self, event: RegistrarEvent) -> None:
        """
        Log a registrar event.

        Args:
            event: Committed domain event
        """
        fields = " ".join(f"{key}={value}" for key, value in asdict(event).items())
        logger.info("[EVENT] %s %s", type(event).__name__, fields)
