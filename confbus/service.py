"""A bus service that owns a well-known name and runs configuration objects."""

from __future__ import annotations

import logging
from typing import List, Optional

from .bus import BusError, Connection
from .objects import DbusObject

SERVICE_NAME = "com.system.configurationManager"

log = logging.getLogger(__name__)


class Service:
    """Holds the bus connection and the configuration objects exported on it."""

    def __init__(self, connection: Optional[Connection] = None):
        self.connection = connection if connection is not None else Connection()
        try:
            self.connection.request_name(SERVICE_NAME)
        except BusError as exc:
            log.error("Failed to acquire service name: %s - %s", exc.name, exc.message)
            raise
        log.info("Service name acquired: %s", SERVICE_NAME)
        self.objects: List[DbusObject] = []

    def add_object(self, obj: DbusObject) -> None:
        """Add an object whose behaviour starts when the service runs."""
        self.objects.append(obj)

    def run(self) -> None:
        """Start every object's behaviour, then serve until the loop is left."""
        for obj in self.objects:
            obj.specific_behaviour()
        try:
            self.connection.enter_event_loop()
        except BusError as exc:
            log.error("Bus error in event loop: %s", exc)