"""Configuration objects exported on the bus."""

from __future__ import annotations

import abc
import sys
import threading
from typing import Dict, Optional, TextIO, Union

from .bus import INVALID_ARGS, BusError, Connection, validate_object_path

INTERFACE_NAME = "com.system.configurationManager.Application.Configuration"
SIGNAL_CONFIGURATION_CHANGED = "ConfigurationChanged"

Value = Union[int, str]


def _is_value(value) -> bool:
    return isinstance(value, str) or (isinstance(value, int) and not isinstance(value, bool))


class DbusObject(abc.ABC):
    """A bus object holding a configuration that clients can read and change."""

    def __init__(self, connection: Connection, object_path: str):
        self.connection = connection
        self.object_path = validate_object_path(object_path)
        self._conf: Dict[str, Value] = {}
        self._lock = threading.RLock()
        connection.register_object(
            self.object_path,
            {
                INTERFACE_NAME: {
                    "ChangeConfiguration": self.change_configuration,
                    "GetConfiguration": self.get_configuration,
                }
            },
        )
        self._registered = True

    def set_configuration(self, conf):
        """Replace the whole configuration."""
        with self._lock:
            self._conf = dict(conf)

    def change_configuration(self, key, value):
        """Change the value of an existing key."""
        with self._lock:
            if key not in self._conf:
                raise BusError(
                    "Configuration params error!", "Error : no such value by this key!"
                )
            if not _is_value(value):
                raise BusError(INVALID_ARGS, f"Unsupported value type: {type(value).__name__}")
            self._conf[key] = value

    def get_configuration(self):
        """Return the configuration and announce it with a signal."""
        with self._lock:
            result = dict(self._conf)
        self.connection.emit_signal(
            self.object_path, INTERFACE_NAME, SIGNAL_CONFIGURATION_CHANGED, dict(result)
        )
        return result

    @abc.abstractmethod
    def specific_behaviour(self):
        """Start whatever this kind of object does on its own."""

    def close(self):
        """Remove the object from the bus."""
        if self._registered:
            self._registered = False
            self.connection.unregister_object(self.object_path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class TimeoutObject(DbusObject):
    """Prints ``TimeoutPhrase`` every ``Timeout`` seconds in a background thread."""

    def __init__(self, connection, object_path, output: Optional[TextIO] = None):
        super().__init__(connection, object_path)
        self._output = output if output is not None else sys.stdout
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def specific_behaviour(self):
        """Start the timer thread unless it is already started."""
        if self._thread is None:
            self._thread = threading.Thread(target=self._timer_loop, daemon=True)
            self._thread.start()

    def _current_settings(self):
        with self._lock:
            timeout = self._conf.get("Timeout")
            phrase = self._conf.get("TimeoutPhrase")
        if not isinstance(timeout, int) or isinstance(timeout, bool):
            return None
        if not isinstance(phrase, str):
            return None
        return timeout, phrase

    def _timer_loop(self) -> None:
        while not self._stop.is_set():
            settings = self._current_settings()
            if settings is None:
                return
            timeout, phrase = settings
            print(phrase, file=self._output, flush=True)
            self._stop.wait(max(timeout, 0))

    def close(self):
        """Stop the timer thread and remove the object from the bus."""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
        super().close()