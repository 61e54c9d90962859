"""An in-process message bus with objects, methods, signals and an event loop."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Set

INVALID_ARGS = "org.freedesktop.DBus.Error.InvalidArgs"
UNKNOWN_OBJECT = "org.freedesktop.DBus.Error.UnknownObject"
UNKNOWN_INTERFACE = "org.freedesktop.DBus.Error.UnknownInterface"
UNKNOWN_METHOD = "org.freedesktop.DBus.Error.UnknownMethod"
OBJECT_PATH_IN_USE = "org.freedesktop.DBus.Error.ObjectPathInUse"

_PATH_ELEMENT = re.compile(r"[A-Za-z0-9_]+\Z")
_NAME_ELEMENT = re.compile(r"[A-Za-z_-][A-Za-z0-9_-]*\Z")
_MAX_NAME_LENGTH = 255

Handler = Callable[..., Any]
Interfaces = Mapping[str, Mapping[str, Handler]]


class BusError(Exception):
    """An error carrying a bus error name and a human readable message."""

    def __init__(self, name, message):
        self.name = name
        self.message = message
        super().__init__(f"{name}: {message}")


@dataclass(frozen=True)
class Signal:
    """A signal emitted by an object on the bus."""

    path: str
    interface: str
    name: str
    args: tuple


def validate_object_path(path):
    """Return ``path`` if it is a valid object path, else raise BusError."""
    if not isinstance(path, str) or not path.startswith("/"):
        raise BusError(INVALID_ARGS, f"Invalid object path: {path!r}")
    if path == "/":
        return path
    if not all(_PATH_ELEMENT.match(part) for part in path[1:].split("/")):
        raise BusError(INVALID_ARGS, f"Invalid object path: {path!r}")
    return path


def _validate_bus_name(name: str) -> str:
    if not isinstance(name, str) or not name or len(name) > _MAX_NAME_LENGTH:
        raise BusError(INVALID_ARGS, f"Invalid bus name: {name!r}")
    parts = name.split(".")
    if len(parts) < 2 or not all(_NAME_ELEMENT.match(part) for part in parts):
        raise BusError(INVALID_ARGS, f"Invalid bus name: {name!r}")
    return name


class Connection:
    """A bus connection that owns names and exports objects."""

    def __init__(self):
        self._lock = threading.RLock()
        self._objects: Dict[str, Dict[str, Dict[str, Handler]]] = {}
        self._subscribers: List[Callable[[Signal], Any]] = []
        self._stop = threading.Event()
        self.names: Set[str] = set()

    def request_name(self, name):
        """Acquire a well-known bus name for this connection."""
        with self._lock:
            self.names.add(_validate_bus_name(name))

    def register_object(self, path, obj: Interfaces):
        """Export ``obj``, a mapping of interface to method handlers, at ``path``."""
        validate_object_path(path)
        table = {iface: dict(methods) for iface, methods in obj.items()}
        with self._lock:
            if path in self._objects:
                raise BusError(OBJECT_PATH_IN_USE, f"Object path already in use: {path}")
            self._objects[path] = table

    def unregister_object(self, path):
        """Remove the object exported at ``path``."""
        with self._lock:
            if self._objects.pop(path, None) is None:
                raise BusError(UNKNOWN_OBJECT, f"No object at path: {path}")

    def call_method(self, path, interface, method, *args):
        """Invoke ``method`` of ``interface`` on the object at ``path``."""
        with self._lock:
            interfaces = self._objects.get(path)
            if interfaces is None:
                raise BusError(UNKNOWN_OBJECT, f"No object at path: {path}")
            methods = interfaces.get(interface)
            if methods is None:
                raise BusError(UNKNOWN_INTERFACE, f"No interface {interface} at {path}")
            handler = methods.get(method)
            if handler is None:
                raise BusError(UNKNOWN_METHOD, f"No method {method} on {interface}")
        return handler(*args)

    def emit_signal(self, path, interface, name, *args):
        """Deliver a signal from the object at ``path`` to all subscribers."""
        with self._lock:
            if path not in self._objects:
                raise BusError(UNKNOWN_OBJECT, f"No object at path: {path}")
            subscribers = list(self._subscribers)
        signal = Signal(path, interface, name, args)
        for handler in subscribers:
            handler(signal)
        return signal

    def subscribe(self, handler):
        """Receive every emitted signal; returns a function that unsubscribes."""
        with self._lock:
            self._subscribers.append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._subscribers:
                    self._subscribers.remove(handler)

        return unsubscribe

    def enter_event_loop(self):
        """Block until ``leave_event_loop`` is called."""
        self._stop.wait()
        self._stop.clear()

    def leave_event_loop(self):
        """Make the running (or next) event loop return."""
        self._stop.set()