"""Building configuration objects and services from configuration files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .bus import BusError, Connection
from .exceptions import ConfigError, UnsupportedConfigurationError
from .objects import DbusObject, TimeoutObject
from .reader import ConfigReader, ConfigType
from .service import Service

OBJECT_PATH_ROOT = "/com/system/configurationManager/Application"
CONFIG_DIR = "../data/"

log = logging.getLogger(__name__)

ObjectFactory = Callable[[Connection, str], DbusObject]


def object_path_for(path):
    """Return the object path under which the file at ``path`` is exported."""
    name = Path(path).name.replace(".", "_")
    return f"{OBJECT_PATH_ROOT}/{name}"


class DbusObjectBuilder:
    """Creates the object for a configuration kind and fills it from a reader."""

    def __init__(self):
        self._factories: Dict[ConfigType, ObjectFactory] = {
            ConfigType.TIMEOUT: lambda connection, path: TimeoutObject(connection, path),
        }
        self._reader: Optional[ConfigReader] = None
        self._config_type = None
        self._object: Optional[DbusObject] = None

    def set_builder_params(self, reader, config_type):
        """Choose the reader to take fields from and the kind of object to build."""
        self._reader = reader
        self._config_type = config_type

    def set_object_attributes(self, connection, path):
        """Create the object for the chosen kind at ``path`` on ``connection``."""
        factory = self._factories.get(self._config_type)
        if factory is None:
            raise UnsupportedConfigurationError(
                __file__, type(self).__name__, "set_object_attributes"
            )
        try:
            self._object = factory(connection, path)
        except BusError as exc:
            log.error("%s", exc)
            self._object = None

    def _build(self) -> None:
        if self._object is None:
            raise RuntimeError("no object has been created to configure")
        if self._reader is None:
            raise RuntimeError("no reader has been set")
        self._object.set_configuration(dict(self._reader))

    def get_built_object(self):
        """Fill the object with every remaining field and return it."""
        self._build()
        return self._object


class ServiceBuilder:
    """Builds a service holding one object per file in a configuration directory."""

    def __init__(self, config_dir: Union[str, Path] = CONFIG_DIR, service: Optional[Service] = None):
        self.config_dir = Path(config_dir)
        self.service = service if service is not None else Service()
        self._reader = ConfigReader()
        self.config_paths: List[Path] = []

    def _collect_all_configs(self) -> None:
        self.config_paths = sorted(p for p in self.config_dir.iterdir() if p.is_file())
        for path in self.config_paths:
            log.info("Found configuration file: %s", path)

    def build(self):
        """Build every configured object; return False if any of them fails."""
        self._collect_all_configs()
        object_builder = DbusObjectBuilder()
        try:
            for path in self.config_paths:
                object_path = object_path_for(path)
                log.info("Processing path: %s", object_path)
                self._reader.set_file(path)
                try:
                    config_type = self._reader.read_meta()
                    object_builder.set_builder_params(self._reader, config_type)
                    object_builder.set_object_attributes(self.service.connection, object_path)
                    self.service.add_object(object_builder.get_built_object())
                finally:
                    self._reader.close()
        except (ConfigError, BusError, OSError, RuntimeError):
            return False
        return True


def create_service(builder):
    """Run ``builder``; return whether the service was built correctly."""
    if builder.build():
        return True
    log.warning("Service could not be built")
    return False