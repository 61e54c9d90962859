"""Entry point that builds the configuration service and runs it."""

from __future__ import annotations

import argparse
import logging
from typing import Optional

from .builder import CONFIG_DIR, ServiceBuilder, create_service

log = logging.getLogger(__name__)


class ServiceManager:
    """Builds a service with a builder and runs it when the build succeeds."""

    def __init__(self, builder: Optional[ServiceBuilder] = None):
        self.builder = builder if builder is not None else ServiceBuilder()

    def run_application(self):
        """Build and run the service; return False if it could not be built."""
        if not create_service(self.builder):
            log.warning("Service build failed; not running")
            return False
        self.builder.service.run()
        return True


def main(argv=None):
    """Run the configuration service from the command line."""
    parser = argparse.ArgumentParser(description="Serve configuration files on the bus.")
    parser.add_argument(
        "--config-dir",
        default=CONFIG_DIR,
        help="directory holding the configuration files",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    manager = ServiceManager(ServiceBuilder(args.config_dir))
    return 0 if manager.run_application() else 1