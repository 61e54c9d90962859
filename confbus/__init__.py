"""Serve typed configuration files as objects on an in-process message bus."""

__version__ = "0.1.0"