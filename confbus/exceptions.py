"""Errors raised while reading and building configuration objects."""

from __future__ import annotations


class ConfigError(Exception):
    """Base error that records where it was raised."""

    message = "Configuration error"

    def __init__(self, file_name, class_name, method_name):
        self.file_name = str(file_name)
        self.class_name = str(class_name)
        self.method_name = str(method_name)
        self.full_message = (
            f"Exception: {self.message}\n"
            f"File: {self.file_name}\n"
            f"Class: {self.class_name}\n"
            f"Method: {self.method_name}\n"
        )
        super().__init__(self.full_message)

    def __str__(self) -> str:
        return self.full_message


class InvalidValueError(ConfigError):
    """A field value could not be read for its declared type."""

    message = "Invalid value"


class UnsupportedTypeTagError(ConfigError):
    """A field carries a type tag that is not known."""

    message = "Unsupported type tag!"


class UnsupportedKeyConfigurationError(ConfigError):
    """A configuration key is not supported."""

    message = "Unsupported key!"


class FileError(ConfigError):
    """A configuration file could not be opened or read."""

    message = "Error while interracting with file!"


class NoTypeTagError(ConfigError):
    """A field has no type tag."""

    message = "Error : No type tag!"


class UnsupportedConfigurationError(ConfigError):
    """The configuration kind named in the meta section is not supported."""

    message = "Error : Unsupported Configuration!"


class MetaSectionError(ConfigError):
    """The meta section of a configuration file is malformed."""

    message = "Error : invalid meta information!"