"""Package exceptions"""


class MdblocksError(Exception):
    """Base class for errors raised by mdblocks."""


class ConfigError(MdblocksError, ValueError):
    """config.yaml or a settings value is invalid."""
