"""Exceptions raised while checking, installing or uninstalling plugins."""


class PluginUpdateError(Exception):
    """Base class for plugin update failures."""
    pass


class InvalidArgument(PluginUpdateError, ValueError):
    """A required argument was missing."""
    pass


class NetworkFailure(PluginUpdateError):
    """A manifest or plugin file could not be downloaded."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class ParseFailure(PluginUpdateError):
    """A manifest was malformed or missing a required attribute."""

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class FilesystemFailure(PluginUpdateError):
    """A plugin file or the plugins archive could not be read or written."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(message)
        self.path = path
