from __future__ import annotations


class PlayResolutionError(Exception):
    """Base class for everything the engine raises on purpose."""


class ProfileLoadError(PlayResolutionError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"could not load outcome profile {path!r}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(PlayResolutionError):
    pass


class IllegalActionError(PlayResolutionError, ValueError):
    pass
