"""Exceptions raised while updating the activity section."""

from __future__ import annotations


class ReadmeActivityError(Exception):
    """Base class for expected run failures."""


class ConfigurationError(ReadmeActivityError):
    """Settings are incomplete or the README has no start marker."""


class NoActivityError(ReadmeActivityError):
    """No supported events were found for the user."""


class PersistenceReadError(ReadmeActivityError):
    """The stored event window is missing or not valid JSON."""


class VersionControlError(ReadmeActivityError):
    """A git step exited non-zero."""

    def __init__(self, command: str, returncode: int, output: str = ""):
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(f"`{command}` failed with exit code {returncode}")


class GitHubAPIError(ReadmeActivityError):
    """Error from GitHub API."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
