# Copyright (c) 2026 Mark Ferrell. MIT License.
"""Exceptions raised while planning or executing a publish."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when the action is misconfigured (e.g. no npm auth token)."""


class ManifestError(ValueError):
    """Raised when package.json is missing, unreadable, or incomplete."""


class ExternalCommandError(RuntimeError):
    """Raised when an external command exits non-zero or fails to start.

    Attributes:
        command: The program and arguments that were executed.
        returncode: Exit status of the process, or -1 if it never started.
        stderr: Why the process could not be started; empty otherwise.
    """

    def __init__(self, command: tuple[str, ...], returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(str(self))

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command)
        if self.returncode < 0:
            return f"{cmd_str} failed to start: {self.stderr}"
        return f"{cmd_str} failed (exit {self.returncode})"
