"""Errors raised for bad engine configuration or snapshot files.

The engine itself never raises for constraint violations; those come back
as flags and warnings. These errors cover input that cannot be read.
"""

from __future__ import annotations


class ConfigurationError(Exception):
    """Unusable configuration or snapshot input, with an optional hint."""

    def __init__(self, message: str, suggestion: str | None = None) -> None:
        self.message = message
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        lines = [f"debate-tab: {self.message}"]
        if self.suggestion:
            lines.append(f"  hint: {self.suggestion}")
        return "\n".join(lines)


class ValidationError(ConfigurationError):
    """A config field failed validation."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        super().__init__(
            f"config field '{field}' is invalid: {reason}",
            "Fix the value or remove the key to fall back to the default.",
        )


class SnapshotError(ConfigurationError):
    """A team/judge snapshot file cannot be read or validated."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(
            f"could not load snapshot {path}: {reason}",
            "Check the file is YAML or JSON and matches the snapshot layout.",
        )
