"""Error types raised by fountainkit, each with a message, hint and details."""

from __future__ import annotations

from pathlib import Path
from typing import Any


class FountainKitError(Exception):
    """Base class for every error fountainkit raises on purpose.

    ``str(error)`` renders the message, then the hint, then one line per
    detail, so an uncaught error still tells the user what to do next.
    """

    def __init__(
        self,
        message: str,
        hint: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Create the error.

        Args:
            message: What went wrong
            hint: How to fix it, if known
            details: Values useful for debugging (paths, sizes, types)
        """
        self.message = message
        self.hint = hint
        self.details = details
        super().__init__(self.format_error())

    def format_error(self) -> str:
        lines = [f"Error: {self.message}"]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        if self.details:
            lines.append("Details:")
            lines.extend(f"  {key}: {value}" for key, value in self.details.items())
        return "\n".join(lines)


class ParseError(FountainKitError):
    """Input that cannot be read as screenplay text at all."""


class ValidationError(FountainKitError):
    """A model value that breaks an invariant, e.g. a bad section depth."""


class ConfigurationError(FountainKitError):
    """Unusable configuration file or setting."""


class FountainKitFileNotFoundError(FountainKitError):
    """A screenplay path that does not point at a file."""


# Keys people reach for, and the setting they meant
MISSPELLED_CONFIG_KEYS = {
    "title": "default_title",
    "encoding": "file_encoding",
    "number_scenes": "auto_number_scenes",
    "level": "log_level",
}


def check_config_keys(config: dict[str, Any]) -> None:
    """Reject config data that uses a known misspelled key.

    Raises:
        ConfigurationError: Naming the key to use instead
    """
    for wrong, correct in MISSPELLED_CONFIG_KEYS.items():
        if wrong in config:
            raise ConfigurationError(
                message=f"Invalid configuration key '{wrong}'",
                hint=f"Use '{correct}' instead of '{wrong}'",
                details={
                    "found_keys": list(config),
                    "invalid_key": wrong,
                    "correct_key": correct,
                },
            )


def check_fountain_path(path: Path | str) -> None:
    """Make sure ``path`` is an existing file.

    Raises:
        FountainKitFileNotFoundError: If it is missing or a directory
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FountainKitFileNotFoundError(
            message=f"Screenplay file not found: {file_path}",
            hint="Check the path, or pass the text directly with from_string()",
            details={"path": str(file_path)},
        )
    if file_path.is_dir():
        raise FountainKitFileNotFoundError(
            message=f"Expected a file but found a directory: {file_path}",
            hint="Point at a .fountain file inside the directory",
            details={"path": str(file_path)},
        )
