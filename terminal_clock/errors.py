"""
Error types
All errors meant for the user derive from TerminalClockError and are
reported by the top-level handler in cli.main.
"""


class TerminalClockError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(TerminalClockError):
    """Invalid or unusable configuration."""


class ConfigNotFoundError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    """A value could not be parsed (bad bool, int, hex, color mode)."""


class ConfigRangeError(ConfigError):
    """A value parsed but lies outside its allowed range."""


class MissingKeyError(ConfigError):
    def __init__(self, section: str, key: str):
        super().__init__(f"Missing key '{key}' in section [{section}]")
        self.section = section
        self.key = key


class DurationError(TerminalClockError):
    """A duration string could not be parsed."""
