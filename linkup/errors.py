"""Exception types for LinkUp.

Validation outcomes are never exceptions (see ``validator.Reject``); these
cover configuration, puzzle data and misuse of a game session.
"""


class LinkUpError(Exception):
    """Base class for LinkUp errors."""


class ConfigError(LinkUpError):
    """Configuration file is unreadable or holds invalid values."""


class PuzzleLoaderError(LinkUpError):
    """Puzzle pair file is missing or malformed."""


class GameStateError(LinkUpError):
    """A session operation was attempted in the wrong game status."""
