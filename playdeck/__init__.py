"""PlayDeck - console playlist manager and audio player."""

__version__ = "0.1.0"
