"""DoBot conversational task assistant engine."""

DOBOT_VERSION = "1.0.0"

__all__ = ["DOBOT_VERSION"]
