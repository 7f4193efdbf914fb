"""Password-gated admin console for chat-bot content stored in flat files."""

__version__ = "0.1.0"
