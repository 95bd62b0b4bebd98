"""Interactive terminal assistant for questions and code formatting over a chat-completion API."""

__version__ = "1.0.0"