"""Conversation store and terminal frontend for the AI Q&A relay."""

__version__ = "0.1.0"
