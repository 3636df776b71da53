"""Stateless relay between the Q&A client and the Gemini API."""

__version__ = "0.1.0"
