"""Sentix: batch sentiment analysis backed by a hosted language model."""

__version__ = "1.0.0"
