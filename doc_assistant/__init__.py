"""Keyword-relevance retrieval backend for documentation repositories."""

__version__ = "0.1.0"
