"""Japanese Learning Journey: translation log and daily AI study summaries."""

__version__ = "0.1.0"
