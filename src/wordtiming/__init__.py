"""Word-level timing preservation for edited captions."""

__version__ = "0.1.0"
