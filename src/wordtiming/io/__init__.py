"""I/O utilities."""

from wordtiming.io.export import read_timed_words, to_json, write_json

__all__ = ["read_timed_words", "to_json", "write_json"]
