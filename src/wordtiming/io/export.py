"""Retiming input loaders and output serializers."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import TypeAdapter

from wordtiming.models import RetimeResponse, TimedWord

_WORDS_ADAPTER = TypeAdapter(list[TimedWord])


def to_json(response: RetimeResponse) -> str:
    """Serialize a retiming response to formatted JSON."""
    return response.model_dump_json(indent=2)


def write_json(response: RetimeResponse, output_path: str | Path) -> None:
    """Write retiming response JSON to disk."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_json(response) + "\n", encoding="utf-8")


def read_timed_words(input_path: str | Path) -> list[TimedWord]:
    """Load timed words from a JSON file.

    Accepts either a bare list of `{word, start, end, confidence}` objects or
    an object holding such a list under `words`.
    """
    path = Path(input_path)
    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("words", [])
    return _WORDS_ADAPTER.validate_python(payload)
