"""Gazetteers backing the reference indexes."""

from .jsonl import JSONLGazetteer  # noqa: F401
