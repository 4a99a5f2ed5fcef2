"""Utility functions for targzip."""

from .ascii import copy_with_ascii_translate, looks_like_text, translate_line_endings
from .stream import CopyState, copy_stream

__all__ = [
    "CopyState",
    "copy_stream",
    "copy_with_ascii_translate",
    "looks_like_text",
    "translate_line_endings",
]
