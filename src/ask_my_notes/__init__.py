"""
Ask My Notes.

Find past notes that share words with a question and reference them in a
templated answer. Works on Japanese and Latin text without a tokenizer library.
"""

__all__ = [
    "cli",
    "config",
    "errors",
    "ingest",
    "query",
    "search",
    "text",
]
