from __future__ import annotations

import re
from typing import List

_WHITESPACE_RE = re.compile(r"[\u3000\s]+")
_ASCII_PUNCT_RE = re.compile(r"[!-/:-@\[-`{-~]")
_CJK_PUNCT_RE = re.compile(r"[。、！？・「」『』（）()\[\]【】]")

_LATIN_RE = re.compile(r"[a-z0-9]+")
# Hiragana, katakana and CJK unified ideographs.
_JAPANESE_RE = re.compile(r"[\u3040-\u30ff\u4e00-\u9faf]+")

SHORT_CHUNK_LEN = 3


def normalize_text(text: str) -> str:
    """
    Canonicalize text for comparison.

    Lowercases, collapses whitespace (including the ideographic space) and
    strips ASCII and common Japanese punctuation. Never raises.
    """
    normalized = text.lower()
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    normalized = _ASCII_PUNCT_RE.sub("", normalized)
    normalized = _CJK_PUNCT_RE.sub("", normalized)
    # Removing punctuation can leave two spaces side by side.
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    return normalized.strip()


def _japanese_ngrams(chunk: str) -> List[str]:
    if len(chunk) <= SHORT_CHUNK_LEN:
        return [chunk]

    grams: List[str] = []
    for i in range(len(chunk) - 1):
        grams.append(chunk[i : i + 2])
        if i + 3 <= len(chunk):
            grams.append(chunk[i : i + 3])
    return grams


def tokenize(text: str) -> List[str]:
    """
    Split text into distinct search tokens.

    Latin/digit runs become whole-word tokens. Runs of Japanese script of more
    than three characters are split into overlapping 2-grams and 3-grams;
    shorter runs are kept whole. Order is first-seen, Latin tokens first.
    """
    normalized = normalize_text(text)

    candidates: List[str] = list(_LATIN_RE.findall(normalized))
    for chunk in _JAPANESE_RE.findall(normalized):
        candidates.extend(_japanese_ngrams(chunk))

    # dict keeps insertion order, so this dedupes deterministically.
    return [token for token in dict.fromkeys(candidates) if token]


__all__ = ["normalize_text", "tokenize"]
