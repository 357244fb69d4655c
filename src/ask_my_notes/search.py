from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from .ingest import Note
from .text import normalize_text, tokenize

MAX_MATCHES = 5

EXCERPT_HEAD_CHARS = 200
EXCERPT_BEFORE_HIT = 80
EXCERPT_AFTER_HIT = 120
ELLIPSIS = "…"


@dataclass(frozen=True)
class Match:
    note: Note
    score: int
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class QueryResult:
    match: Match
    excerpt: str

    @property
    def note(self) -> Note:
        return self.match.note

    @property
    def score(self) -> int:
        return self.match.score


def count_occurrences(text: str, token: str) -> int:
    """Count non-overlapping occurrences of `token`, scanning left to right."""
    if not token:
        return 0
    count = 0
    index = text.find(token)
    while index != -1:
        count += 1
        index = text.find(token, index + len(token))
    return count


def score_notes(
    notes: Iterable[Note],
    tokens: Sequence[str],
    limit: int = MAX_MATCHES,
) -> List[Match]:
    """
    Rank notes by how often the query tokens occur in their normalized body.

    Notes scoring zero are dropped. Equal scores keep their corpus order
    (sorted() is stable), and at most `limit` matches are returned.
    """
    query_tokens = tuple(tokens)
    matches: List[Match] = []
    for note in notes:
        score = sum(count_occurrences(note.searchable_body, token) for token in query_tokens)
        if score > 0:
            matches.append(Match(note=note, score=score, tokens=query_tokens))

    matches = sorted(matches, key=lambda m: m.score, reverse=True)
    return matches[: max(0, limit)]


def create_excerpt(text: str, tokens: Sequence[str]) -> str:
    """
    Cut a window of the original text around the first token hit.

    The hit offset is found in the normalized text but applied to the original
    one, so the window may drift when punctuation precedes the hit.
    """
    normalized = normalize_text(text)
    hit_index = -1
    for token in tokens:
        if not token:
            continue
        idx = normalized.find(token)
        if idx != -1:
            hit_index = idx
            break

    if hit_index == -1:
        suffix = ELLIPSIS if len(text) > EXCERPT_HEAD_CHARS else ""
        return text[:EXCERPT_HEAD_CHARS] + suffix

    start = max(0, hit_index - EXCERPT_BEFORE_HIT)
    end = min(len(text), hit_index + EXCERPT_AFTER_HIT)
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text) else ""
    return f"{prefix}{text[start:end]}{suffix}"


def query(
    question: str,
    notes: Iterable[Note],
    limit: int = MAX_MATCHES,
) -> List[QueryResult]:
    tokens = tokenize(question.strip())
    return [
        QueryResult(match=match, excerpt=create_excerpt(match.note.body, match.tokens))
        for match in score_notes(notes, tokens, limit=limit)
    ]


__all__ = [
    "MAX_MATCHES",
    "Match",
    "QueryResult",
    "count_occurrences",
    "create_excerpt",
    "query",
    "score_notes",
]
