from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import httpx
from rich.console import Console

from .config import AppConfig, load_config
from .errors import NoteLoadError
from .text import normalize_text

console = Console()

MANIFEST_NAME = "index.json"
MANIFEST_ERROR = "メモ一覧の取得に失敗しました。"


def _note_error(file: str) -> str:
    return f"{file} の取得に失敗しました。"


@dataclass(frozen=True)
class Note:
    file: str
    title: str
    date: str
    tags: Tuple[str, ...]
    body: str
    raw: str = ""
    searchable_body: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "searchable_body", normalize_text(self.body))


@dataclass(frozen=True)
class Corpus:
    """Immutable snapshot of every loaded note, in manifest order."""

    notes: Tuple[Note, ...] = ()

    def __iter__(self) -> Iterator[Note]:
        return iter(self.notes)

    def __len__(self) -> int:
        return len(self.notes)

    @classmethod
    def from_notes(cls, notes: Sequence[Note]) -> "Corpus":
        return cls(notes=tuple(notes))


def parse_front_matter(content: str) -> Tuple[Dict[str, str], str]:
    """
    Split a `---` delimited header of `key: value` lines from the note body.

    Content without a complete header is returned untouched as the body.
    """
    if not content.startswith("---"):
        return {}, content
    end = content.find("---", 3)
    if end == -1:
        return {}, content

    meta: Dict[str, str] = {}
    for line in content[3:end].strip().split("\n"):
        key, sep, value = line.partition(":")
        if not key or not sep:
            continue
        meta[key.strip()] = value.strip()

    body = content[end + 3 :].strip()
    return meta, body


def _strip_md(file: str) -> str:
    return file[: -len(".md")] if file.endswith(".md") else file


def build_note(file: str, content: str) -> Note:
    meta, body = parse_front_matter(content)
    tags = tuple(tag.strip() for tag in meta["tags"].split(",")) if meta.get("tags") else ()
    return Note(
        file=file,
        title=meta.get("title") or _strip_md(file),
        date=meta.get("date") or _strip_md(file),
        tags=tags,
        body=body,
        raw=content,
    )


def _parse_manifest(text: str) -> List[str]:
    try:
        files = json.loads(text)
    except json.JSONDecodeError as exc:
        raise NoteLoadError(MANIFEST_ERROR) from exc
    if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
        raise NoteLoadError(MANIFEST_ERROR)
    return files


def load_notes_from_dir(notes_dir: Path) -> Corpus:
    if not notes_dir.is_dir():
        raise NoteLoadError(MANIFEST_ERROR)

    manifest = notes_dir / MANIFEST_NAME
    if manifest.exists():
        try:
            files = _parse_manifest(manifest.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            raise NoteLoadError(MANIFEST_ERROR) from exc
    else:
        files = sorted(p.name for p in notes_dir.glob("*.md") if p.is_file())

    notes: List[Note] = []
    root = notes_dir.resolve()
    for file in files:
        path = (root / file).resolve()
        # Manifest entries must stay inside the notes directory.
        if not path.is_relative_to(root):
            raise NoteLoadError(_note_error(file))
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise NoteLoadError(_note_error(file)) from exc
        notes.append(build_note(file, content))
    return Corpus.from_notes(notes)


def load_notes_from_url(
    base_url: str,
    timeout: float = 10.0,
    client: Optional[httpx.Client] = None,
) -> Corpus:
    base = base_url.rstrip("/") + "/"
    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout)

    try:
        try:
            response = client.get(base + MANIFEST_NAME, headers={"Cache-Control": "no-store"})
        except httpx.HTTPError as exc:
            raise NoteLoadError(MANIFEST_ERROR) from exc
        if not response.is_success:
            raise NoteLoadError(MANIFEST_ERROR)
        files = _parse_manifest(response.text)

        notes: List[Note] = []
        for file in files:
            try:
                note_response = client.get(base + file, headers={"Cache-Control": "no-store"})
            except httpx.HTTPError as exc:
                raise NoteLoadError(_note_error(file)) from exc
            if not note_response.is_success:
                raise NoteLoadError(_note_error(file))
            notes.append(build_note(file, note_response.text))
    finally:
        if owns_client:
            client.close()

    return Corpus.from_notes(notes)


def load_notes(cfg: AppConfig | None = None, client: Optional[httpx.Client] = None) -> Corpus:
    """Load every note into a fresh corpus. Raises NoteLoadError on any failure."""
    if cfg is None:
        cfg = load_config()

    if cfg.notes_url:
        console.print(f"[green]Loading notes from:[/green] {cfg.notes_url}")
        corpus = load_notes_from_url(cfg.notes_url, timeout=cfg.request_timeout, client=client)
    else:
        notes_dir = cfg.notes_dir_resolved
        console.print(f"[green]Loading notes from:[/green] {notes_dir}")
        corpus = load_notes_from_dir(notes_dir)

    console.print(f"[green]Loaded {len(corpus)} notes.[/green]")
    return corpus


__all__ = [
    "Corpus",
    "Note",
    "build_note",
    "load_notes",
    "load_notes_from_dir",
    "load_notes_from_url",
    "parse_front_matter",
]
