from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .config import load_config
from .errors import AskMyNotesError, EmptyQuestionError
from .ingest import load_notes
from .query import answer_question, render_answer

console = Console()


def _list_notes(corpus) -> None:
    table = Table(title="Notes")
    table.add_column("File")
    table.add_column("Title")
    table.add_column("Date")
    table.add_column("Tags")
    for note in corpus:
        table.add_row(note.file, note.title, note.date, ", ".join(note.tags))
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Ask My Notes - find past notes that overlap with a question."
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    ask_parser = subparsers.add_parser(
        "ask",
        help="Ask a question over your notes.",
    )
    ask_parser.add_argument("question", type=str, help="Question to ask over your notes.")
    ask_parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to a config YAML file (default: config.yaml).",
    )
    ask_parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Maximum number of notes to reference (default: from config).",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List the notes that would be searched.",
    )
    list_parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to a config YAML file (default: config.yaml).",
    )

    args = parser.parse_args(argv)

    cfg = load_config(Path(args.config))

    try:
        if args.command == "ask":
            if not args.question.strip():
                raise EmptyQuestionError()
            if args.top_k is not None:
                if args.top_k < 1:
                    ask_parser.error("--top-k must be at least 1")
                cfg = cfg.model_copy(update={"top_k": args.top_k})
            corpus = load_notes(cfg)
            render_answer(answer_question(args.question, corpus, cfg), console)
        elif args.command == "list":
            _list_notes(load_notes(cfg))
        else:  # pragma: no cover - defensive
            parser.print_help()
    except AskMyNotesError as exc:
        console.print(f"[red]{exc}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
