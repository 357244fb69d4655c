from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .config import AppConfig
from .errors import EmptyQuestionError
from .ingest import Corpus
from .search import MAX_MATCHES, QueryResult, query

console = Console()

NO_MATCH_MESSAGE = "一致するメモが見つかりませんでした。別の表現を試してください。"

DECISION_AXES: Tuple[str, ...] = (
    "時間軸: 6ヶ月後の自分が喜ぶ選択か",
    "資源: 使える時間・お金・集中力は十分か",
    "勢い: 今の好奇心が続くテーマか",
    "リスク: 最悪のケースを受け止められるか",
)

NEXT_STEPS: Tuple[str, ...] = (
    "24時間以内に小さく試せる行動を1つ決める",
    "関係者に相談するための要点を3行でまとめる",
    "1週間後に振り返るチェックポイントを作る",
)


def _interpretation(question: str) -> str:
    return (
        f"「{question}」は、価値観と現実のバランスをどう取るかが焦点です。"
        "過去メモからは、一歩踏み出す前に小さく試すことで迷いが減る傾向が見えます。"
    )


@dataclass(frozen=True)
class Answer:
    question: str
    results: List[QueryResult] = field(default_factory=list)
    interpretation: str = ""
    axes: Tuple[str, ...] = DECISION_AXES
    next_steps: Tuple[str, ...] = NEXT_STEPS

    @property
    def has_matches(self) -> bool:
        return bool(self.results)


def answer_question(
    question: str,
    corpus: Corpus,
    cfg: AppConfig | None = None,
) -> Answer:
    """
    Answer a question against an already loaded corpus.

    An Answer without results means nothing matched; that is not an error.
    """
    question = question.strip()
    if not question:
        raise EmptyQuestionError()

    limit = cfg.top_k if cfg is not None else MAX_MATCHES
    results = query(question, corpus, limit=limit)
    return Answer(
        question=question,
        results=results,
        interpretation=_interpretation(question),
    )


def _reference_card(result: QueryResult) -> Panel:
    note = result.note
    badges = Text()
    badges.append(note.date, style="bold cyan")
    for tag in note.tags:
        badges.append(f"  #{tag}", style="magenta")

    return Panel(
        Group(badges, Text(result.excerpt)),
        title=Text(note.title),
        subtitle=Text(f"score={result.score}"),
        expand=False,
    )


def render_answer(answer: Answer, out: Optional[Console] = None) -> None:
    if out is None:
        out = console

    if not answer.has_matches:
        out.print(f"[yellow]{NO_MATCH_MESSAGE}[/yellow]")
        return

    out.rule("[bold green]回答[/bold green]")
    out.print("[bold]今の状況の解釈[/bold]")
    out.print(answer.interpretation, markup=False)

    out.print("\n[bold]判断の軸（3〜5個）[/bold]")
    for axis in answer.axes:
        out.print(f"  • {axis}", markup=False)

    out.print("\n[bold]次の一手（すぐできる3つ）[/bold]")
    for step in answer.next_steps:
        out.print(f"  • {step}", markup=False)

    out.rule("[bold blue]参考にしたメモ[/bold blue]")
    for result in answer.results:
        out.print(_reference_card(result))


__all__ = ["Answer", "answer_question", "render_answer"]
