from __future__ import annotations


class AskMyNotesError(Exception):
    """Base class for errors shown to the user as-is."""


class NoteLoadError(AskMyNotesError):
    """The note manifest or a note file could not be loaded."""


class EmptyQuestionError(AskMyNotesError):
    def __init__(self, message: str = "相談内容を入力してください。") -> None:
        super().__init__(message)


__all__ = ["AskMyNotesError", "NoteLoadError", "EmptyQuestionError"]
