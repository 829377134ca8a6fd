from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class WordType(Enum):
    WORD = "word"
    NUM = "num"
    ETC = "etc"


@dataclass(frozen=True)
class Word:
    """
    A run of characters of the original text.

    ``start`` and ``end`` are offsets into the original text, so
    ``text[word.start:word.end] == word.text`` always holds for words
    produced by the tagger.
    """
    text: str
    type: WordType = WordType.WORD
    start: int = 0
    end: int = field(default=-1)

    def __post_init__(self):
        if self.end < 0:
            object.__setattr__(self, "end", self.start + len(self.text))

    @property
    def is_number(self) -> bool:
        return self.type is WordType.NUM

    def is_one_of(self, texts: Iterable[str]) -> bool:
        return self.text in texts

    @staticmethod
    def span(full_text: str, words: Iterable[Word]) -> str:
        """Slice ``full_text`` over every word, whatever order ``words`` come in."""
        words = list(words)
        if not words:
            return ""
        first = min(words, key=lambda word: word.start)
        last = max(words, key=lambda word: word.end)
        return full_text[first.start:last.end]

    def __str__(self) -> str:
        return ("<N>" if self.is_number else "") + self.text


END_OF_SENTENCE = Word("<eos>")
