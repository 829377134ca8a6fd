"""
Tokens produced by the lexer.

The token set is closed: ``Token`` is the union of the four dataclasses
below and every consumer branches on the concrete class.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from ..units import DateUnit
from .dictionary import ARITHMETIC_OPERATORS
from .words import END_OF_SENTENCE, Word


@dataclass(frozen=True)
class DateToken:
    """An absolute calendar value, e.g. "day 3" or "hour 15"."""
    value: int
    unit: DateUnit
    words: Tuple[Word, ...] = ()

    def pretty(self) -> str:
        return "[%s → %d]" % (self.unit.value, self.value)


@dataclass(frozen=True)
class DurationToken:
    """A relative magnitude, e.g. "3 days"."""
    value: int
    unit: DateUnit
    words: Tuple[Word, ...] = ()

    def pretty(self) -> str:
        return "[%s + %d]" % (self.unit.value, self.value)


_OPERATOR_SYMBOLS = {
    'add': '+',
    'subtract': '-',
    'starting': '↦',
    'due': '⌚',
    'while': '~',
}


@dataclass(frozen=True)
class Operator:
    kind: str
    words: Tuple[Word, ...] = ()

    @property
    def is_arithmetic(self) -> bool:
        return self.kind in ARITHMETIC_OPERATORS

    def pretty(self) -> str:
        symbol = _OPERATOR_SYMBOLS.get(self.kind, self.kind)
        return "[%s]" % "".join([symbol] + [" " + w.text for w in self.words])


@dataclass(frozen=True)
class TextToken:
    word: Word

    @property
    def words(self) -> Tuple[Word, ...]:
        return (self.word,)

    @property
    def is_end_of_sentence(self) -> bool:
        return self.word is END_OF_SENTENCE

    def pretty(self) -> str:
        return self.word.text


Token = Union[DateToken, DurationToken, Operator, TextToken]
DateLikeToken = (DateToken, DurationToken)

# Implicit operator emitted by the lexer for words such as '내일' or '30분'.
ADD = Operator('add')
