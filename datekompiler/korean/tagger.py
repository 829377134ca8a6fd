"""
Tagger: split raw Korean text into words.

Characters are classified as digits (NUM), spaces (ETC) or anything else
(WORD) and grouped into runs of the same class. A known lexicon phrase
starting at the current position always wins over the run in progress: the
run is cut before the phrase and the phrase becomes a word of its own.

Known phrases are tried in the declared order of ``KOREAN_KNOWN_WORDS`` and
the first one that matches is taken, even if a longer phrase listed later
would also match at the same position.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .dictionary import KOREAN_KNOWN_WORDS
from .words import Word, WordType


@dataclass
class _Run:
    type: WordType
    text: str
    start: int


def _char_type(char: str) -> WordType:
    if "0" <= char <= "9":
        return WordType.NUM
    if char == " ":
        return WordType.ETC
    return WordType.WORD


def _flush(run: _Run, words: List[Word]) -> None:
    if run.type is not WordType.ETC and run.text:
        words.append(Word(run.text, run.type, run.start))


def _known_word_at(text: str, index: int, known_words: Sequence[str]) -> Optional[str]:
    for known_word in known_words:
        if text.startswith(known_word, index):
            return known_word
    return None


def tag(text: str, known_words: Sequence[str] = KOREAN_KNOWN_WORDS) -> List[Word]:
    """
    Split ``text`` into words, dropping spaces.

    Examples:
        tag("이번주 7시")        # [이번주, <N>7, 시]
        tag("박진서는 천하제일")  # [박진서는, 천하제, 일]
    """
    words: List[Word] = []
    run = _Run(WordType.ETC, "", 0)

    i = 0
    while i < len(text):
        char_type = _char_type(text[i])
        if not run.text:
            run = _Run(char_type, "", i)
        elif run.type is not char_type:
            _flush(run, words)
            run = _Run(char_type, "", i)

        known_word = _known_word_at(text, i, known_words)
        if known_word is not None:
            _flush(run, words)
            words.append(Word(known_word, WordType.WORD, i))
            i += len(known_word)
            run = _Run(WordType.ETC, "", i)
            continue

        run.text += text[i]
        i += 1

    _flush(run, words)
    return words
