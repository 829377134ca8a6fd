"""
Lexer: turn tagged words into date, duration, operator and text tokens.

Words are read from the right. At every position the rules in
``LEXING_FUNCTIONS`` are tried in order with the current word and the words
before it (nearest first) as lookahead. The first rule returning tokens wins
and the words those tokens carry are consumed; the catch-all rule always
returns a text token, so the loop always makes progress.

Rules return their tokens rightmost first, the same order the lexer collects
them in; the collected list is reversed once at the end. An implicit
``add`` listed before a duration therefore ends up right after it, just as
the explicit operator in "3일 후" follows its duration.
"""

import logging
from typing import Callable, List, Optional, Sequence, Tuple

from ..units import DateUnit
from ..utils import TRACE
from .dictionary import (
    ARITHMETIC_OPERATORS,
    DAY_DURATION_KEYWORDS,
    OPERATOR_WORDS,
    ORDINAL,
    ORDINAL_10X,
    RELATIVE_DAY_REFERENCES,
    RELATIVE_MONTH_REFERENCES,
    RELATIVE_WEEK_REFERENCES,
    WEEK_ORDINAL,
    WEEKDAY_REFERENCES,
    am_pm_offset,
)
from .tokens import ADD, DateToken, DurationToken, Operator, TextToken, Token
from .words import END_OF_SENTENCE, Word

logger = logging.getLogger(__name__)

Lookaheads = Sequence[Word]
LexingFunction = Callable[[Word, Lookaheads], List[Token]]

TIME_UNIT_WORDS = ('시간', '시', '분', '초', '반')


# =============================================================================
# Helpers
# =============================================================================

def parse_number_or_ordinal(word: Optional[Word]) -> Optional[int]:
    """Read a digit word or a native Korean counting word (한, 두, ... 열)."""
    if word is None:
        return None
    if word.is_number:
        return int(word.text)
    if word.text and word.text in ORDINAL:
        return ORDINAL.index(word.text)
    return None


def am_pm_to_hour(hour: int, am_pm: Optional[str] = None) -> int:
    """
    Resolve a spoken hour to a 24-hour clock value.

    An explicit marker decides. Without one, 1 to 8 o'clock are read as
    afternoon hours since "3시" rarely means 3 AM. Hours already past noon
    are never shifted again, so "오후 12시" is noon.
    """
    offset = am_pm_offset(am_pm) if am_pm else None
    if offset is None:
        offset = 12 if 1 <= hour < 9 else 0
    if hour >= 12 and offset == 12:
        return hour
    return hour + offset


def _first(lookaheads: Lookaheads) -> Optional[Word]:
    return lookaheads[0] if lookaheads else None


def _second(lookaheads: Lookaheads) -> Optional[Word]:
    return lookaheads[1] if len(lookaheads) > 1 else None


def _is_am_pm(word: Optional[Word]) -> bool:
    return word is not None and am_pm_offset(word.text) is not None


# =============================================================================
# Rules
# =============================================================================

def try_accept_time(word: Word, lookaheads: Lookaheads) -> List[Token]:
    if word.text not in TIME_UNIT_WORDS or not lookaheads:
        return []

    prev_word = lookaheads[0]
    number = parse_number_or_ordinal(prev_word)

    if number is None:
        if prev_word.text == '시' and word.text == '반':
            # 8시 "반": only the half is taken here, 8시 is the next match
            return [ADD, DurationToken(30, DateUnit.MINUTE, (word,))]
        return []

    if word.text == '시간':
        tens_word = _second(lookaheads)
        if tens_word is not None and tens_word.text and tens_word.text in ORDINAL_10X:
            # e.g. 스물|네|시간
            hours = ORDINAL_10X.index(tens_word.text) * 10 + number
            return [DurationToken(hours, DateUnit.HOUR, (tens_word, prev_word, word))]
        return [DurationToken(number, DateUnit.HOUR, (prev_word, word))]

    if word.text == '시':
        if not 0 <= number < 24:
            return []
        marker = _second(lookaheads)
        if _is_am_pm(marker):
            return [DateToken(am_pm_to_hour(number, marker.text), DateUnit.HOUR, (marker, prev_word, word))]
        return [DateToken(am_pm_to_hour(number), DateUnit.HOUR, (prev_word, word))]

    if word.text == '분':
        return [ADD, DurationToken(number, DateUnit.MINUTE, (prev_word, word))]

    if word.text == '초':
        return [ADD, DurationToken(number, DateUnit.SECOND, (prev_word, word))]

    return []


def _is_num(words: Sequence[Word], index: int) -> bool:
    return index < len(words) and words[index].is_number


def _is_colon(words: Sequence[Word], index: int) -> bool:
    return index < len(words) and words[index].text == ':'


def _at(words: Sequence[Word], index: int) -> Optional[Word]:
    return words[index] if index < len(words) else None


def try_accept_compact_time(word: Word, lookaheads: Lookaheads) -> List[Token]:
    """
    Accept clock notation ending at ``word``: ``[marker] H[:MM[:SS]] [marker]``.

    Minute and second fields have two digits. A bare hour needs an AM/PM
    marker on either side ("오후 3", "3PM") and yields only the hour token.
    Every emitted token carries the whole matched span.
    """
    words = [word, *lookaheads]
    pos = 0
    if _is_am_pm(word):
        pos = 1

    if not _is_num(words, pos):
        return []
    fields = [words[pos]]
    pos += 1
    while (len(fields) < 3 and len(fields[-1].text) == 2
           and _is_colon(words, pos) and _is_num(words, pos + 1)):
        fields.append(words[pos + 1])
        pos += 2
    fields.reverse()

    before = words[pos] if _is_am_pm(_at(words, pos)) else None
    after = word if _is_am_pm(word) else None
    marker = before or after
    if len(fields) < 2 and marker is None:
        return []

    hour_word = fields[0]
    if len(hour_word.text) > 2:
        return []
    hour = int(hour_word.text)
    minute = int(fields[1].text) if len(fields) > 1 else None
    second = int(fields[2].text) if len(fields) > 2 else None
    if hour >= 24 or (minute is not None and minute >= 60) or (second is not None and second >= 60):
        return []

    if before is not None:
        pos += 1

    span = tuple(reversed(words[:pos]))
    tokens: List[Token] = []
    if second is not None:
        tokens.append(DateToken(second, DateUnit.SECOND, span))
    if minute is not None:
        tokens.append(DateToken(minute, DateUnit.MINUTE, span))
    tokens.append(DateToken(am_pm_to_hour(hour, marker.text if marker else None), DateUnit.HOUR, span))
    return tokens


def try_accept_day(word: Word, lookaheads: Lookaheads) -> List[Token]:
    if word.text in RELATIVE_DAY_REFERENCES:
        days = RELATIVE_DAY_REFERENCES[word.text]
        return [ADD, DurationToken(days, DateUnit.DAY, (word,))]
    if word.text in DAY_DURATION_KEYWORDS:
        return [DurationToken(DAY_DURATION_KEYWORDS[word.text], DateUnit.DAY, (word,))]

    prev_word = _first(lookaheads)
    day = parse_number_or_ordinal(prev_word)
    if word.text == '일' and day is not None and 1 <= day <= 31:
        return [DateToken(day, DateUnit.DAY, (prev_word, word))]
    return []


def try_accept_week(word: Word, lookaheads: Lookaheads) -> List[Token]:
    if word.text == '일주일':
        return [DurationToken(1, DateUnit.WEEK, (word,))]
    if word.text in RELATIVE_WEEK_REFERENCES:
        # e.g. 다음주
        offset = RELATIVE_WEEK_REFERENCES[word.text]
        return [ADD, DurationToken(offset, DateUnit.WEEK, (word,))]

    prev_word = _first(lookaheads)
    if prev_word is None or word.text != '주':
        return []
    if prev_word.text in WEEK_ORDINAL:
        # e.g. 셋째|주
        return [DateToken(WEEK_ORDINAL[prev_word.text], DateUnit.WEEK, (prev_word, word))]
    weeks = parse_number_or_ordinal(prev_word)
    if weeks is not None:
        return [DurationToken(weeks, DateUnit.WEEK, (prev_word, word))]
    return []


def try_accept_month(word: Word, lookaheads: Lookaheads) -> List[Token]:
    if word.text in RELATIVE_MONTH_REFERENCES:
        # e.g. 저번달
        offset = RELATIVE_MONTH_REFERENCES[word.text]
        return [ADD, DurationToken(offset, DateUnit.MONTH, (word,))]

    prev_word = _first(lookaheads)
    months = parse_number_or_ordinal(prev_word)
    if months is None:
        return []
    if word.text == '월' and 1 <= months <= 12:
        return [DateToken(months, DateUnit.MONTH, (prev_word, word))]
    if word.text == '달':
        return [DurationToken(months, DateUnit.MONTH, (prev_word, word))]
    return []


def try_accept_weekday(word: Word, lookaheads: Lookaheads) -> List[Token]:
    if word.text not in WEEKDAY_REFERENCES:
        return []
    return [DateToken(WEEKDAY_REFERENCES[word.text], DateUnit.WEEKDAY, (word,))]


def try_accept_year(word: Word, lookaheads: Lookaheads) -> List[Token]:
    prev_word = _first(lookaheads)
    if word.text != '년' or prev_word is None or not prev_word.is_number:
        return []
    year = int(prev_word.text)
    if not 1 <= year <= 9999:
        return []
    return [DateToken(year, DateUnit.YEAR, (prev_word, word))]


def try_accept_operator(word: Word, lookaheads: Lookaheads) -> List[Token]:
    for kind, operator_words in OPERATOR_WORDS.items():
        if word.text not in operator_words:
            continue
        operator = Operator(kind, (word,))
        if kind in ARITHMETIC_OPERATORS and lookaheads:
            maybe_date = try_accept_day(lookaheads[0], lookaheads[1:])
            if maybe_date and isinstance(maybe_date[0], DateToken):
                # e.g. 3일간 / 5일후: a number of days, not the 5th of the month
                date = maybe_date[0]
                return [operator, DurationToken(date.value, date.unit, date.words)]
        return [operator]
    return []


def must_be_plaintext(word: Word, lookaheads: Lookaheads) -> List[Token]:
    return [TextToken(word)]


LEXING_FUNCTIONS: Tuple[LexingFunction, ...] = (
    try_accept_time,
    try_accept_compact_time,
    try_accept_day,
    try_accept_week,
    try_accept_month,
    try_accept_weekday,
    try_accept_year,
    try_accept_operator,
    must_be_plaintext,
)


# =============================================================================
# Lexer
# =============================================================================

def _consumed(tokens: Sequence[Token]) -> int:
    return max(1, len({w for token in tokens for w in token.words}))


def lex(words: Sequence[Word]) -> List[Token]:
    """
    Extract date, duration and operator tokens from tagged words.

    The returned list is in text order and always ends with the
    end-of-sentence text token.
    """
    results: List[Token] = []
    i = len(words) - 1

    while i >= 0:
        word = words[i]
        lookaheads = words[i - 1::-1] if i > 0 else []
        tokens: List[Token] = []
        for rule in LEXING_FUNCTIONS:
            tokens = rule(word, lookaheads)
            if tokens:
                break
        results.extend(tokens)
        i -= _consumed(tokens)

    results.reverse()
    results.append(TextToken(END_OF_SENTENCE))
    logger.log(TRACE, "lexed %s", " ".join(token.pretty() for token in results))
    return results
