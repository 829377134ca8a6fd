"""
Korean lexicon used by the tagger and the lexer.

All tables are read-only. ``KOREAN_KNOWN_WORDS`` keeps a fixed declared
order: the tagger takes the first phrase of that order that starts at a
given position, so a phrase listed earlier wins over a later one.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Tuple


def _frozen(table: Dict[str, int]) -> Mapping[str, int]:
    return MappingProxyType(table)


# =============================================================================
# Days
# =============================================================================

RELATIVE_DAY_REFERENCES = _frozen({
    '오늘': 0,
    '금일': 0,
    '내일': +1,
    '익일': +1,
    '낼': +1,
    '다음날': +1,
    '담날': +1,
    '모레': +2,
    '다다음날': +2,
    '어제': -1,
    '어저께': -1,
    '작일': -1,
    '그제': -2,
})

DAY_DURATION_KEYWORDS = _frozen({
    '하루': 1,
    '이틀': 2,
    '사흘': 3,
    '나흘': 4,
    '닷새': 5,
    '엿새': 6,
    '이레': 7,
    '여드레': 8,
    '아흐레': 9,
    '열흘': 10,
    '보름': 15,
})


# =============================================================================
# Time of day
# =============================================================================

# Offset added to a bare hour. '밤' and '점심' are known words but carry no offset.
AM_PM_REFERENCES = _frozen({
    '낮': 12,
    '새벽': 0,
    '아침': 0,
    '저녁': 12,
    '오전': 0,
    '오후': 12,
    '이른': 0,
    '늦은': 12,
    'AM': 0,
    'PM': 12,
})


def am_pm_offset(text: str):
    """Offset of an AM/PM marker, matching latin markers case-insensitively."""
    if text in AM_PM_REFERENCES:
        return AM_PM_REFERENCES[text]
    return AM_PM_REFERENCES.get(text.upper()) if text.isascii() else None


# =============================================================================
# Weeks and months
# =============================================================================

_RELATIVE_KEYWORDS = (
    ('다다다음', +3),
    ('다다음', +2),
    ('다담', +2),
    ('다음', +1),
    ('담', +1),
    ('이번', 0),
    ('저번', -1),
    ('지난', -1),
    ('저저번', -2),
    ('지지난', -2),
    ('저저저번', -3),
    ('지지지난', -3),
)

RELATIVE_WEEK_REFERENCES = _frozen(dict(
    [(prefix + '주', offset) for prefix, offset in _RELATIVE_KEYWORDS]
    + [('금주', 0), ('차주', +1)]
))

RELATIVE_MONTH_REFERENCES = _frozen(dict(
    (prefix + '달', offset) for prefix, offset in _RELATIVE_KEYWORDS
))

# ISO weekday numbers, Monday is 1.
WEEKDAY_REFERENCES = _frozen({
    '월요일': 1,
    '월욜': 1,
    '(월)': 1,
    '화요일': 2,
    '화욜': 2,
    '(화)': 2,
    '수요일': 3,
    '수욜': 3,
    '(수)': 3,
    '목요일': 4,
    '목욜': 4,
    '(목)': 4,
    '금요일': 5,
    '금욜': 5,
    '(금)': 5,
    '토요일': 6,
    '토욜': 6,
    '(토)': 6,
    '일요일': 7,
    '일욜': 7,
    '(일)': 7,
})


# =============================================================================
# Numerals
# =============================================================================

# Native Korean counting words, indexed by their value.
ORDINAL: Tuple[str, ...] = ('', '한', '두', '세', '네', '다섯', '여섯', '일곱', '여덟', '아홉', '열')
ORDINAL_10X: Tuple[str, ...] = ('', '열', '스물', '서른', '마흔', '쉰', '예순', '일흔', '여든', '아흔', '백')

WEEK_ORDINAL = _frozen({
    '첫째': 1,
    '둘째': 2,
    '셋째': 3,
    '넷째': 4,
    '다섯째': 5,
})


# =============================================================================
# Operators and clue words
# =============================================================================

OPERATOR_WORDS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    'add': ('후', '뒤', '뒤에'),
    'subtract': ('전',),
    'while': ('동안', '간'),
    'starting': ('부터',),
    'due': ('까지',),
})

ARITHMETIC_OPERATORS = frozenset(('add', 'subtract', 'while'))

# Words that make a to-do item more likely than an event.
TASK_IMPLICATION_WORDS: Tuple[str, ...] = ('하기',)
DUE_IMPLICATION_WORDS: Tuple[str, ...] = ('까지',)
EVENT_IMPLICATION_WORDS: Tuple[str, ...] = ('부터',)
REPEAT_IMPLICATION_WORDS: Tuple[str, ...] = ('매주', '매월', '매일', '마다')

# Particles left over at the head of the subject once the date text is cut out.
# Longer particles come first so '에서' is not stripped as '에'.
DATE_ADJ: Tuple[str, ...] = ('에서', '에', '부터', '까지')

_UNIT_WORDS = (
    '일주일', '오전', '오후', '밤', '낮', '새벽', '아침', '점심', '저녁',
    '시간', '시', '분', '초', '주', '달', '년', '월', '일', '반', '요일',
)

KOREAN_KNOWN_WORDS: Tuple[str, ...] = tuple(
    word
    for word in (
        *RELATIVE_DAY_REFERENCES,
        *AM_PM_REFERENCES,
        *WEEKDAY_REFERENCES,
        *DAY_DURATION_KEYWORDS,
        *(word for words in OPERATOR_WORDS.values() for word in words),
        *RELATIVE_WEEK_REFERENCES,
        *RELATIVE_MONTH_REFERENCES,
        *TASK_IMPLICATION_WORDS,
        *DUE_IMPLICATION_WORDS,
        *EVENT_IMPLICATION_WORDS,
        *REPEAT_IMPLICATION_WORDS,
        *ORDINAL,
        *ORDINAL_10X,
        *WEEK_ORDINAL,
        *_UNIT_WORDS,
    )
    if len(word) >= 1
)
