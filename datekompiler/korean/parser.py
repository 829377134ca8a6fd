"""
Parser: compose date and duration tokens into concrete dates.

The parser is an expectation-driven state machine. For every token,
``accept`` looks at the current ``ParserState`` and the next token and
returns a list of actions; ``reduce_action`` folds each action into a new
state. States are frozen and every action builds a fresh one, so each rule
can be exercised on its own.

Date evidence accumulates on a stack of date references. Pushing a
reference drops every reference of the same or a finer unit first: the
newest, more specific statement wins ("내일 3시 4시" is 4 PM tomorrow). The
``while`` operator (동안, 간) pushes without truncating so a day count can sit
on top of another day reference.

Producing a date folds the stack over the base date. Range-like phrases
("내일부터 모레까지") produce more than once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime
from functools import reduce
from typing import List, Optional, Sequence, Tuple, Union

from ..units import DateUnit
from ..utils import TRACE
from .dictionary import DATE_ADJ, TASK_IMPLICATION_WORDS
from .references import AbsoluteDateReference, DateReference, RelativeDateReference
from .tokens import DateLikeToken, DateToken, DurationToken, Operator, TextToken, Token
from .words import Word

_logger = logging.getLogger(__name__)

EXPECT_DATE = 'date'
EXPECT_DURATION = 'duration'
EXPECT_DATE_OR_DURATION = 'date-or-duration'
EXPECT_TEXT = 'text'

_DATE_EXPECTATIONS = (EXPECT_DATE, EXPECT_DURATION, EXPECT_DATE_OR_DURATION)


# =============================================================================
# State
# =============================================================================

@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing one text.

    ``type`` is ``'event'`` unless a due marker (까지) appeared before any
    date was produced. ``date_text`` holds the recognized words in the order
    they were first used, ``clues`` the weak hints seen on the way
    (``'due'``, ``'task'``).
    """
    unit: DateUnit = DateUnit.DAY
    type: str = 'event'
    date_text: Tuple[Word, ...] = ()
    dates: Tuple[datetime, ...] = ()
    clues: Tuple[str, ...] = ()
    subject: str = ''


@dataclass(frozen=True)
class ParserState:
    base_date: datetime
    original_text: str = ''
    expectation: str = EXPECT_TEXT
    stack: Tuple[DateReference, ...] = ()
    # provenance tokens, one tuple per stack entry
    date_stack: Tuple[Tuple[Token, ...], ...] = ()
    context: Tuple[Token, ...] = ()
    date_context: Tuple[Token, ...] = ()
    result: ParseResult = field(default_factory=ParseResult)


def token_matches_expectation(token: Token, expectation: str) -> bool:
    if expectation == EXPECT_DATE:
        return isinstance(token, DateToken)
    if expectation == EXPECT_DURATION:
        return isinstance(token, DurationToken)
    if expectation == EXPECT_DATE_OR_DURATION:
        return isinstance(token, DateLikeToken)
    return isinstance(token, TextToken)


# =============================================================================
# Actions
# =============================================================================

@dataclass(frozen=True)
class Expect:
    expect: str


@dataclass(frozen=True)
class Accept:
    token: Token


@dataclass(frozen=True)
class Push:
    date: DateReference
    no_truncate: bool = False


@dataclass(frozen=True)
class PushAdditionalDateWord:
    token: Token


@dataclass(frozen=True)
class ProduceDate:
    pass


@dataclass(frozen=True)
class ProduceClue:
    clue: str
    word: Optional[Word] = None


ParserAction = Union[Expect, Accept, Push, PushAdditionalDateWord, ProduceDate, ProduceClue]


# =============================================================================
# Transition rules
# =============================================================================

def _accept_absolute_date(token: Union[DateToken, DurationToken]) -> List[ParserAction]:
    return [
        Expect(EXPECT_DATE),
        Accept(token),
        Push(AbsoluteDateReference(token.value, token.unit)),
    ]


def accept(state: ParserState, token: Token, next_token: Optional[Token] = None) -> List[ParserAction]:
    """Decide which actions ``token`` triggers in ``state``."""
    if isinstance(token, DateToken):
        return _accept_absolute_date(token)

    actions: List[ParserAction] = []

    if isinstance(token, TextToken) and token.word.text in TASK_IMPLICATION_WORDS:
        actions.append(ProduceClue('task', token.word))
    if isinstance(token, Operator) and token.kind == 'due':
        actions.append(ProduceClue('due', token.words[0] if token.words else None))

    if isinstance(token, TextToken) and token.is_end_of_sentence:
        if not state.result.dates:
            actions.append(ProduceDate())
        return actions

    if token_matches_expectation(token, state.expectation):
        actions.append(Accept(token))
        return actions

    # the token starts something new
    if isinstance(token, DurationToken):
        followed_by_arithmetic = isinstance(next_token, Operator) and next_token.is_arithmetic
        if token.unit is DateUnit.DAY and not followed_by_arithmetic:
            # a bare "3일" is the 3rd, "3일 후" is handled by the operator
            actions.extend(_accept_absolute_date(token))
            return actions
        actions.append(Expect(EXPECT_DURATION))
        actions.append(Accept(token))
        return actions

    if state.expectation in _DATE_EXPECTATIONS and isinstance(token, Operator):
        actions.append(Expect(EXPECT_DATE))
        if token.kind in ('starting', 'due'):
            actions.append(ProduceDate())
            return actions
        actions.append(PushAdditionalDateWord(token))

        mode = 'subtract' if token.kind == 'subtract' else 'add'
        for context_token in state.context:
            if isinstance(context_token, DateLikeToken):
                reference = RelativeDateReference(mode, context_token.value, context_token.unit)
                actions.append(Push(reference, no_truncate=token.kind == 'while'))
        if token.kind == 'while':
            actions.append(ProduceDate())
            return actions

    if state.expectation == EXPECT_DATE:
        if isinstance(token, TextToken):
            actions.append(Expect(EXPECT_TEXT))
            actions.append(Accept(token))
        else:
            # most likely a particle or an operator between two date parts
            actions.append(Expect(EXPECT_DATE if isinstance(next_token, DateToken) else EXPECT_TEXT))
    return actions


def _push(state: ParserState, action: Push) -> ParserState:
    if action.no_truncate:
        kept = range(len(state.stack))
    else:
        unit = action.date.unit.normalize()
        kept = [i for i, ref in enumerate(state.stack) if ref.unit.normalize() < unit]
    stack = tuple(state.stack[i] for i in kept) + (action.date,)
    date_stack = tuple(state.date_stack[i] for i in kept) + (state.date_context,)
    return replace(
        state,
        context=(),
        date_context=(),
        stack=stack,
        date_stack=date_stack,
        result=replace(state.result, unit=action.date.unit.normalize()),
    )


def _produce_date(state: ParserState) -> ParserState:
    date_words = [word for tokens in state.date_stack for token in tokens for word in token.words]
    if not date_words:
        return state

    try:
        merged = reduce(lambda date, reference: reference.apply(date), state.stack, state.base_date)
    except (OverflowError, ValueError) as e:
        # e.g. "99999달 후" lands outside the calendar
        _logger.debug(f"date out of range, nothing produced: {e}")
        return state
    return replace(
        state,
        context=(),
        date_context=(),
        result=replace(
            state.result,
            date_text=tuple(dict.fromkeys(state.result.date_text + tuple(date_words))),
            dates=state.result.dates + (merged,),
        ),
    )


def _produce_clue(state: ParserState, action: ProduceClue) -> ParserState:
    result = state.result
    clues = result.clues if action.clue in result.clues else result.clues + (action.clue,)
    inferred_type = 'due' if action.clue == 'due' and not result.dates else result.type
    return replace(state, result=replace(result, type=inferred_type, clues=clues))


def reduce_action(state: ParserState, action: ParserAction) -> ParserState:
    """Apply one action to ``state`` and return the new state."""
    if isinstance(action, Expect):
        return replace(
            state,
            expectation=action.expect,
            context=state.context if state.expectation == action.expect else (),
        )
    if isinstance(action, Accept):
        is_date_like = isinstance(action.token, DateLikeToken)
        return replace(
            state,
            context=state.context + (action.token,),
            date_context=state.date_context + ((action.token,) if is_date_like else ()),
        )
    if isinstance(action, Push):
        return _push(state, action)
    if isinstance(action, PushAdditionalDateWord):
        if not action.token.words:
            return state
        return replace(state, date_context=state.date_context + (action.token,))
    if isinstance(action, ProduceDate):
        return _produce_date(state)
    if isinstance(action, ProduceClue):
        return _produce_clue(state, action)
    raise TypeError("Unknown parser action: %r" % (action,))


def transition(state: ParserState, token: Token, next_token: Optional[Token] = None,
               logger: Optional[logging.Logger] = None) -> ParserState:
    """Consume one token: ``(state, token, next_token) -> state``."""
    logger = logger or _logger
    actions = accept(state, token, next_token)
    for action in actions:
        logger.log(TRACE, "  - %r", action)
    return reduce(reduce_action, actions, state)


# =============================================================================
# Entry points
# =============================================================================

def produce_subject(text: str, date_text: Sequence[Word]) -> str:
    """Cut the recognized date text and a leading particle out of ``text``."""
    if not date_text:
        return text.strip()
    subject = text.replace(Word.span(text, date_text), '', 1)
    for adjunct in DATE_ADJ:
        if subject.startswith(adjunct):
            subject = subject[len(adjunct):]
            break
    return subject.strip()


def parse(text: str, tokens: Sequence[Token], base_date: datetime,
          logger: Optional[logging.Logger] = None) -> ParseResult:
    """
    Run the parser over ``tokens`` lexed from ``text``.

    Args:
        text: The original text, used to cut out the subject.
        tokens: Tokens from :func:`datekompiler.korean.lexer.lex`, ending
            with the end-of-sentence token.
        base_date: Naive wall-clock datetime relative expressions resolve against.
        logger: Receives TRACE records for every token and action.

    Returns:
        ParseResult with the produced dates and the subject.
    """
    logger = logger or _logger
    state = ParserState(base_date=base_date, original_text=text)
    logger.log(TRACE, "parser actions history for %r (base %s)", text, base_date)

    for i, token in enumerate(tokens):
        next_token = tokens[i + 1] if i + 1 < len(tokens) else None
        logger.log(TRACE, "%d. %s", i, token.pretty())
        state = transition(state, token, next_token, logger=logger)

    for date in state.result.dates:
        logger.log(TRACE, "produced %s", date)
    return replace(state.result, subject=produce_subject(state.original_text, state.result.date_text))
