"""
Compiler for Korean free-text date expressions.

Text goes through four stages: the tagger splits it into words, the lexer
turns words into tokens, the parser composes tokens into date references and
folds them over a base date.
"""

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..timezone import from_wall_clock, get_timezone, to_wall_clock
from .lexer import lex
from .parser import ParseResult, parse
from .tagger import tag
from .words import Word

__all__ = ["ParseResult", "Word", "lex", "parse", "parse_korean_text", "tag"]

_logger = logging.getLogger(__name__)


def parse_korean_text(text: str, base: Optional[datetime] = None, timezone: str = "UTC",
                      logger: Optional[logging.Logger] = None) -> ParseResult:
    """
    Find the dates mentioned in Korean ``text``.

    Args:
        text: Free text such as ``"내일 3시 회의"``.
        base: The instant relative expressions resolve against; now by
            default. A naive value is read as wall-clock time in ``timezone``.
        timezone: Zone whose wall clock "내일" and "3시" refer to.
        logger: Receives TRACE records of every lexer and parser step.

    Returns:
        ParseResult. Its dates are aware in ``timezone`` unless ``base`` was
        naive, in which case they are naive wall-clock values too.

    Examples:
        >>> parse_korean_text("내일 3시 회의", datetime(2024, 1, 1, 9)).dates
        (datetime.datetime(2024, 1, 2, 15, 0),)
    """
    logger = logger or _logger
    zone = get_timezone(timezone)
    if base is None:
        base = datetime.now(zone)

    wall_base = to_wall_clock(base, zone)
    words = tag(text)
    tokens = lex(words)
    result = parse(text, tokens, wall_base, logger=logger)

    logger.debug(f"found {len(result.dates)} date(s) in {text!r}")
    if base.tzinfo is None:
        return result
    try:
        dates = tuple(from_wall_clock(date, zone) for date in result.dates)
    except OverflowError as e:
        logger.debug(f"dates of {text!r} do not fit in {zone}: {e}")
        return replace(result, dates=())
    return replace(result, dates=dates)
