import logging
from datetime import datetime

from dateparser.search import search_dates

from .conf import apply_settings, check_settings
from .korean import parse_korean_text
from .korean.words import Word
from .timezone import from_wall_clock, get_timezone, to_wall_clock
from .units import DateUnit, duration_of, min_unit
from .utils import contains_korean, sanitize_spaces

logger = logging.getLogger(__name__)


class ParsedDates:
    """
    Class that represents the first date range found in a text.
    It can be accessed with square brackets like a dict object.
    """

    def __init__(self, *, start_date=None, end_date=None, unit=DateUnit.DAY,
                 subject="", date_text="", offset=0):
        self.start_date = start_date
        self.end_date = end_date
        self.unit = unit
        self.subject = subject
        self.date_text = date_text
        self.offset = offset

    def __getitem__(self, k):
        if not hasattr(self, k):
            raise KeyError(k)
        return getattr(self, k)

    def __setitem__(self, k, v):
        if not hasattr(self, k):
            raise KeyError(k)
        setattr(self, k, v)

    def as_dict(self):
        return dict(self.__dict__)

    def __repr__(self):
        properties_text = ", ".join(
            "{}={}".format(prop, val.__repr__()) for prop, val in self.__dict__.items()
        )

        return "{}({})".format(self.__class__.__name__, properties_text)


def _find_unit(date):
    if date.hour == 0 and date.minute == 0:
        return DateUnit.DAY
    return DateUnit.HOUR


def _default_end(start_date, unit):
    return start_date + duration_of(1, min_unit(unit, DateUnit.HOUR))


class DateTextParser:
    """
    Class which finds the dates mentioned in free text.

    Text with Korean in it goes through :func:`datekompiler.korean.parse_korean_text`,
    anything else through ``dateparser``'s search.

    :param timezone:
        Zone name the text is read in, e.g. ``'Asia/Seoul'``. Overrides the
        ``TIMEZONE`` setting.
    :type timezone: str

    :param settings:
        Configure customized behavior using settings defined in :mod:`datekompiler.conf.Settings`.
    :type settings: dict
    """

    @apply_settings
    def __init__(self, timezone=None, settings=None):
        if timezone is not None and not isinstance(timezone, str):
            raise TypeError("timezone argument must be str (%r given)" % type(timezone))

        if timezone is not None:
            check_settings({"TIMEZONE": timezone})

        self._settings = settings
        self.timezone_name = timezone or settings.TIMEZONE

    def get_date_data(self, text, base=None):
        """
        Find the first date range mentioned in ``text``.

        :param text:
            Free text, e.g. ``'내일 3시 회의'`` or ``'lunch tomorrow at noon'``.
        :type text: str
        :param base:
            Instant relative expressions resolve against, now by default.
            A naive value is read as wall-clock time in the parser's zone.
        :type base: datetime

        :return: a ``ParsedDates`` object, or ``None`` when no date was found.

            >>> DateTextParser().get_date_data('내일 3시 회의', datetime(2024, 1, 1, 9))
            ParsedDates(start_date=datetime.datetime(2024, 1, 2, 15, 0, tzinfo=tzfile('Asia/Seoul')), ...)
        """
        if not isinstance(text, str):
            raise TypeError("Input type must be str")

        zone = get_timezone(self.timezone_name)
        wall_base = to_wall_clock(base or datetime.now(zone), zone)

        try:
            if contains_korean(text):
                parsed = self._parse_korean(text, wall_base)
            else:
                parsed = self._parse_intl(text, wall_base)

            if parsed is not None and self._settings.RETURN_AS_TIMEZONE_AWARE:
                parsed["start_date"] = from_wall_clock(parsed["start_date"], zone)
                parsed["end_date"] = from_wall_clock(parsed["end_date"], zone)
        except OverflowError as e:
            # the range touches the edge of the calendar
            logger.debug(f"date in {text!r} is out of range: {e}")
            parsed = None

        if parsed is None:
            logger.debug(f"no date found in {text!r}")
        return parsed

    def _parse_korean(self, text, wall_base):
        result = parse_korean_text(text, wall_base, timezone=self.timezone_name)
        if not result.dates:
            return None

        start_date = result.dates[0]
        end_date = result.dates[1] if len(result.dates) > 1 else _default_end(start_date, result.unit)
        return ParsedDates(
            start_date=start_date,
            end_date=end_date,
            unit=result.unit,
            subject=result.subject,
            date_text=Word.span(text, result.date_text),
            offset=min(word.start for word in result.date_text) if result.date_text else 0,
        )

    def _parse_intl(self, text, wall_base):
        found = search_dates(
            text,
            languages=self._settings.LANGUAGES,
            settings={
                "RELATIVE_BASE": wall_base,
                "PREFER_DATES_FROM": self._settings.PREFER_DATES_FROM,
                "RETURN_AS_TIMEZONE_AWARE": False,
            },
        )
        if not found:
            return None

        matched, start_date = found[0]
        unit = _find_unit(start_date)
        return ParsedDates(
            start_date=start_date,
            end_date=_default_end(start_date, unit),
            unit=unit,
            subject=sanitize_spaces(text.replace(matched, "", 1)),
            date_text=matched,
            offset=max(text.find(matched), 0),
        )


_default_parser = DateTextParser()


@apply_settings
def parse_date(text, base=None, timezone=None, settings=None):
    """Find the first date range mentioned in free text.

    :param text:
        A string mentioning a date, in Korean or in a language ``dateparser`` reads.
    :type text: str

    :param base:
        Instant relative expressions such as "내일" resolve against. Defaults to now.
    :type base: datetime

    :param timezone:
        Zone name whose wall clock the text refers to. Defaults to the ``TIMEZONE`` setting.
    :type timezone: str

    :param settings:
        Configure customized behavior using settings defined in :mod:`datekompiler.conf.Settings`.
    :type settings: dict

    :return: Returns a ``ParsedDates`` object if a date was found, else returns None.
    :rtype: ParsedDates or None

    :raises:
        ``TypeError``: text must be str, ``SettingValidationError``: A provided setting
        or the timezone is not valid.

    Example usage::

        >>> import datekompiler
        >>> from datetime import datetime
        >>> parsed = datekompiler.parse_date("다음주 월요일까지 보고서 제출", datetime(2024, 1, 1, 9))
        >>> parsed.subject
        '보고서 제출'
    """
    parser = _default_parser

    if timezone or not settings._default:
        parser = DateTextParser(timezone=timezone, settings=settings)

    return parser.get_date_data(text, base)
