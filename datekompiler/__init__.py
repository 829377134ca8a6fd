__version__ = "0.3.0"

from .conf import apply_settings
from .date import DateTextParser, ParsedDates, parse_date
from .korean import ParseResult, parse_korean_text
from .units import DateUnit
