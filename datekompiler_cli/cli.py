import argparse
import json
import logging
import sys
from datetime import datetime

from datekompiler import parse_date
from datekompiler.conf import SettingValidationError, settings
from datekompiler.formatting import format_date_interval
from datekompiler.utils import TRACE


def _parse_base(value):
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            '"{}" is not an ISO 8601 date and time'.format(value)
        )


def _as_json(parsed):
    data = parsed.as_dict()
    data["start_date"] = data["start_date"].isoformat()
    data["end_date"] = data["end_date"].isoformat()
    data["unit"] = data["unit"].value
    return json.dumps(data, ensure_ascii=False)


def entrance(argv=None):
    datekompiler_argparse = argparse.ArgumentParser(
        description="datekompiler: find the date mentioned in a text."
    )
    datekompiler_argparse.add_argument(
        "text",
        type=str,
        help='Text to parse, e.g. "내일 3시 회의"',
    )
    datekompiler_argparse.add_argument(
        "--base",
        type=_parse_base,
        help="ISO 8601 date and time relative expressions resolve against (default: now)",
    )
    datekompiler_argparse.add_argument(
        "--timezone",
        type=str,
        help='Zone the text refers to, e.g. "Asia/Seoul" or "local"',
    )
    datekompiler_argparse.add_argument(
        "--json",
        help="Print the result as JSON",
        action="store_true",
    )
    datekompiler_argparse.add_argument(
        "--trace",
        help="Log every lexer and parser step",
        action="store_true",
    )

    args = datekompiler_argparse.parse_args(argv)

    if args.trace:
        logging.basicConfig(level=TRACE, format="%(name)s %(message)s")

    try:
        parsed = parse_date(args.text, base=args.base, timezone=args.timezone)
    except SettingValidationError as e:
        datekompiler_argparse.error(str(e))

    if parsed is None:
        logging.info("datekompiler: no date found")
        return 1

    if args.json:
        print(_as_json(parsed))
    else:
        print(format_date_interval(parsed.start_date, parsed.end_date, args.timezone or settings.TIMEZONE))
        if parsed.subject:
            print(parsed.subject)
    return 0


if __name__ == "__main__":
    sys.exit(entrance())
