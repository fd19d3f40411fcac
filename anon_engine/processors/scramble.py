import calendar

from anon_engine.common.constants import LOWERCASE_SET, UPPERCASE_SET, NUMERIC_SET, SCRUB_CHAR
from anon_engine.processors.random_source import RandomSource


def scramble_string(rng: RandomSource, value: str) -> str:
    """
    Replace every ASCII lowercase letter with a random lowercase letter, every
    uppercase letter with a random uppercase letter and every digit with a
    random digit. Anything else is kept as is, so the length never changes.

    Example: "ABC-1a2bC" -> "PUI-7x9vY"
    """
    result = []
    for char in value:
        if 'a' <= char <= 'z':
            result.append(rng.choice(LOWERCASE_SET))
        elif 'A' <= char <= 'Z':
            result.append(rng.choice(UPPERCASE_SET))
        elif '0' <= char <= '9':
            result.append(rng.choice(NUMERIC_SET))
        else:
            result.append(char)
    return "".join(result)


def scrub_string(value: str) -> str:
    # one mask char per code point, not per encoded byte
    return SCRUB_CHAR * len(value)


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def randomize_date(rng: RandomSource, year: int) -> str:
    """
    Random day and month of the given year, leap years included
    :param rng: shared random source
    :param year: year to keep, 1..9999
    :return: date in YYYY-MM-DD form
    """
    month = rng.randint(1, 12)
    day = rng.randint(1, last_day_of_month(year, month))
    return f"{year:04d}-{month:02d}-{day:02d}"
