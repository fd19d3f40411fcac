import re
import uuid
from functools import partial
from typing import List, Optional

from anon_engine.common.constants import DATE_SEPARATOR, IBAN_PREFIX_LENGTH, MIN_YEAR, MAX_YEAR
from anon_engine.common.dto import ColumnMapper
from anon_engine.common.enums import ProcessorKind
from anon_engine.common.errors import DateFormatError, YearParseError, YearRangeError, IBANFormatError
from anon_engine.logger import get_logger
from anon_engine.processors.catalog import ProcessorEnv, ProcessorSpec, ProcessorCatalog
from anon_engine.processors.scramble import scramble_string, scrub_string, randomize_date

logger = get_logger()

YEAR_PATTERN = re.compile(r"[+-]?[0-9]+")
_UUID_HEX = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
# hyphenated, braced, urn:uuid: prefixed or 32 bare hex digits
UUID_PATTERN = re.compile(rf"{_UUID_HEX}|\{{{_UUID_HEX}\}}|urn:uuid:{_UUID_HEX}|[0-9a-f]{{32}}", re.IGNORECASE)


def identity(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    return value


def empty_json(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    return "{}"


def fake_value(category: str, env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    return env.fake.generate(category)


def random_digits(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    return env.fake.digits(len(value))


def random_boolean(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    return "TRUE" if env.rng.randrange(2) == 0 else "FALSE"


def random_country_code(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    return env.rng.choice(env.country_codes).code


def alphanumeric_scrambler(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    """
    Scramble letters and digits, keeping everything else. Values of columns
    linked to a parent column (PK/FK) are memoized per parent, so the same raw
    value always maps to the same output within that relationship.

    Example: "PUI-7x9vY" = alphanumeric_scrambler(env, column, "ABC-1a2bC")
    """
    if not column.is_mapped:
        return scramble_string(env.rng, value)

    return env.store.remap_alphanumeric(
        column.parent_scope,
        value,
        lambda raw: scramble_string(env.rng, raw),
    )


def iban_scrambler(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    if len(value) < IBAN_PREFIX_LENGTH:
        raise IBANFormatError(f"IBAN must have at least {IBAN_PREFIX_LENGTH} characters, got {len(value)}")

    return env.store.remap_iban(
        value,
        lambda raw: raw[:IBAN_PREFIX_LENGTH] + scramble_string(env.rng, raw[IBAN_PREFIX_LENGTH:]),
    )


def random_uuid(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    """
    Replace a UUID with a random one. Every occurrence of the same input UUID,
    in any table, gets the same replacement.

    An input that is not a UUID gives an empty string and no error.
    """
    if not isinstance(value, str) or not UUID_PATTERN.fullmatch(value):
        logger.warning("RandomUUID: unparseable UUID in column %s, replaced with empty string", column.full_name)
        return ""

    # uuid.UUID only strips a lower-case urn prefix
    input_id = uuid.UUID(value.lower())
    return str(env.store.remap_uuid(input_id, lambda raw: env.rng.uuid4()))


def parse_year(value: str) -> int:
    # ISO 8601 / SQL standard: 2018-08-28
    date_split = value.split(DATE_SEPARATOR)
    if len(date_split) != 3:
        raise DateFormatError(f"Date format is not ISO-8601: expected 3 '{DATE_SEPARATOR}' separated parts, got {len(date_split)}")

    if not YEAR_PATTERN.fullmatch(date_split[0]):
        raise YearParseError("Unable to parse year from date")

    year = int(date_split[0])
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise YearRangeError(f"Year {year} is out of range {MIN_YEAR}..{MAX_YEAR}")

    return year


def random_date(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    # only day and month are scrambled, the year is kept (HIPAA)
    return randomize_date(env.rng, parse_year(value))


def scrub(env: ProcessorEnv, column: ColumnMapper, value: str) -> str:
    return scrub_string(value)


def _fake(name: str, category: str, description: str) -> ProcessorSpec:
    return ProcessorSpec(name, ProcessorKind.FAKE, partial(fake_value, category), description)


DEFAULT_PROCESSORS: List[ProcessorSpec] = [
    ProcessorSpec("Identity", ProcessorKind.IDENTITY, identity, "Keeps the value unchanged"),
    ProcessorSpec("AlphaNumericScrambler", ProcessorKind.CONSISTENT, alphanumeric_scrambler,
                  "Scrambles letters and digits, consistent per parent column"),
    ProcessorSpec("RandomUUID", ProcessorKind.CONSISTENT, random_uuid, "Random UUID, consistent across the run"),
    ProcessorSpec("IBANScrambler", ProcessorKind.CONSISTENT, iban_scrambler,
                  "Keeps the country prefix, scrambles the rest, consistent across the run"),
    ProcessorSpec("RandomDate", ProcessorKind.STRUCTURAL, random_date, "Random day and month, keeps the year"),
    ProcessorSpec("ScrubString", ProcessorKind.STRUCTURAL, scrub, "Replaces every character with '*'"),
    ProcessorSpec("EmptyJson", ProcessorKind.FAKE, empty_json, "Empty JSON object"),
    ProcessorSpec("RandomBoolean", ProcessorKind.FAKE, random_boolean, "TRUE or FALSE"),
    ProcessorSpec("RandomDigits", ProcessorKind.FAKE, random_digits, "Random digits, same length as the value"),
    ProcessorSpec("RandomCountryCode", ProcessorKind.FAKE, random_country_code, "Random ISO country code"),
    _fake("FakeStreetAddress", "street_address", "Fake street address"),
    _fake("FakeCity", "city", "Fake city name"),
    _fake("FakeCompanyName", "company", "Fake company name"),
    _fake("FakeEmailAddress", "email", "Fake e-mail address"),
    _fake("FakeFirstName", "first_name", "Fake first name"),
    _fake("FakeFullName", "full_name", "Fake full name"),
    _fake("FakeIPv4", "ipv4", "Fake IPv4 address"),
    _fake("FakeLastName", "last_name", "Fake last name"),
    _fake("FakePhoneNumber", "phone_number", "Fake phone number"),
    _fake("FakeState", "state", "Fake state name"),
    _fake("FakeStateAbbrev", "state_abbr", "Fake state abbreviation"),
    _fake("FakeUsername", "user_name", "Fake user name"),
    _fake("FakeZip", "zip", "Fake zip code"),
]


def build_catalog(env: ProcessorEnv, extra: Optional[List[ProcessorSpec]] = None) -> ProcessorCatalog:
    catalog = ProcessorCatalog(env, DEFAULT_PROCESSORS)
    for spec in extra or []:
        catalog.register(spec)
    return catalog
