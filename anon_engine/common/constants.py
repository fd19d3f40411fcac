from pathlib import Path

LOWERCASE_SET = "abcdefghijklmnopqrstuvwxyz"
UPPERCASE_SET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
NUMERIC_SET = "0123456789"

IBAN_PREFIX_LENGTH = 2
SCRUB_CHAR = "*"
DATE_SEPARATOR = "-"
MIN_YEAR = 1
MAX_YEAR = 9999

DEFAULT_FAKER_LOCALE = "en_US"
SEED_ENV_VAR = "ANON_ENGINE_SEED"

PACKAGE_DIR = Path(__file__).resolve().parent.parent
COUNTRY_CODES_FILE = PACKAGE_DIR / "dict" / "country_codes.json"

RUNS_BASE_DIR = Path("runs")
LOGS_DIR_NAME = "logs"
LOGS_FILE_NAME = "anon_engine.log"

TRACEBACK_LINES_COUNT = 100
