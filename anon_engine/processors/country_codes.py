import json
from pathlib import Path
from typing import List, Union

from anon_engine.common.constants import COUNTRY_CODES_FILE
from anon_engine.common.dto import CountryCode
from anon_engine.common.errors import CountryCodesLoadError


def parse_country_codes(data: str) -> List[CountryCode]:
    """
    Parse the country-code dataset: a JSON list of {"code": ..., "name": ...}
    :param data: JSON text
    :return: ordered list of country codes
    """
    try:
        items = json.loads(data)
    except ValueError as exc:
        raise CountryCodesLoadError(f"Failed to parse list of country codes: {exc}") from exc

    if not isinstance(items, list) or not items:
        raise CountryCodesLoadError("Failed to parse list of country codes: expected a non-empty list")

    result = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise CountryCodesLoadError(f"Failed to parse list of country codes: item #{index} is not an object")

        code = item.get("code")
        name = item.get("name")
        if not isinstance(code, str) or not code or not isinstance(name, str):
            raise CountryCodesLoadError(f"Failed to parse list of country codes: item #{index} is malformed")

        result.append(CountryCode(code=code, name=name))

    return result


def load_country_codes(file_path: Union[str, Path] = COUNTRY_CODES_FILE) -> List[CountryCode]:
    try:
        with open(file_path, "r", encoding="utf-8") as codes_file:
            data = codes_file.read()
    except OSError as exc:
        raise CountryCodesLoadError(f"Failed to read list of country codes: {exc}") from exc

    return parse_country_codes(data)
