import os
import sys
import traceback
from pathlib import Path
from typing import List, Optional, Dict, Union

import yaml

from anon_engine.common.constants import TRACEBACK_LINES_COUNT, SEED_ENV_VAR


def exception_helper(show_traceback=True):
    exc_type, exc_value, exc_traceback = sys.exc_info()
    return "\n".join(
        [
            v
            for v in traceback.format_exception(
                exc_type, exc_value, exc_traceback if show_traceback else None
            )
        ]
    )


def exception_to_str(exc: Exception, limit: int = TRACEBACK_LINES_COUNT) -> str:
    tb_exc = traceback.TracebackException.from_exception(exc)
    lines = list(tb_exc.format())
    return "".join(lines[-limit:])


def read_yaml(file_path: Union[str, Path]) -> Dict:
    path = Path(file_path)
    if path.suffix not in ('.yml', '.yaml'):
        raise ValueError("File must be .yml or .yaml")

    with open(path.absolute(), "r") as file:
        data = yaml.safe_load(file)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError(f"Received non-mapping structure from file: {path}")

    return data


def read_lines(file_path: Union[str, Path]) -> List[str]:
    with open(file_path, "r", encoding="utf-8") as file:
        return [line.rstrip("\r\n") for line in file]


def parse_seed(value) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"Seed must be an integer, got: {value!r}")


def resolve_seed(cli_seed: Optional[int], config: Optional[Dict]) -> Optional[int]:
    """
    Seed precedence: command line, then config file, then environment
    :return: explicit seed or None when the run should draw one from entropy
    """
    if cli_seed is not None:
        return cli_seed

    if config and config.get("seed") is not None:
        return parse_seed(config["seed"])

    return parse_seed(os.environ.get(SEED_ENV_VAR))

