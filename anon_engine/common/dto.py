import json
import time
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, List, Any, Tuple

from anon_engine.common.enums import ResultCode, AnonMode, VerboseOptions


@dataclass
class RunOptions:
    anon_engine_version: str
    internal_operation_id: str
    run_dir: str
    debug: bool
    config: Optional[str]
    mode: AnonMode
    verbose: VerboseOptions
    seed: Optional[int]
    faker_locale: Optional[str]
    json: bool
    processor: Optional[str] = None
    values: Optional[List[str]] = None
    input_file: Optional[str] = None
    schema: str = ""
    table: str = ""
    column: str = ""
    parent_schema: str = ""
    parent_table: str = ""
    parent_column: str = ""

    def to_dict(self):
        return {
            k: v.value if isinstance(v, Enum) else v
            for k, v in asdict(self).items()
            if k != "values"  # sample values may hold sensitive data
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


class AnonEngineResult:
    result_code = ResultCode.UNKNOWN
    result_data = None
    start_time = None
    end_time = None
    _elapsed = None
    _exception = None
    _traceback = None

    def start(self):
        self.start_time = time.time()

    def fail(self, exception: Exception = None):
        from anon_engine.common.utils import exception_to_str

        self.end_time = time.time()
        self.result_code = ResultCode.FAIL
        self._exception = exception
        if exception is not None:
            self._traceback = exception_to_str(exception)

    def complete(self):
        self.end_time = time.time()
        self.result_code = ResultCode.DONE

    @property
    def elapsed(self):
        if not self._elapsed:
            if self.start_time is None or self.end_time is None:
                return None

            self._elapsed = round(self.end_time - self.start_time, 2)
        return self._elapsed

    @property
    def exception(self) -> Optional[Exception]:
        return self._exception

    @property
    def error_message(self) -> Optional[str]:
        return self._traceback


@dataclass(frozen=True)
class ColumnMapper:
    """
    Origin of a value: the owning schema/table/column and, for columns taking
    part in a key relationship, the parent column it is consistency-linked to.
    """
    schema: str = ""
    table: str = ""
    column: str = ""
    parent_schema: str = ""
    parent_table: str = ""
    parent_column: str = ""

    @property
    def is_mapped(self) -> bool:
        """Linked to a parent column only when all three parent parts are set"""
        return bool(self.parent_schema and self.parent_table and self.parent_column)

    @property
    def parent_scope(self) -> Tuple[str, str, str]:
        """
        Memoization scope of a linked column. Kept as a tuple, quoted
        identifiers may contain dots.
        """
        return self.parent_schema, self.parent_table, self.parent_column

    @property
    def parent_key(self) -> str:
        """Display form of the parent column, not unique"""
        return ".".join(self.parent_scope)

    @property
    def full_name(self) -> str:
        return f"{self.schema}.{self.table}.{self.column}"


@dataclass(frozen=True)
class CountryCode:
    code: str
    name: str


@dataclass
class PreviewRow:
    raw: Any
    anonymized: Optional[str] = None
    error: Optional[str] = None
