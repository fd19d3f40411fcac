from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from anon_engine.common.dto import ColumnMapper, CountryCode
from anon_engine.common.enums import ProcessorKind
from anon_engine.common.errors import ProcessorNotFoundError
from anon_engine.processors.consistency import ConsistencyStore
from anon_engine.processors.fake import FakeValueService
from anon_engine.processors.random_source import RandomSource


@dataclass
class ProcessorEnv:
    """Run-scoped dependencies handed to every processor call."""
    rng: RandomSource
    store: ConsistencyStore
    fake: FakeValueService
    country_codes: List[CountryCode]


ProcessorFunc = Callable[[ProcessorEnv, ColumnMapper, str], str]


@dataclass(frozen=True)
class ProcessorSpec:
    name: str
    kind: ProcessorKind
    func: ProcessorFunc
    description: str = ""


class ProcessorCatalog:
    """
    Name -> processor registry bound to one run environment.

    Lookup of an unknown name raises :class:`ProcessorNotFoundError`, which is
    kept apart from the :class:`ProcessorError` a processor raises for a bad
    value.
    """

    def __init__(self, env: ProcessorEnv, specs: Optional[Iterable[ProcessorSpec]] = None):
        self.env = env
        self._specs: Dict[str, ProcessorSpec] = {}
        for spec in specs or []:
            self.register(spec)

    def register(self, spec: ProcessorSpec, replace: bool = False):
        if spec.name in self._specs and not replace:
            raise ValueError(f"Processor already registered: {spec.name}")
        self._specs[spec.name] = spec

    def get(self, name: str) -> ProcessorSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise ProcessorNotFoundError(name) from None

    def invoke(self, name: str, column: ColumnMapper, value: str) -> str:
        return self.get(name).func(self.env, column, value)

    def names(self) -> List[str]:
        return sorted(self._specs)

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    def __iter__(self) -> Iterator[ProcessorSpec]:
        for name in self.names():
            yield self._specs[name]

    def __len__(self) -> int:
        return len(self._specs)
