from anon_engine.processors.builtin import DEFAULT_PROCESSORS, build_catalog
from anon_engine.processors.catalog import ProcessorCatalog, ProcessorEnv, ProcessorSpec
from anon_engine.processors.consistency import ConsistencyStore
from anon_engine.processors.country_codes import load_country_codes
from anon_engine.processors.fake import FakeValueService
from anon_engine.processors.random_source import RandomSource, make_random_source
