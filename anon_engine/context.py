from pathlib import Path
from typing import Dict, Optional

from anon_engine.common.constants import LOGS_FILE_NAME, LOGS_DIR_NAME, DEFAULT_FAKER_LOCALE
from anon_engine.common.dto import RunOptions
from anon_engine.common.utils import read_yaml, resolve_seed
from anon_engine.logger import logger_start_run, get_logger
from anon_engine.processors.builtin import build_catalog
from anon_engine.processors.catalog import ProcessorCatalog, ProcessorEnv
from anon_engine.processors.consistency import ConsistencyStore
from anon_engine.processors.country_codes import load_country_codes
from anon_engine.processors.fake import FakeValueService
from anon_engine.processors.random_source import make_random_source


class Context:
    def __init__(self, options: RunOptions):
        self.options = options
        self.config: Dict = read_yaml(options.config) if options.config else {}
        self.logger = None
        self.catalog: Optional[ProcessorCatalog] = None
        self.setup_logger()

    @property
    def seed(self) -> Optional[int]:
        return resolve_seed(self.options.seed, self.config)

    @property
    def faker_locale(self) -> str:
        return self.options.faker_locale or self.config.get("faker-locale") or DEFAULT_FAKER_LOCALE

    def setup_logger(self):
        log_dir = Path(self.config.get("log-dir") or self.options.run_dir) / LOGS_DIR_NAME
        logger_start_run(
            log_dir=log_dir,
            log_file_name=LOGS_FILE_NAME,
            operation_id=self.options.internal_operation_id,
            verbose=self.options.verbose,
        )
        self.logger = get_logger()

    def init_processors(self) -> ProcessorCatalog:
        """
        Build the run environment: random source, consistency store, fake
        value service, country codes, and the processor catalog bound to them.
        A malformed country code dataset stops the run here.
        """
        country_codes = load_country_codes()
        rng = make_random_source(self.seed)
        self.logger.info(f"Random source seed: {rng.seed}")

        env = ProcessorEnv(
            rng=rng,
            store=ConsistencyStore(),
            fake=FakeValueService(rng, locale=self.faker_locale),
            country_codes=country_codes,
        )
        self.catalog = build_catalog(env)
        self.logger.debug(f"Registered processors: {len(self.catalog)}, country codes: {len(country_codes)}")
        return self.catalog
