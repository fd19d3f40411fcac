import logging
import sys
from pathlib import Path

from concurrent_log_handler import ConcurrentRotatingFileHandler

from anon_engine.common.enums import VerboseOptions

LOGGER_NAME = "anon_engine.logger"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
CONSOLE_LOG_FORMAT = "%(asctime)s,%(msecs)03d - %(levelname)8s - %(message)s"
# a log-dir from config may be shared by several runs
FILE_LOG_FORMAT = "%(asctime)s,%(msecs)03d - %(levelname)8s - [%(operation_id)s] %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUP_COUNT = 10

VERBOSE_LOG_LEVELS = {
    VerboseOptions.INFO: logging.INFO,
    VerboseOptions.DEBUG: logging.DEBUG,
    VerboseOptions.ERROR: logging.ERROR,
}


class OperationIdFilter(logging.Filter):
    """Stamps records with the id of the run that wrote them"""

    def __init__(self, operation_id: str):
        super().__init__()
        self.operation_id = operation_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.operation_id = self.operation_id
        return True


class Logger:
    """
    Process-wide logger of the engine. Console output is set up once; every
    run attaches its own rotating file handler and drops the previous one.
    """
    _instance = None

    logger: logging.Logger = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.logger = cls._create_logger()
        return cls._instance

    @staticmethod
    def _create_logger() -> logging.Logger:
        logger = logging.getLogger(LOGGER_NAME)
        logger.setLevel(logging.INFO)
        # records may carry column names, keep them out of the root handlers
        logger.propagate = False

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(fmt=CONSOLE_LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        logger.addHandler(console_handler)
        return logger

    def close_run_handlers(self):
        for handler in list(self.logger.handlers):
            if isinstance(handler, logging.FileHandler):
                self.logger.removeHandler(handler)
                handler.close()

    def start_run(self, log_dir: Path, log_file_name: str, operation_id: str, verbose: VerboseOptions):
        self.close_run_handlers()

        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = ConcurrentRotatingFileHandler(
            str(log_dir / log_file_name),
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUP_COUNT,
        )
        file_handler.addFilter(OperationIdFilter(operation_id))
        file_handler.setFormatter(logging.Formatter(fmt=FILE_LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        self.logger.addHandler(file_handler)

        self.logger.setLevel(VERBOSE_LOG_LEVELS.get(verbose, logging.INFO))


def get_logger() -> logging.Logger:
    return Logger().logger


def logger_start_run(log_dir: Path, log_file_name: str, operation_id: str, verbose: VerboseOptions):
    Logger().start_run(
        log_dir=log_dir,
        log_file_name=log_file_name,
        operation_id=operation_id,
        verbose=verbose,
    )


def logger_close_file_handlers():
    Logger().close_run_handlers()
