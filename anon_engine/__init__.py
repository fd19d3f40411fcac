from anon_engine.app import AnonEngineApp
from anon_engine.common.dto import ColumnMapper
from anon_engine.version import __version__
