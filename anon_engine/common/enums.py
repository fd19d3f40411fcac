from enum import Enum


class ResultCode(Enum):
    DONE = "done"
    FAIL = "fail"
    UNKNOWN = "unknown"


class VerboseOptions(Enum):
    INFO = "info"
    DEBUG = "debug"
    ERROR = "error"


class AnonMode(Enum):
    PROCESSORS = "processors"  # list registered processors
    PREVIEW = "preview"  # apply one processor to sample values


class ProcessorKind(Enum):
    IDENTITY = "identity"  # value is returned unchanged
    FAKE = "fake"  # fresh plausible value, input is ignored
    CONSISTENT = "consistent"  # memoized in the consistency store
    STRUCTURAL = "structural"  # depends on input shape only
