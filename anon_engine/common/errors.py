class ProcessorError(ValueError):
    """
    Recoverable failure of a single value. The row driver decides whether to
    skip the value, fail the row or fail the batch.
    """


class DateFormatError(ProcessorError):
    pass


class YearParseError(ProcessorError):
    pass


class YearRangeError(ProcessorError):
    pass


class IBANFormatError(ProcessorError):
    pass


class FakeValueError(ProcessorError):
    pass


class ProcessorNotFoundError(LookupError):
    def __init__(self, name: str):
        super().__init__(f"Processor not found: {name!r}")
        self.name = name


class CountryCodesLoadError(RuntimeError):
    pass
