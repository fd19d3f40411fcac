from anon_engine.common.dto import AnonEngineResult, RunOptions
from anon_engine.common.enums import AnonMode
from anon_engine.common.utils import exception_helper
from anon_engine.context import Context
from anon_engine.modes.list_processors import ListProcessorsMode
from anon_engine.modes.preview import PreviewMode
from anon_engine.version import __version__


class AnonEngineApp:

    def __init__(self, options: RunOptions):
        self.context = Context(options)
        self.result = AnonEngineResult()

    def _bootstrap(self):
        self.context.logger.info(
            "============> Started anon_engine (v%s) in mode: %s"
            % (__version__, self.context.options.mode.value)
        )
        if self.context.options.debug:
            params_info = "#--------------- Run options\n"
            params_info += self.context.options.to_json()
            params_info += "\n#-----------------------------------"
            self.context.logger.debug(params_info)

    def _get_mode(self):
        if self.context.options.mode == AnonMode.PROCESSORS:
            return ListProcessorsMode(self.context)

        if self.context.options.mode == AnonMode.PREVIEW:
            return PreviewMode(self.context)

        raise RuntimeError("Unknown mode: " + self.context.options.mode.value)

    def run(self) -> AnonEngineResult:
        self._bootstrap()
        self.result.start()
        try:
            self.context.init_processors()

            mode = self._get_mode()
            self.result.result_data = mode.run()
            self.result.complete()
        except Exception as exc:
            self.context.logger.error(exception_helper(show_traceback=True))
            self.result.fail(exc)

        self.context.logger.info(
            f"<============ Finished anon_engine in mode: {self.context.options.mode.value}, "
            f"result_code = {self.result.result_code.value}, "
            f"elapsed: {self.result.elapsed} sec"
        )
        return self.result
