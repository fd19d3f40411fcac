import io
import json
import logging
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from typing import List, Tuple
from unittest import mock

from anon_engine import AnonEngineApp
from anon_engine.cli import build_run_options, main
from anon_engine.common.constants import SEED_ENV_VAR, LOGS_DIR_NAME, LOGS_FILE_NAME
from anon_engine.common.dto import RunOptions, AnonEngineResult
from anon_engine.common.enums import AnonMode, ResultCode, VerboseOptions
from anon_engine.common.errors import CountryCodesLoadError, ProcessorNotFoundError
from anon_engine.context import Context
from anon_engine.logger import logger_close_file_handlers, get_logger


def json_lines(output: str) -> List:
    # log records may share the stream, they never start with a bracket
    return [json.loads(line) for line in output.splitlines() if line.startswith("[")]


class BasicCliTest:
    def setUp(self):
        self._tmp_dir = tempfile.TemporaryDirectory()
        self.tmp_dir = Path(self._tmp_dir.name)

    def tearDown(self):
        logger_close_file_handlers()
        self._tmp_dir.cleanup()

    def make_options(self, argv: List[str]) -> RunOptions:
        options = build_run_options(argv)
        options.run_dir = str(self.tmp_dir / "run")
        return options

    def run_app(self, argv: List[str]) -> Tuple[AnonEngineResult, str]:
        options = self.make_options(argv)
        output = io.StringIO()
        with redirect_stdout(output):
            result = AnonEngineApp(options).run()
        return result, output.getvalue()


class BuildRunOptionsUnitTest(BasicCliTest, unittest.TestCase):
    def test_processors_mode(self):
        options = build_run_options(["processors"])
        self.assertEqual(options.mode, AnonMode.PROCESSORS)
        self.assertEqual(options.verbose, VerboseOptions.INFO)
        self.assertFalse(options.debug)
        self.assertIsNone(options.seed)
        self.assertTrue(options.run_dir.endswith(options.internal_operation_id))

    def test_preview_mode(self):
        options = build_run_options([
            "preview", "--processor", "AlphaNumericScrambler",
            "--value", "ABC-1a2bC", "--value", "XYZ-9",
            "--parent-schema", "public", "--parent-table", "users", "--parent-column", "ssn",
            "--seed", "42", "--debug",
        ])
        self.assertEqual(options.mode, AnonMode.PREVIEW)
        self.assertEqual(options.processor, "AlphaNumericScrambler")
        self.assertEqual(options.values, ["ABC-1a2bC", "XYZ-9"])
        self.assertEqual(options.parent_table, "users")
        self.assertEqual(options.seed, 42)
        self.assertTrue(options.debug)
        self.assertEqual(options.verbose, VerboseOptions.DEBUG)

    def test_sample_values_not_serialized(self):
        options = build_run_options(["preview", "--processor", "Identity", "--value", "secret"])
        self.assertNotIn("secret", options.to_json())
        self.assertEqual(options.to_dict()["mode"], "preview")

    def test_preview_requires_processor(self):
        with redirect_stdout(io.StringIO()), mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                build_run_options(["preview", "--value", "abc"])

    def test_unknown_mode(self):
        with mock.patch("sys.stderr", io.StringIO()):
            with self.assertRaises(SystemExit):
                build_run_options(["dump"])

    def test_version(self):
        output = io.StringIO()
        with redirect_stdout(output):
            with self.assertRaises(SystemExit) as ctx:
                build_run_options(["--version"])
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("Version", output.getvalue())

    def test_version_flag_not_in_run_options(self):
        options = build_run_options(["processors"])
        self.assertNotIn("version", options.to_dict())
        self.assertIn("anon_engine_version", options.to_dict())


class ContextUnitTest(BasicCliTest, unittest.TestCase):
    def write_config(self, content: str) -> str:
        config_path = self.tmp_dir / "config.yml"
        config_path.write_text(content)
        return str(config_path)

    def test_seed_from_config(self):
        options = self.make_options(["processors", "--config", self.write_config("seed: 7\nfaker-locale: en_GB\n")])
        context = Context(options)
        self.assertEqual(context.seed, 7)
        self.assertEqual(context.faker_locale, "en_GB")

    def test_cli_overrides_config(self):
        config = self.write_config("seed: 7\nfaker-locale: en_GB\n")
        options = self.make_options(["processors", "--config", config, "--seed", "8", "--faker-locale", "de_DE"])
        context = Context(options)
        self.assertEqual(context.seed, 8)
        self.assertEqual(context.faker_locale, "de_DE")

    def test_seed_from_environment(self):
        with mock.patch.dict(os.environ, {SEED_ENV_VAR: "42"}):
            context = Context(self.make_options(["processors"]))
            self.assertEqual(context.seed, 42)

    def test_no_seed(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            context = Context(self.make_options(["processors"]))
            self.assertIsNone(context.seed)
            self.assertEqual(context.faker_locale, "en_US")
            context.init_processors()
            self.assertIsInstance(context.catalog.env.rng.seed, int)

    def test_config_must_be_yaml(self):
        config_path = self.tmp_dir / "config.json"
        config_path.write_text("{}")
        with self.assertRaises(ValueError):
            Context(self.make_options(["processors", "--config", str(config_path)]))

    def test_log_file_in_run_dir(self):
        Context(self.make_options(["processors"]))
        self.assertTrue((self.tmp_dir / "run" / "logs").is_dir())

    def test_shared_log_dir_lines_carry_operation_id(self):
        log_dir = self.tmp_dir / "shared"
        config = self.write_config(f'log-dir: "{log_dir}"\n')
        runs = [self.make_options(["processors", "--config", config]) for _ in range(2)]
        for options in runs:
            Context(options).logger.info("run marker")
        logger_close_file_handlers()

        log_file = log_dir / LOGS_DIR_NAME / LOGS_FILE_NAME
        lines = [line for line in log_file.read_text().splitlines() if "run marker" in line]
        self.assertEqual(len(lines), 2)
        for line, options in zip(lines, runs):
            self.assertIn(f"[{options.internal_operation_id}]", line)

    def test_verbose_sets_log_level(self):
        Context(self.make_options(["processors", "--verbose", "error"]))
        self.assertEqual(get_logger().level, logging.ERROR)

        Context(self.make_options(["processors", "--debug"]))
        self.assertEqual(get_logger().level, logging.DEBUG)

        Context(self.make_options(["processors"]))
        self.assertEqual(get_logger().level, logging.INFO)


class ProcessorsModeUnitTest(BasicCliTest, unittest.TestCase):
    def test_list_json(self):
        result, output = self.run_app(["processors", "--json"])
        self.assertEqual(result.result_code, ResultCode.DONE)
        self.assertEqual(len(result.result_data), 23)

        listed = json_lines(output)[-1]
        names = {row["name"] for row in listed}
        self.assertIn("AlphaNumericScrambler", names)
        self.assertIn("RandomCountryCode", names)

    def test_list_table(self):
        result, output = self.run_app(["processors"])
        self.assertEqual(result.result_code, ResultCode.DONE)
        self.assertIn("IBANScrambler", output)
        self.assertIn("consistent", output)


class PreviewModeUnitTest(BasicCliTest, unittest.TestCase):
    scoped = ["--parent-schema", "public", "--parent-table", "users", "--parent-column", "ssn"]

    def test_consistent_values_in_one_run(self):
        result, _ = self.run_app([
            "preview", "--processor", "AlphaNumericScrambler", "--seed", "1",
            "--value", "ABC-1a2bC", "--value", "XYZ", "--value", "ABC-1a2bC",
            *self.scoped,
        ])
        self.assertEqual(result.result_code, ResultCode.DONE)
        rows = result.result_data
        self.assertEqual(len(rows), 3)
        self.assertEqual(rows[0].anonymized, rows[2].anonymized)
        self.assertEqual(rows[0].anonymized[3], "-")

    def test_same_seed_same_output(self):
        argv = ["preview", "--processor", "RandomUUID", "--seed", "5", "--json",
                "--value", "a0eebc99-9c0b-4ef8-bb6d-6bb9bd380a11"]
        first, first_output = self.run_app(argv)
        second, second_output = self.run_app(argv)
        self.assertEqual(first.result_data[0].anonymized, second.result_data[0].anonymized)
        self.assertEqual(json_lines(first_output)[-1], json_lines(second_output)[-1])

    def test_value_errors_do_not_fail_run(self):
        result, output = self.run_app([
            "preview", "--processor", "RandomDate", "--seed", "3",
            "--value", "2020-08-28", "--value", "2020/08/28",
        ])
        self.assertEqual(result.result_code, ResultCode.DONE)
        good, bad = result.result_data
        self.assertTrue(good.anonymized.startswith("2020-"))
        self.assertIsNone(good.error)
        self.assertIsNone(bad.anonymized)
        self.assertIn("DateFormatError", bad.error)
        self.assertIn("DateFormatError", output)

    def test_input_file(self):
        input_file = self.tmp_dir / "values.txt"
        input_file.write_text("héllo\nsecret\n", encoding="utf-8")
        result, _ = self.run_app(["preview", "--processor", "ScrubString", "--input-file", str(input_file)])
        self.assertEqual(result.result_code, ResultCode.DONE)
        self.assertEqual([row.anonymized for row in result.result_data], ["*****", "******"])

    def test_unknown_processor_fails(self):
        result, _ = self.run_app(["preview", "--processor", "NoSuchProcessor", "--value", "x"])
        self.assertEqual(result.result_code, ResultCode.FAIL)
        self.assertIsInstance(result.exception, ProcessorNotFoundError)
        self.assertIn("NoSuchProcessor", result.error_message)

    def test_no_values_fails(self):
        result, _ = self.run_app(["preview", "--processor", "Identity"])
        self.assertEqual(result.result_code, ResultCode.FAIL)
        self.assertIsInstance(result.exception, ValueError)

    def test_broken_country_codes_fail_run(self):
        with mock.patch(
            "anon_engine.context.load_country_codes",
            side_effect=CountryCodesLoadError("Failed to parse list of country codes"),
        ):
            result, _ = self.run_app(["processors"])
        self.assertEqual(result.result_code, ResultCode.FAIL)
        self.assertIsInstance(result.exception, CountryCodesLoadError)
        self.assertIsNotNone(result.elapsed)


class MainUnitTest(BasicCliTest, unittest.TestCase):
    def test_main_exit_codes(self):
        with mock.patch("anon_engine.cli.RUNS_BASE_DIR", self.tmp_dir / "runs"), redirect_stdout(io.StringIO()):
            main(["processors"])

            with self.assertRaises(SystemExit) as ctx:
                main(["preview", "--processor", "NoSuchProcessor", "--value", "x"])
        self.assertEqual(ctx.exception.code, 1)


if __name__ == "__main__":
    unittest.main(exit=False)
