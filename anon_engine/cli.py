import argparse
import sys
import uuid
from datetime import datetime
from typing import Optional, List

from anon_engine.app import AnonEngineApp
from anon_engine.common.constants import RUNS_BASE_DIR
from anon_engine.common.dto import AnonEngineResult, RunOptions
from anon_engine.common.enums import AnonMode, VerboseOptions, ResultCode
from anon_engine.logger import logger_close_file_handlers
from anon_engine.version import __version__


def common_parser():
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--config",
        help="""Path to configuration file of anon_engine in YAML""",
        type=str,
        default="",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="""Seed of the random source. Same seed, same input - same output. (default: config "seed", then ANON_ENGINE_SEED, then random)""",
    )
    parser.add_argument(
        "--faker-locale",
        type=str,
        default="",
        help="""Locale of generated fake values (default: config "faker-locale", then en_US)""",
    )
    parser.add_argument(
        "--version",
        help="""Show the version number and exit""",
        action="store_true",
    )
    parser.add_argument(
        "--verbose",
        dest="verbose",
        choices=list(v.value for v in VerboseOptions),
        default=VerboseOptions.INFO.value,
        help="""Sets the log verbosity level: "info", "debug", "error". (default: %(default)s)""",
    )
    parser.add_argument(
        "--debug",
        help="""Enables debug mode (equivalent to "--verbose=debug") and adds extra debug logs.""",
        action="store_true",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="""Outputs results in JSON format instead of a table.""",
    )
    return parser


def preview_parser():
    p = argparse.ArgumentParser(add_help=False)
    p.add_argument(
        "--processor",
        type=str,
        required=True,
        help="""Processor name, see "anon_engine processors".""",
    )
    p.add_argument(
        "--value",
        dest="values",
        action="append",
        help="""Value to anonymize. Can be repeated.""",
    )
    p.add_argument(
        "--input-file",
        type=str,
        default="",
        help="""File with values to anonymize, one value per line.""",
    )
    for name, help_text in [
        ("schema", "Schema of the column."),
        ("table", "Table of the column."),
        ("column", "Column name."),
        ("parent-schema", "Schema of the parent (referenced) column. Enables consistent remapping."),
        ("parent-table", "Table of the parent (referenced) column."),
        ("parent-column", "Parent (referenced) column name."),
    ]:
        p.add_argument(f"--{name}", type=str, default="", help=help_text)
    return p


def get_arg_parser():
    parser = argparse.ArgumentParser(
        prog="anon_engine",
        description="Consistent anonymization processors for database column values",
    )

    sub = parser.add_subparsers(dest="mode", help="Work mode", required=True)

    sub.add_parser(
        "processors",
        parents=[common_parser()],
        help="""Lists available processors.""",
    )
    sub.add_parser(
        "preview",
        parents=[common_parser(), preview_parser()],
        help="""Applies a processor to sample values and displays the result.""",
    )
    return parser


def build_run_options(cli_run_params: Optional[List[str]] = None) -> RunOptions:
    if cli_run_params is None:
        cli_run_params = sys.argv[1:]

    # Handle --version before subcommand parsing
    if "--version" in cli_run_params:
        print("Version %s" % __version__)
        sys.exit(0)

    parser = get_arg_parser()
    args_parsed = parser.parse_args(cli_run_params)
    args_dict = vars(args_parsed)
    # handled above, kept in the parser for --help
    args_dict.pop("version", None)

    if args_dict.get("debug") or args_dict.get("verbose") == VerboseOptions.DEBUG.value:
        args_dict["debug"] = True
        args_dict["verbose"] = VerboseOptions.DEBUG.value

    args_dict['verbose'] = VerboseOptions(args_dict['verbose'])

    internal_operation_id = str(uuid.uuid4())
    start_date = datetime.today()
    run_dir = str(
        RUNS_BASE_DIR /
        str(start_date.year) /
        str(start_date.month) /
        str(start_date.day) /
        internal_operation_id
    )

    args_dict.update({
        'anon_engine_version': __version__,
        'internal_operation_id': internal_operation_id,
        'run_dir': run_dir,
        'mode': AnonMode(args_dict['mode']),
    })
    return RunOptions(**args_dict)


def run_anon_engine(cli_run_params: Optional[List[str]] = None) -> AnonEngineResult:
    """
    Run anon_engine
    :param cli_run_params: list of params in command line format
    :return: result of anon_engine
    """
    options = build_run_options(cli_run_params)
    return AnonEngineApp(options).run()


def main(argv=None):
    try:
        result = run_anon_engine(argv)
    finally:
        logger_close_file_handlers()
    if result.result_code == ResultCode.FAIL:
        sys.exit(1)
