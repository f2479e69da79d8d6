"""CLI entry point: config file ingestion, argument parsing and subcommand dispatch."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Sequence

from logview import __version__
from logview.config import ConfigError, ConfigLine, LoadResult, LoadStatus, load_config
from logview.formats import resolve_log_format

LOG_LEVEL_ENV = "LOGVIEW_LOG_LEVEL"

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: str | None = None) -> None:
    """
    Configure the package logger: level from --verbose/--quiet or LOGVIEW_LOG_LEVEL,
    console handler on stderr, optional file handler from --debug-file.
    """
    if verbose:
        level_name = "DEBUG"
    elif quiet:
        level_name = "ERROR"
    else:
        level_name = (os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    root = logging.getLogger("logview")
    root.setLevel(level)
    if not root.handlers:
        fmt = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(fmt)
        root.addHandler(console)
        if log_file:
            try:
                fh = logging.FileHandler(log_file, encoding="utf-8")
                fh.setFormatter(fmt)
                root.addHandler(fh)
            except OSError:
                pass


def _add_global_flags(parser: argparse.ArgumentParser, default: object = None) -> None:
    """Flags that decide which config file is read and how much is logged."""
    parser.add_argument("-p", "--config-file", metavar="PATH", default=default, help="Custom configuration file.")
    glob = parser.add_mutually_exclusive_group()
    glob.add_argument(
        "--load-global-config",
        dest="load_global",
        action="store_const",
        const=True,
        default=default,
        help="Read the global config (<sysconfdir>/logview.conf). Default.",
    )
    glob.add_argument(
        "--no-global-config",
        dest="load_global",
        action="store_const",
        const=False,
        default=default,
        help="Read ~/.logviewrc instead of the global config.",
    )
    log_grp = parser.add_mutually_exclusive_group()
    log_grp.add_argument("-v", "--verbose", action="store_const", const=True, default=default, help="Verbose (DEBUG) output.")
    log_grp.add_argument("-q", "--quiet", action="store_const", const=True, default=default, help="Quiet (errors only).")


def _log_options() -> argparse.ArgumentParser:
    """Options that may come from the command line or the config file."""
    opts = argparse.ArgumentParser(add_help=False)
    # SUPPRESS keeps subparser defaults from overwriting values given before the subcommand
    _add_global_flags(opts, default=argparse.SUPPRESS)
    opts.add_argument("--log-format", help="Log format: preset name (COMBINED, W3C, ...) or format string.")
    opts.add_argument("--date-format", help="Date format (strftime style) for the log-format.")
    opts.add_argument("--time-format", help="Time format (strftime style) for the log-format.")
    opts.add_argument("--log-file", action="append", default=None, help="Path to an access log (repeatable).")
    opts.add_argument(
        "--color-scheme",
        nargs="?",
        const="1",
        default=None,
        help="Color scheme (1 monochrome, 2 green).",
    )
    opts.add_argument("--no-color", action="store_true", help="Disable colored output.")
    opts.add_argument("--html-report-title", help="Title for the HTML report.")
    opts.add_argument("--debug-file", metavar="PATH", help="Also write log messages to PATH.")
    opts.add_argument("--real-os", action="store_true", help="Display real OS names.")
    opts.add_argument("--ignore-crawlers", action="store_true", help="Ignore crawlers.")
    return opts


def prescan(argv: Sequence[str]) -> argparse.Namespace:
    """
    Read only the flags that select the config file (and logging) from the raw
    command line, ignoring everything else.
    """
    pre = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    _add_global_flags(pre)
    pre.add_argument("--debug-file", default=None)
    args, _ = pre.parse_known_args(list(argv))
    if args.load_global is None:
        args.load_global = True
    return args


def parser_argv(result: LoadResult, argv: Sequence[str]) -> list[str]:
    """
    Arguments for the option parser: the command line, then the config-file options.

    A config value starting with "-" is joined to its option as --key=value so the
    parser cannot take it for another flag.
    """
    folded = list(argv[1:])
    for entry in result.lines:
        folded.extend(_file_tokens(entry))
    return folded


def _file_tokens(entry: ConfigLine) -> list[str]:
    tokens = entry.to_args()
    if len(tokens) == 2 and tokens[1].startswith("-"):
        return [f"{tokens[0]}={tokens[1]}"]
    return tokens


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logview",
        description="Web access-log analyzer: configuration and log-format presets.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    _add_global_flags(parser)

    log_options = _log_options()
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

    p_show = subparsers.add_parser(
        "show",
        help="Show the config file used, the effective arguments and resolved options.",
        parents=[log_options],
    )
    p_show.set_defaults(run="show")

    p_formats = subparsers.add_parser(
        "formats",
        help="List log-format presets with their format and date strings.",
        parents=[log_options],
    )
    p_formats.add_argument("--json", dest="as_json", action="store_true", help="Output JSON.")
    p_formats.set_defaults(run="formats")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    raw_argv = list(sys.argv if argv is None else argv)
    pre = prescan(raw_argv[1:])
    setup_logging(verbose=bool(pre.verbose), quiet=bool(pre.quiet), log_file=pre.debug_file)

    try:
        result = load_config(raw_argv, config_file=pre.config_file, load_global=pre.load_global)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    if result.status is LoadStatus.NOT_FOUND:
        logger.debug("No config file loaded; using command-line arguments only")

    parser = build_parser()
    args, unknown = parser.parse_known_args(parser_argv(result, raw_argv))
    if unknown:
        logger.warning("Ignoring unrecognized arguments: %s", " ".join(unknown))

    args.config_path = result.path
    args.config_status = result.status
    args.effective_argv = result.argv
    args.date_format_resolved = args.date_format
    if args.log_format:
        args.log_format, preset_date = resolve_log_format(args.log_format)
        if args.date_format_resolved is None:
            args.date_format_resolved = preset_date

    run = getattr(args, "run", None)
    if run == "show":
        from logview.commands.show import run as cmd_run
    elif run == "formats":
        from logview.commands.formats import run as cmd_run
    else:
        parser.print_help()
        sys.exit(0)

    cmd_run(args)
