"""Command-line interface for the Chimiaguin lexer."""

from __future__ import annotations

import argparse
import io
import json
import logging
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from chimiaguin.debug import dump_tokens, tokens_to_json
from chimiaguin.lexer import Lexer, drop_whitespace
from chimiaguin.tokens import Token

logger = logging.getLogger(__name__)

CONFIG_NAME = "chimiaguin.toml"
FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path | None  # None reads stdin
    output_file: Path | None
    format: str
    skip_whitespace: bool
    strict: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="chimiaguin",
        description="Dump the token stream of a Chimiaguin source file",
    )
    p.add_argument("input", help="Input source file, or - for stdin")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Output format (default: text)",
    )
    p.add_argument(
        "--skip-whitespace",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Drop space and newline tokens from the output",
    )
    p.add_argument(
        "--strict",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Report lexical problems and fail on errors",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help=f"Config file (default: auto-discover {CONFIG_NAME})",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (repeatable)",
    )
    return p


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at a level chosen by -v count."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        return {}

    logger.info("loading config from %s", path)
    with open(path, "rb") as f:
        return tomllib.load(f)


def _config_bool(section: dict[str, Any], key: str, default: bool) -> bool:
    value = section.get(key, default)
    if not isinstance(value, bool):
        raise argparse.ArgumentTypeError(f"config key tokenize.{key} must be true or false")
    return value


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: defaults < config file < CLI flags.
    """
    if args.input == "-":
        input_file = None
        input_dir = Path(".")
    else:
        input_file = Path(args.input)
        input_dir = input_file.parent
        if not input_dir.parts:
            input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    section = config.get("tokenize")
    if not isinstance(section, dict):
        section = {}

    fmt = section.get("format", "text")
    if fmt not in FORMATS:
        raise argparse.ArgumentTypeError(
            f"invalid format in config (expected one of {', '.join(FORMATS)}): {fmt}"
        )
    if args.format is not None:
        fmt = args.format

    skip_whitespace = _config_bool(section, "skip_whitespace", False)
    if args.skip_whitespace is not None:
        skip_whitespace = args.skip_whitespace

    strict = _config_bool(section, "strict", False)
    if args.strict is not None:
        strict = args.strict

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        format=fmt,
        skip_whitespace=skip_whitespace,
        strict=strict,
    )


def render_tokens(tokens: list[Token], fmt: str) -> str:
    """Render a token list in the requested output format."""
    if fmt == "json":
        return json.dumps(tokens_to_json(tokens), indent=2, ensure_ascii=False) + "\n"
    buf = io.StringIO()
    dump_tokens(tokens, file=buf)
    return buf.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        options = resolve_options(args)
    except (argparse.ArgumentTypeError, tomllib.TOMLDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.input_file is None:
        filename = "<stdin>"
        source = sys.stdin.read()
    else:
        filename = str(options.input_file)
        try:
            source = options.input_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"error: cannot read {filename}: {exc}", file=sys.stderr)
            return 1

    lexer = Lexer(source, filename)
    tokens = list(lexer)
    logger.info("lexed %d tokens from %s", len(tokens), filename)
    if options.skip_whitespace:
        tokens = drop_whitespace(tokens)

    if options.strict:
        problems = lexer.errors
        for problem in problems:
            print(problem.format(), file=sys.stderr)
        if any(not p.warning for p in problems):
            return 1

    output = render_tokens(tokens, options.format)
    if options.output_file:
        options.output_file.write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    return 0
