"""Command-line interface: dump or check the token stream of a config file."""

from __future__ import annotations

import argparse
import io
import json
import sys
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from curlylex.errors import LexError

FORMATS = ("text", "json")


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_format: str
    keep_comments: bool
    check: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="curlylex",
        description="Tokenize a brace-delimited configuration file",
    )
    p.add_argument("input", help="Input configuration file")
    p.add_argument(
        "--format",
        choices=FORMATS,
        default=None,
        help="Token output format (default: text)",
    )
    p.add_argument(
        "--no-comments",
        action="store_true",
        help="Drop block comments from the token stream",
    )
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover curlylex.toml)",
    )
    p.add_argument(
        "--check",
        action="store_true",
        help="Only report lexical errors, print no tokens",
    )
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "curlylex.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path, input_dir)
    except tomllib.TOMLDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid config file: {exc}") from exc

    # Comments: config < CLI
    keep_comments = True
    cfg_lexer = config.get("lexer")
    if isinstance(cfg_lexer, dict):
        cfg_keep = cfg_lexer.get("keep_comments")
        if isinstance(cfg_keep, bool):
            keep_comments = cfg_keep
    if args.no_comments:
        keep_comments = False

    # Output format: config < CLI
    output_format = "text"
    cfg_output = config.get("output")
    if isinstance(cfg_output, dict):
        cfg_format = cfg_output.get("format")
        if cfg_format is not None:
            if cfg_format not in FORMATS:
                raise argparse.ArgumentTypeError(
                    f"invalid output format in config: {cfg_format!r}"
                )
            output_format = cfg_format
    if args.format is not None:
        output_format = args.format

    return CliOptions(
        input_file=input_file,
        output_format=output_format,
        keep_comments=keep_comments,
        check=args.check,
    )


def render_tokens(options: CliOptions) -> str:
    """Read and tokenize the input file, returning the formatted token dump."""
    from curlylex.debug import dump_tokens, tokens_to_json
    from curlylex.lexer import tokenize

    source = options.input_file.read_text(encoding="utf-8")
    tokens = tokenize(source, str(options.input_file), keep_comments=options.keep_comments)

    if options.check:
        return ""
    if options.output_format == "json":
        return json.dumps(tokens_to_json(tokens), indent=2) + "\n"
    buf = io.StringIO()
    dump_tokens(tokens, file=buf)
    return buf.getvalue()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        output = render_tokens(options)
    except LexError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except UnicodeDecodeError as exc:
        print(f"error: {options.input_file}: not valid UTF-8 ({exc.reason})", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    sys.stdout.write(output)
    return 0
