"""Main CLI entry point for the markup-tree command-line tool.

Provides conversion of markup files into JSON node trees, rendering of JSON
node trees back into markup, and round-trip verification.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from markup_tree import __version__
from markup_tree.api import (
    MarkupParser,
    NodeFormatError,
    StrictModeError,
    from_json,
    nodes_to_dicts,
)
from markup_tree.shared.config import ConfigError, ParserConfig
from markup_tree.shared.logging import configure_logging, get_logger

STDIN_PATH = "-"


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self) -> None:
        self.parser_config = ParserConfig.default()
        self.verbose = False
        self.quiet = False

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load a ParserConfig JSON file; fall back to defaults with a warning."""
        config = cls()
        if config_path.exists():
            try:
                config.parser_config = ParserConfig.from_json(config_path.read_text())
            except (OSError, ConfigError) as e:
                print(f"Warning: Could not load config file: {e}", file=sys.stderr)
        else:
            print(f"Warning: Config file not found: {config_path}", file=sys.stderr)
        return config

    @property
    def logging_level(self) -> str:
        if self.verbose:
            return "DEBUG"
        if self.quiet:
            return "ERROR"
        return self.parser_config.global_.logging_level


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="markup-tree",
        description="Convert relaxed HTML into JSON node trees and back"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Parser configuration file (JSON)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log errors"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Convert markup files to JSON")
    parse_parser.add_argument(
        "paths",
        nargs="+",
        help="Markup files to parse ('-' reads standard input); one file prints "
             "a JSON array, several print an object keyed by path"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    parse_parser.add_argument(
        "--indent",
        type=int,
        help="JSON indentation (default: from configuration)"
    )
    parse_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed markup instead of recovering"
    )
    parse_parser.add_argument(
        "--diagnostics",
        action="store_true",
        help="Include summary and diagnostics in the JSON output"
    )

    render_parser = subparsers.add_parser("render", help="Convert a JSON node tree to markup")
    render_parser.add_argument(
        "path",
        help="JSON file to render ('-' reads standard input)"
    )
    render_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    roundtrip_parser = subparsers.add_parser(
        "roundtrip", help="Check that markup survives parse and render"
    )
    roundtrip_parser.add_argument(
        "paths",
        nargs="+",
        help="Markup files to check"
    )
    roundtrip_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Report format (default: text)"
    )

    return parser


def _read_source(path: str) -> str:
    if path == STDIN_PATH:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def _write_output(text: str, output: Optional[Path]) -> None:
    if output:
        output.write_text(text + "\n", encoding="utf-8")
        print(f"Results written to {output}", file=sys.stderr)
    else:
        print(text)


def cmd_parse(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle parse command."""
    parser_config = config.parser_config
    if args.strict:
        parser_config = parser_config.override(api__strict_mode=True)
    indent = args.indent if args.indent is not None else parser_config.api.json_indent

    parser = MarkupParser(parser_config)
    outputs: Dict[str, Any] = {}
    exit_code = 0

    for path in args.paths:
        try:
            result = parser.parse(_read_source(path))
        except OSError as e:
            print(f"Cannot read {path}: {e}", file=sys.stderr)
            exit_code = 1
            continue
        except UnicodeDecodeError as e:
            print(f"Cannot decode {path} as UTF-8: {e}", file=sys.stderr)
            exit_code = 1
            continue
        except StrictModeError as e:
            print(f"{path}: {e}", file=sys.stderr)
            exit_code = 1
            continue

        result.source = path
        if args.diagnostics:
            outputs[path] = result.to_dict()
        else:
            outputs[path] = nodes_to_dicts(result.nodes)

    if not outputs:
        return exit_code

    # One requested file prints its node list; several print an object keyed
    # by path, even when some of them failed
    payload: Any = outputs
    if len(set(args.paths)) == 1:
        payload = next(iter(outputs.values()))
    _write_output(json.dumps(payload, indent=indent or None, ensure_ascii=False), args.output)
    return exit_code


def cmd_render(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle render command."""
    try:
        nodes = from_json(_read_source(args.path))
    except OSError as e:
        print(f"Cannot read {args.path}: {e}", file=sys.stderr)
        return 1
    except UnicodeDecodeError as e:
        print(f"Cannot decode {args.path} as UTF-8: {e}", file=sys.stderr)
        return 1
    except NodeFormatError as e:
        print(f"{args.path}: {e}", file=sys.stderr)
        return 1

    parser = MarkupParser(config.parser_config)
    _write_output(parser.serialize(nodes), args.output)
    return 0


def cmd_roundtrip(args: argparse.Namespace, config: CLIConfig) -> int:
    """Handle roundtrip command."""
    parser = MarkupParser(config.parser_config.override(api__strict_mode=False))
    results: List[Dict[str, Any]] = []

    for path in args.paths:
        try:
            markup = _read_source(path)
        except (OSError, UnicodeDecodeError) as e:
            results.append({"file": path, "matches": False, "error": str(e)})
            continue
        report = parser.roundtrip(markup)
        results.append({
            "file": path,
            "matches": report.matches,
            "recoveries": report.parse_result.recovery_count,
        })

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        matching = sum(1 for r in results if r["matches"])
        print(f"Checked {len(results)} files, {matching} round-trip cleanly")
        print("-" * 50)
        for result in results:
            status = "✓" if result["matches"] else "✗"
            print(f"{status} {result['file']}")
            if "error" in result:
                print(f"   Error: {result['error']}")
            elif result["recoveries"]:
                print(f"   Recoveries: {result['recoveries']}")

    return 0 if all(r["matches"] for r in results) else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    config = CLIConfig.from_file(args.config) if args.config else CLIConfig()
    config.verbose = args.verbose
    config.quiet = args.quiet
    configure_logging(config.logging_level)
    logger = get_logger(__name__, None, "cli")
    logger.debug("Running command", extra={"command": args.command})

    try:
        if args.command == "parse":
            return cmd_parse(args, config)
        if args.command == "render":
            return cmd_render(args, config)
        if args.command == "roundtrip":
            return cmd_roundtrip(args, config)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
