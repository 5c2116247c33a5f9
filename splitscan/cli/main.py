#!/usr/bin/env python3

import argparse
import logging
from collections.abc import Sequence

from splitscan import __version__


def _print_error(error: str) -> None:
    for line in error.splitlines():
        print(line)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        prog="splitscan",
        description="Receipt text and barcode payload parser",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse [FILE|-] [--confidence F] [--json]
                             Parse OCR receipt text (stdin when FILE is - or omitted)
  decode PAYLOAD [--json]    Decode a barcode/QR payload
  serve [--host] [--port]    Start the HTTP parsing service

Config:
  Parser thresholds come from the packaged defaults, then
  $SPLITSCAN_HOME/config/parser.toml, then --config / $SPLITSCAN_CONFIG.
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="Parser config TOML layered over the defaults")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Parse OCR receipt text")
    parse_parser.add_argument("file", nargs="?", default="-", help="Text file to parse, or - for stdin (default)")
    parse_parser.add_argument(
        "--confidence",
        type=float,
        default=None,
        help="Confidence stamped on every parsed item (default: config value, 0.8)",
    )
    parse_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    # decode command
    decode_parser = subparsers.add_parser("decode", help="Decode a barcode/QR payload")
    decode_parser.add_argument("payload", help="Raw payload string")
    decode_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    # serve command
    serve_parser = subparsers.add_parser("serve", help="Start the HTTP parsing service")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8080, help="Port to bind to (default: 8080)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.verbose:
        from splitscan.runtime import set_log_level

        set_log_level(logging.DEBUG)

    if args.command == "serve":
        from splitscan.cli.receipt import cmd_serve

        return cmd_serve(args)

    from splitscan.runtime import load_parser_config

    try:
        config = load_parser_config(args.config)
    except (OSError, ValueError) as exc:
        _print_error(f"Error: {exc}")
        return 1

    if args.command == "parse":
        from splitscan.cli.receipt import cmd_parse

        return cmd_parse(args, config)
    elif args.command == "decode":
        from splitscan.cli.receipt import cmd_decode

        return cmd_decode(args, config)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
