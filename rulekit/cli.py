#!/usr/bin/env python3
"""
RuleKit Validation CLI

Command-line interface for checking a single value against a rule spec.
"""

import argparse
import json
import logging
import sys

import colorama
from colorama import Fore, Style

from .config import load_settings
from .errors import ConfigurationError, RuleConstructionError
from .logging_config import setup_logging
from .rule_validator import RuleValidator

EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rulekit",
        description="Validate a value against a rule spec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a username
  rulekit octocat "required|alphaNum|minLength:3"

  # Decode the value as JSON first (here: the integer 5)
  rulekit --json 5 "integer|between:1:10"

  # Report unknown rule names and print machine-readable output
  rulekit --strict --format json "" "required|bogus"
        """,
    )

    parser.add_argument("value", help="Value to validate")
    parser.add_argument("rules", help='Rule spec, e.g. "required|string|minLength:3"')

    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_value",
        help="Decode VALUE as JSON before validating",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Treat unknown rule names as failures",
    )

    parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a rulekit.yaml settings file",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: from settings, INFO)",
    )

    return parser


def render_text(result) -> str:
    if result.passed:
        lines = [f"{Fore.GREEN}PASS{Style.RESET_ALL}"]
    else:
        lines = [f"{Fore.RED}FAIL{Style.RESET_ALL}"]
        for rule_name, message in result.errors.items():
            lines.append(f"  {Fore.YELLOW}{rule_name}{Style.RESET_ALL}: {message}")
    if result.unresolved:
        lines.append(f"  unknown rules: {', '.join(result.unresolved)}")
    return "\n".join(lines)


def main(argv=None) -> int:
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)
    colorama.init()

    try:
        settings = load_settings(args.config)
    except ConfigurationError as e:
        print(f"{Fore.RED}Configuration error:{Style.RESET_ALL} {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.strict is not None:
        settings.strict = args.strict

    setup_logging(args.log_level or settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)

    value = args.value
    if args.json_value:
        try:
            value = json.loads(args.value)
        except ValueError as e:
            logger.error(f"VALUE is not valid JSON: {e}")
            return EXIT_ERROR

    try:
        result = RuleValidator(settings=settings).check(value, args.rules)
    except RuleConstructionError as e:
        logger.error(str(e))
        return EXIT_ERROR

    if args.format == "json":
        print(json.dumps(result.to_dict(), indent=2, default=str))
    else:
        print(render_text(result))

    return EXIT_PASSED if result.passed else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
