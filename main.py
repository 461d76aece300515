#!/usr/bin/env python3
"""
ask-llm: send one prompt to an LLM provider and print the answer.

Usage:
    python main.py "explain this error"                  # DEFAULT_LLM / DEFAULT_MODEL
    python main.py -p gemini -m gemini-pro "summarize"   # explicit provider + model
    git diff | python main.py -p claude -t 800 "review"  # piped input + prompt
    python main.py --list-providers

Companion:
    find-usage TERM [ROOT] [-i GLOB ...]                 # files that mention TERM
"""

import argparse
import logging
import sys

from config import load_config
from delivery import deliver_cli, deliver_paths, report_error
from llm import LLMError, create_dispatcher, parse_max_tokens, parse_timeout, provider_names, resolve_model
from search import DEFAULT_PATTERNS, find_usages


def setup_logging(verbose: bool = False):
    # basicConfig logs to stderr; stdout is reserved for the answer
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def read_prompt(words: list[str], stdin=None) -> str:
    """
    Build the prompt from piped stdin and positional words.

    Both present: piped text first, then a blank line, then the words.
    """
    stdin = stdin if stdin is not None else sys.stdin
    piped = ""
    if stdin is not None and not stdin.isatty():
        piped = stdin.read().strip()
    typed = " ".join(words).strip()

    if piped and typed:
        return f"{piped}\n\n{typed}"
    return piped or typed


def cmd_ask(config, args) -> int:
    provider = args.provider or config.default_llm
    if not provider:
        report_error("No provider selected. Pass --provider or set DEFAULT_LLM.")
        return 1

    prompt = read_prompt(args.prompt)

    try:
        model = resolve_model(config, provider, args.model)
        max_tokens = None
        if args.max_tokens is not None:
            max_tokens = parse_max_tokens(args.max_tokens, provider)
        timeout = None
        if args.timeout is not None:
            timeout = parse_timeout(args.timeout, provider)
        dispatcher = create_dispatcher(config, timeout=timeout)
        text = dispatcher.dispatch(provider, model, prompt, max_tokens)
    except LLMError as e:
        report_error(str(e))
        return 1

    deliver_cli(text)
    return 0


def cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="ask",
        description="Send a prompt to an LLM provider and print the response",
    )
    parser.add_argument(
        "-p", "--provider", default=None,
        help=f"Provider: {', '.join(provider_names())} (default: $DEFAULT_LLM)",
    )
    parser.add_argument("-m", "--model", default=None, help="Model (default: $NAME_MODEL, then $DEFAULT_MODEL)")
    parser.add_argument(
        "-t", "--max-tokens", default=None,
        help="Token limit (default: $NAME_MAX_TOKENS)",
    )
    parser.add_argument("--timeout", default=None, help="Request timeout in seconds")
    parser.add_argument("--list-providers", action="store_true", help="List providers and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")
    parser.add_argument("prompt", nargs="*", help="Prompt text (appended to piped input)")

    args = parser.parse_args(argv)

    if args.list_providers:
        for name in provider_names():
            print(name)
        return 0

    setup_logging(args.verbose)
    try:
        config = load_config()
    except ValueError as e:
        report_error(f"Invalid configuration: {e}")
        return 1

    return cmd_ask(config, args)


def find_usage_cli(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="find-usage",
        description="List files that contain a term",
    )
    parser.add_argument("term", help="Exact text to search for")
    parser.add_argument("root", nargs="?", default=".", help="Directory to search (default: .)")
    parser.add_argument(
        "-i", "--include", action="append", default=None, metavar="GLOB",
        help=f"Filename glob, repeatable (default: {' '.join(DEFAULT_PATTERNS)})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    try:
        paths = find_usages(args.term, args.root, args.include or DEFAULT_PATTERNS)
    except ValueError as e:
        report_error(str(e))
        return 1

    if not deliver_paths(paths):
        print(f"No usages of '{args.term}' found.", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(cli())
