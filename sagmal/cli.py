"""Command line interface for sagmal."""

from __future__ import annotations

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from .clipboard import copy_to_clipboard
from .config import SERVER_URL_ENV, get_api_key, load_config_inputs, load_environment
from .deepl import DeepLClient, DeepLError
from .errors import SagmalError
from .languages import split_positionals
from .resolver import ResolvedParameters, resolve_parameters
from .translator import translate

EXAMPLES = """\
examples:
  sagmal Bonjour tout le monde
  sagmal de: Hallo Welt!
  sagmal :it It's not a bug, it's a feature
  sagmal I have made a terrible mistake :ja
  sagmal fr:ar Je pense, donc je suis
  sagmal ja: 私は大丈夫です :zh-HANT
  sagmal 404 Motivation Not Found en:de
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sagmal",
        usage="sagmal [options] [languages] <text> [languages]",
        description="Translate text with DeepL. Languages are given as 'source:target', "
        "e.g. 'de:', ':ja' or 'fr:ar', before or after the text.",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("text", nargs="*", help="Text to translate, optionally framed by language options")
    parser.add_argument("-h", "--help", action="store_true", help="Show this help message and exit")
    parser.add_argument("-c", "--copy", action="store_true", help="Copy the translation to the clipboard")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print DeepL request/response debug information to stderr",
    )
    return parser


async def _translate(api_key: str, text: str, params: ResolvedParameters, *, debug: bool) -> str:
    async with DeepLClient(api_key, server_url=os.getenv(SERVER_URL_ENV), debug=debug) as client:
        result = await translate(client, text, params, debug=debug)
    return result.text


def _execute(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    if args.help or not args.text:
        parser.print_help()
        return 0

    split = split_positionals(args.text)
    if not split.text:
        parser.print_help()
        return 0

    load_environment()
    api_key = get_api_key()
    config_inputs = load_config_inputs()

    params = resolve_parameters(
        split.language_options,
        config_inputs.home,
        config_inputs.local,
        copy_to_clipboard=args.copy,
    )
    if args.debug:
        print(
            f"[debug] resolved source={params.source_language or 'auto'} target={params.target_language}"
            f" options={params.translation_options} copy={params.should_copy_to_clipboard}",
            file=sys.stderr,
        )

    translated = asyncio.run(_translate(api_key, split.text, params, debug=args.debug))
    print(translated)

    if params.should_copy_to_clipboard:
        copy_to_clipboard(translated, debug=args.debug)
    return 0


def run(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    try:
        return _execute(parser, args)
    except SagmalError as exc:
        print(f"{type(exc).__name__} > {exc}", file=sys.stderr)
    except DeepLError as exc:
        print(f"DeepL API Error > {exc}", file=sys.stderr)
    except Exception as exc:  # top-level guard; report and exit non-zero
        print(f"Sagmal Unknown Error > {type(exc).__name__} > {exc}", file=sys.stderr)
    return 1


def main() -> None:
    sys.exit(run())


__all__ = ["build_parser", "main", "run"]
