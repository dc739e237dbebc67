# SPDX-License-Identifier: Apache-2.0
"""
Content Translator - CLI Tool

Translates blog/CMS article text while keeping code blocks, markup, URLs,
paths, emails and template variables untouched.

Usage:
    translate-content <article.md> [options]

Examples:
    translate-content post.md                        # Google (keyless), zh -> en
    translate-content post.md -b deepl -s en -t de
    translate-content post.md --title "Hello" --summary "..."
    translate-content broken.md --sanitize           # Repair leftover placeholders
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

from content_translator.config import AUTH_TYPES, TranslationConfig
from content_translator.core.models import TranslationRequest
from content_translator.core.sanitizer import sanitize
from content_translator.pipeline.errors import PipelineError
from content_translator.pipeline.service import ArticleFields, TranslationService
from content_translator.translators import PROVIDERS
from content_translator.translators.base import TranslatorError
from content_translator.translators.classifier import format_error_message

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed argument Namespace.
    """
    parser = argparse.ArgumentParser(
        prog="translate-content",
        description="Content Translator - translates article text with code and markup protection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s post.md                               # Google Translate, keyless (default)
  %(prog)s post.md --backend deepl               # DeepL
  %(prog)s post.md --backend openai --usage      # OpenAI with token usage report
  %(prog)s post.md -o post.en.md                 # Specify output file
  %(prog)s post.md -s en -t ja                   # English to Japanese
  %(prog)s post.md --selective-lines 12,15       # Also translate these code comments
  %(prog)s post.md --settings settings.json      # Use admin settings JSON
  %(prog)s - < post.md                           # Read from stdin

Environment Variables (also read from .env):
  TRANSLATION_PROVIDER     Default backend
  <PROVIDER>_API_KEY       API key, e.g. DEEPL_API_KEY, OPENAI_API_KEY
  <PROVIDER>_MODEL         Model for LLM backends
  <PROVIDER>_BASE_URL      Custom endpoint for LLM backends
""",
    )

    parser.add_argument(
        "input",
        help="Path to the text/Markdown file to translate ('-' for stdin)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output file path (default: stdout)",
    )
    parser.add_argument(
        "-b",
        "--backend",
        choices=sorted(PROVIDERS),
        help="Translation backend (default: TRANSLATION_PROVIDER or google-free)",
    )
    parser.add_argument(
        "-s",
        "--source",
        default="zh",
        help="Source language code (default: zh)",
    )
    parser.add_argument(
        "-t",
        "--target",
        default="en",
        help="Target language code (default: en)",
    )

    backend_group = parser.add_argument_group("Backend options")
    backend_group.add_argument(
        "--settings",
        type=Path,
        help="Settings JSON file (camelCase keys as stored by the admin frontend)",
    )
    backend_group.add_argument("--api-key", help="API key (or set <PROVIDER>_API_KEY)")
    backend_group.add_argument("--model", help="Model for LLM backends")
    backend_group.add_argument(
        "--base-url",
        help="Custom base URL for OpenAI-compatible and other LLM endpoints",
    )
    backend_group.add_argument(
        "--api-url",
        help="Custom endpoint for DeepL, Google Cloud, MyMemory or LibreTranslate",
    )
    backend_group.add_argument("--email", help="Contact email for MyMemory")
    backend_group.add_argument(
        "--auth-type",
        choices=AUTH_TYPES,
        help="Where the API key is sent (default: provider's own scheme)",
    )
    backend_group.add_argument(
        "--auth-header",
        help="Header (or query parameter) name for --auth-type custom/query",
    )
    backend_group.add_argument(
        "--timeout",
        type=float,
        help="Request timeout in seconds",
    )

    article_group = parser.add_argument_group("Article options")
    article_group.add_argument("--title", help="Article title to translate along with the content")
    article_group.add_argument("--summary", help="Article summary to translate along with the content")
    article_group.add_argument(
        "--selective-lines",
        help="Comma separated line numbers whose code comments are translated (e.g. 3,7)",
    )

    parser.add_argument(
        "--usage",
        action="store_true",
        help="Report token usage and estimated cost (LLM backends)",
    )
    parser.add_argument(
        "--sanitize",
        action="store_true",
        help="Only remove leftover placeholder tokens; no translation",
    )
    parser.add_argument(
        "--locale",
        choices=["en", "zh"],
        help="Language of error messages (default: settings locale, else en)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


def parse_selective_lines(value: str | None) -> frozenset[int]:
    """Parse "3,7,12" into line numbers.

    Raises:
        ValueError: If an entry is not a positive integer.
    """
    if not value:
        return frozenset()
    lines: set[int] = set()
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        number = int(part)
        if number < 1:
            raise ValueError(f"line numbers start at 1: {number}")
        lines.add(number)
    return frozenset(lines)


def build_config(args: argparse.Namespace) -> TranslationConfig:
    """Settings file or environment first, then command line overrides."""
    if args.settings:
        config = TranslationConfig.from_file(args.settings)
        if args.backend:
            config = dataclasses.replace(config, provider=args.backend)
    else:
        config = TranslationConfig.from_env(provider=args.backend)

    overrides = {
        "api_key": args.api_key,
        "model": args.model,
        "base_url": args.base_url,
        "api_url": args.api_url,
        "email": args.email,
        "auth_type": args.auth_type,
        "custom_auth_header": args.auth_header,
        "timeout": args.timeout,
        "locale": args.locale,
    }
    return dataclasses.replace(
        config, **{key: value for key, value in overrides.items() if value is not None}
    )


def read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def write_output(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")


def describe_error(error: TranslatorError, locale: str) -> str:
    """Raw error plus its classified message and suggestion."""
    return f"{error}\n{format_error_message(str(error), error.code.value, error.provider, locale)}"


async def run(args: argparse.Namespace) -> int:
    """Execute translation.

    Args:
        args: Command line arguments.

    Returns:
        Exit code (0: success, 1: failure).
    """
    try:
        text = read_input(args.input)
    except OSError as e:
        print(f"Error: Cannot read input: {e}", file=sys.stderr)
        return 1

    if args.sanitize:
        write_output(sanitize(text), args.output)
        return 0

    try:
        selective_lines = parse_selective_lines(args.selective_lines)
    except ValueError as e:
        print(f"Error: Invalid --selective-lines: {e}", file=sys.stderr)
        return 1

    try:
        config = build_config(args)
        service = TranslationService.from_config(config)
    except TranslatorError as e:
        print(f"Error: {describe_error(e, args.locale or 'en')}", file=sys.stderr)
        return 1

    print(f"Backend: {config.provider}", file=sys.stderr)
    print(f"Translation: {args.source.upper()} -> {args.target.upper()}", file=sys.stderr)

    try:
        async with service:
            if args.title is not None or args.summary is not None:
                article = await service.translate_article(
                    ArticleFields(
                        title=args.title or "",
                        summary=args.summary or "",
                        content=text,
                    ),
                    args.source,
                    args.target,
                    selective_lines=selective_lines,
                )
                output = json.dumps(dataclasses.asdict(article), ensure_ascii=False, indent=2)
            elif args.usage:
                result = await service.translate_with_usage(
                    TranslationRequest(text, args.source, args.target, selective_lines)
                )
                output = result.translated_text
                if result.usage is None:
                    print("Usage: not reported by this backend", file=sys.stderr)
                else:
                    usage = result.usage
                    print(
                        f"Usage: {usage.input_units} in / {usage.output_units} out "
                        f"({usage.total_units} total), "
                        f"~{usage.estimated_cost:.6f} {usage.currency}",
                        file=sys.stderr,
                    )
            else:
                output = await service.translate(
                    text, args.source, args.target, selective_lines=selective_lines
                )
    except TranslatorError as e:
        print(f"Error: {describe_error(e, config.locale)}", file=sys.stderr)
        return 1
    except PipelineError as e:
        print(f"Error: Translation failed ({e.stage}): {e}", file=sys.stderr)
        return 1

    write_output(output, args.output)
    if args.output:
        print(f"Complete: {args.output}", file=sys.stderr)
    return 0


def main() -> NoReturn:
    """Main entry point."""
    args = parse_args()

    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format="%(levelname)s: %(message)s")

    exit_code = asyncio.run(run(args))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
