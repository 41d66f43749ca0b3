# Description: Convert one HTML file or URL and print the Markdown.
#   python -m ingest page.html
#   python -m ingest https://example.com/ --output page.md

import argparse
import logging

from ingest.errors import ConverterError
from ingest.loader import DEFAULT_PARSER, DEFAULT_TIMEOUT, convert_source, setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="html-ingest", description="Convert an HTML document to Markdown")
    parser.add_argument("source", help="Path to an HTML file or an http(s) URL")
    parser.add_argument("--parser", default=DEFAULT_PARSER, help="BeautifulSoup tree builder (default: html5lib)")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT, help="HTTP timeout in seconds")
    parser.add_argument("--output", "-o", help="Write Markdown to this file instead of stdout")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logger(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        markdown = convert_source(args.source, parser=args.parser, timeout=args.timeout)
    except ConverterError as e:
        logging.error(str(e))
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(markdown)
        logging.info(f"Wrote {args.output}")
    else:
        print(markdown)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
