# Description: HTML body -> Markdown converter and the ingest glue around it.

from ingest.errors import ConfigError, ConverterError, DocumentLoadError, ParserUnavailableError
from ingest.html_to_markdown import BlockKind, convert
from ingest.loader import convert_html, convert_source, load_document, parse_html

__all__ = [
    "BlockKind",
    "ConfigError",
    "ConverterError",
    "DocumentLoadError",
    "ParserUnavailableError",
    "convert",
    "convert_html",
    "convert_source",
    "load_document",
    "parse_html",
]
