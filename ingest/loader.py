# Description: Load an HTML document (local file or URL) and hand its
# <body> to the converter.
# Any read/fetch failure is raised as DocumentLoadError, nothing is
# converted from a partially loaded document.

import logging
from pathlib import Path

import requests
from bs4 import BeautifulSoup, FeatureNotFound, Tag

from ingest.errors import DocumentLoadError, ParserUnavailableError
from ingest.html_to_markdown import convert

# header string sent with every HTTP request so servers can identify us
USER_AGENT = "html-ingest/0.1"
DEFAULT_PARSER = "html5lib"
DEFAULT_TIMEOUT = 60


def setup_logger(level=logging.INFO):
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
        force=True
    )
    # hush HTTP client internals
    for name in ("urllib3", "charset_normalizer"):
        logging.getLogger(name).setLevel(logging.WARNING)


def is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def fetch_text(url: str, timeout=DEFAULT_TIMEOUT) -> str:
    logging.debug(f"GET {url}")
    r = requests.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
    r.raise_for_status()
    logging.debug(f"OK {url} ({len(r.text)} bytes)")
    return r.text


def read_text(path) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


# Parse markup and return <body>; markup without a body yields the soup itself.
# html5lib builds the same tree a browser does (implied <tbody> included).
def parse_html(html: str, parser: str = DEFAULT_PARSER) -> Tag:
    try:
        soup = BeautifulSoup(html, parser)
    except FeatureNotFound as e:
        raise ParserUnavailableError(parser) from e
    return soup.body or soup


def load_html(source: str, timeout=DEFAULT_TIMEOUT) -> str:
    try:
        if is_url(source):
            return fetch_text(source, timeout=timeout)
        return read_text(Path(source))
    except (OSError, UnicodeDecodeError, requests.RequestException) as e:
        raise DocumentLoadError(source, str(e)) from e


def load_document(source: str, parser: str = DEFAULT_PARSER, timeout=DEFAULT_TIMEOUT) -> Tag:
    return parse_html(load_html(source, timeout=timeout), parser)


def convert_html(html: str, parser: str = DEFAULT_PARSER, workers: int = 1) -> str:
    return convert(parse_html(html, parser), workers=workers)


def convert_source(source: str, parser: str = DEFAULT_PARSER, timeout=DEFAULT_TIMEOUT, workers: int = 1) -> str:
    body = load_document(source, parser=parser, timeout=timeout)
    logging.info(f"Loaded {source}")
    return convert(body, workers=workers)
