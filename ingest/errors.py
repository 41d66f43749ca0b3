# Description: Exceptions raised around the converter.
# The conversion itself never fails; loading a document and reading
# the pipeline config can.


class ConverterError(Exception):
    """Base exception for the ingest converter."""


class DocumentLoadError(ConverterError):
    """Raised when a file or URL cannot be read. No Markdown is produced."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load {source}: {reason}")


class ConfigError(ConverterError):
    """Raised when sources.yaml is missing or lacks required keys."""


class ParserUnavailableError(ConverterError):
    """Raised when the configured BeautifulSoup tree builder is not installed."""

    def __init__(self, parser: str) -> None:
        self.parser = parser
        super().__init__(f"HTML parser {parser!r} is not available (install it or pick another)")
