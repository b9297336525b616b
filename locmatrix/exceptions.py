"""Custom exceptions for LocMatrix services."""


class ConfigNotFoundError(Exception):
    """Raised when the app parameters file cannot be found."""

    def __init__(self, config_path: str, reason: str = "not found"):
        self.config_path = config_path
        self.reason = reason
        super().__init__(f"Config '{config_path}' {reason}")


class InvalidConfigError(ValueError):
    """Raised when an app parameter is missing or cannot be parsed."""

    def __init__(self, parameter: str, message: str):
        self.parameter = parameter
        super().__init__(message)


class InvalidFilterError(ValueError):
    """Raised when a requested locale mode or filter combination is not available."""


class HttpFetchError(Exception):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"HTTP fetch failed for {url}: {original}")


class RecordFetchError(Exception):
    """Raised when the record store fails for any reason other than "not found"."""

    def __init__(self, kind: str, record_id: str, reason: str):
        self.kind = kind
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"Could not fetch {kind} '{record_id}': {reason}")


class MalformedRecordError(Exception):
    """Raised when a fetched record lacks the system metadata the crawler relies on."""

    def __init__(self, record_id, missing: str):
        self.record_id = record_id
        self.missing = missing
        super().__init__(f"Record '{record_id}' is malformed: missing {missing}")


class CrawlFailedError(Exception):
    """Raised when building the matrix for a root entry fails as a whole."""

    def __init__(self, entry_id: str, original: Exception):
        self.entry_id = entry_id
        self.original = original
        super().__init__(f"Crawl failed for entry '{entry_id}': {original}")
