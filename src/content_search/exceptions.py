"""Error hierarchy for the content search package."""


class ContentSearchError(Exception):
    """Base error for content-search."""


class ContentLoadError(ContentSearchError):
    """Raised when a single content file cannot be parsed or validated."""

    def __init__(self, path: object, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason
