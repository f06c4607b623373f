from __future__ import annotations


class CompositionError(RuntimeError):
    """Fatal failure: the run produces no document."""


class TemplateError(CompositionError):
    pass


class FontEmbeddingError(CompositionError):
    pass


class AssetError(Exception):
    """Recoverable failure for one remote asset; the page is drawn without it."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


class AssetFetchError(AssetError):
    pass


class ImageDecodeError(AssetError):
    pass
