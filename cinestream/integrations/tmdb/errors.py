from __future__ import annotations


class TmdbClientError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body_snippet: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_snippet = body_snippet

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class TmdbConfigError(TmdbClientError):
    """The TMDb API key is not configured. Raised per request, never at startup."""


class TmdbPayloadError(TmdbClientError):
    """TMDb answered 200 but the body did not match the expected shape."""
