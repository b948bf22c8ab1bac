"""Small helpers with no dependency on the rest of the application."""

from music_api.shared.utils.datetime import ensure_utc, utc_now

__all__ = ["ensure_utc", "utc_now"]
