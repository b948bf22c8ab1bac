"""Cache key builders. Single place for key format (DRY).

Keys are namespaced by cache region: "<region>:<id>".
"""

from music_api.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_AUTHOR_MUSICS


def author_musics_key(author_id: int) -> str:
    """Cache key for the author-with-musics aggregate of one author."""
    return f"{CACHE_PREFIX_AUTHOR_MUSICS}{CACHE_KEY_SEP}{int(author_id)}"


def author_musics_pattern() -> str:
    """Glob pattern matching every key of the author-with-musics region."""
    return f"{CACHE_PREFIX_AUTHOR_MUSICS}{CACHE_KEY_SEP}*"
