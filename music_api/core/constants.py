"""Core constants: cache key prefixes, pagination defaults and response messages.

Single source of truth for cache key structure (DRY). Used by
infrastructure cache and by the author/music services.
"""

# Cache region for the author-with-musics aggregate (keys are region:author_id)
CACHE_PREFIX_AUTHOR_MUSICS = "authorMusics"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Default TTL (seconds) for author-with-musics entries; overridable via settings
CACHE_TTL_AUTHOR_MUSICS = 300

# Entry cap for the in-process cache backend (least recently used go first)
MEMORY_CACHE_MAXSIZE = 10_000

# Pagination (page numbers are zero-based)
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 2000
DEFAULT_SORT = "name"

# Success envelope messages
MESSAGE_SUCCESS = "Success"
MESSAGE_AUTHOR_CREATED = "Author created successfully"
MESSAGE_AUTHOR_UPDATED = "Author updated successfully"
MESSAGE_MUSIC_CREATED = "Music created successfully"
MESSAGE_MUSIC_UPDATED = "Music updated successfully"

# Business rule messages
DUPLICATE_MUSIC_MESSAGE = "Music with this name already exists for this author"
