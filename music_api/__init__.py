"""Music catalog REST API: authors, their musics, filtered search and a read-through cache."""
