"""Parts Search API: keyset-paginated exact and prefix search over a parts catalog."""
