from shortlink.cache.lru_cache import ResolutionCache


__all__ = [
    'ResolutionCache',
]
