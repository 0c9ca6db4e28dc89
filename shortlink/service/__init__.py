from shortlink.service.shortener_service import ShortenerService


__all__ = [
    'ShortenerService',
]
