from shortlink.models.short_link_model import ShortLinkModel, ShortenResult


__all__ = [
    'ShortLinkModel',
    'ShortenResult',
]
