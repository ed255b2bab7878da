from .config import LOG_LEVELS, TaxonomyStoreConfig

__all__ = [
    "LOG_LEVELS",
    "TaxonomyStoreConfig",
]
