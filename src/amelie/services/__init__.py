"""Service layer for amelie."""

from .blogroll import BlogrollAssembler, select_post_ids
from .site_config import SiteConfig, SiteConfigCache

__all__ = [
    "BlogrollAssembler",
    "SiteConfig",
    "SiteConfigCache",
    "select_post_ids",
]
