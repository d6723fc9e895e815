"""Recover a story's image catalog from rendered story HTML."""

import re

from story_identity.catalog.builder import build_catalog
from story_identity.models.assets import AssetGroup
from story_identity.models.config import CatalogConfig
from story_identity.utils.logging import get_logger

logger = get_logger(__name__)


def _img_src_pattern(config: CatalogConfig) -> re.Pattern[str]:
    host = re.escape(config.storage_host)
    extensions = "|".join(re.escape(extension) for extension in config.image_extensions)
    return re.compile(
        rf"""<img[^>]+src=["']([^"']*{host}[^"']*\.(?:{extensions}))[^"']*["'][^>]*>""",
        re.IGNORECASE,
    )


def extract_image_urls(html: str, *, config: CatalogConfig | None = None) -> list[str]:
    """
    Collect storage-hosted image URLs from ``<img>`` tags.

    Query strings are dropped, logo images are skipped and duplicates are
    removed while keeping document order.

    Examples:
        >>> extract_image_urls(
        ...     '<img src="https://storage.googleapis.com/b/s1/frontcover_v001.png">'
        ... )
        ['https://storage.googleapis.com/b/s1/frontcover_v001.png']
    """
    if not html:
        return []

    config = config or CatalogConfig()
    urls = [
        url
        for url in _img_src_pattern(config).findall(html)
        if not any(marker in url for marker in config.excluded_url_markers)
    ]
    return list(dict.fromkeys(urls))


def extract_images_from_html(html: str, *, config: CatalogConfig | None = None) -> list[AssetGroup]:
    """
    Build the image catalog of a story from its HTML.

    Each image URL is used as its own key, so the grammar sees the filename
    at the end of the URL path.
    """
    config = config or CatalogConfig()
    urls = extract_image_urls(html, config=config)
    logger.debug("Images found in HTML", count=len(urls))
    return build_catalog({url: {"url": url} for url in urls}, config=config)
