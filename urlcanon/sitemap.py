"""
urlcanon.sitemap — Read sitemap XML and dedupe the URLs it lists.
"""

import logging
import time
import xml.etree.ElementTree as ET
from typing import Optional

import pandas as pd
import requests

from urlcanon.constants import SITEMAP_HEADERS, SITEMAP_TIMEOUT
from urlcanon.dedup import dedupe_frame

logger = logging.getLogger(__name__)

# XML namespace used in the sitemap protocol
SITEMAP_NS = {"sm": "http://www.sitemaps.org/schemas/sitemap/0.9"}

CHILD_SITEMAP_DELAY = 0.2


def fetch_xml(url: str) -> Optional[ET.Element]:
    """Fetch and parse an XML document; ``None`` when it cannot be read."""
    try:
        resp = requests.get(url, headers=SITEMAP_HEADERS, timeout=SITEMAP_TIMEOUT)
        resp.raise_for_status()
        return ET.fromstring(resp.content)
    except (requests.RequestException, ET.ParseError) as e:
        logger.warning("Failed to fetch sitemap %s: %s", url, e)
        return None


def is_sitemap_index(root: ET.Element) -> bool:
    tag = root.tag.split("}")[-1]
    return tag == "sitemapindex"


def _text(elem: Optional[ET.Element]) -> Optional[str]:
    if elem is None or not elem.text:
        return None
    return elem.text.strip() or None


def parse_sitemap(url: str, depth: int = 0) -> list[dict]:
    """
    Recursively parse a sitemap URL.
    Returns a list of dicts with keys: loc, lastmod, source_sitemap
    """
    root = fetch_xml(url)
    if root is None:
        return []

    results = []
    if is_sitemap_index(root):
        children = root.findall("sm:sitemap", SITEMAP_NS)
        logger.info("%s: sitemap index with %d child sitemap(s)", url, len(children))
        for child in children:
            child_url = _text(child.find("sm:loc", SITEMAP_NS))
            if child_url:
                results.extend(parse_sitemap(child_url, depth + 1))
                time.sleep(CHILD_SITEMAP_DELAY)
    else:
        entries = root.findall("sm:url", SITEMAP_NS)
        logger.info("%s: url set with %d URL(s) at depth %d", url, len(entries), depth)
        for entry in entries:
            loc = _text(entry.find("sm:loc", SITEMAP_NS))
            if loc:
                results.append({
                    "loc": loc,
                    "lastmod": _text(entry.find("sm:lastmod", SITEMAP_NS)),
                    "source_sitemap": url,
                })
    return results


def canonicalize_sitemap(url: str) -> pd.DataFrame:
    """All URLs reachable from a sitemap, one row per dedup key."""
    rows = parse_sitemap(url)
    df = pd.DataFrame(rows, columns=["loc", "lastmod", "source_sitemap"])
    return dedupe_frame(df, column="loc")
