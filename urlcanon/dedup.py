"""
urlcanon.dedup — Dedup keys for batches of crawled URLs.

Malformed URLs never abort a batch: they are logged and reported per row.
"""

import hashlib
import logging
from typing import Iterable

import pandas as pd

from urlcanon.errors import MalformedUrlError
from urlcanon.url import URL

logger = logging.getLogger(__name__)

KEY_COLUMNS = ["repaired_url", "normalized_url", "url_hash", "error"]


def _digest(key: str) -> str:
    return hashlib.sha256(key.encode("utf-8", errors="replace")).hexdigest()


def dedup_key(url: str) -> str:
    """The normalized form of ``url``; equal keys mean duplicate URLs."""
    return URL(url).normalized_url()


def url_hash(url: str) -> str:
    """SHA-256 hex digest of the dedup key, for fixed-width storage."""
    return _digest(dedup_key(url))


def group_duplicates(urls: Iterable[str]) -> dict[str, list[str]]:
    """
    Group URLs by dedup key, in first-seen order.
    Malformed URLs are skipped.
    """
    groups: dict[str, list[str]] = {}
    for url in urls:
        try:
            key = dedup_key(url)
        except MalformedUrlError as e:
            logger.warning("Skipping malformed URL %r: %s", url, e)
            continue
        groups.setdefault(key, []).append(url)
    return groups


def _canonicalize_row(raw) -> dict:
    if not isinstance(raw, str) or not raw.strip():
        return {"repaired_url": None, "normalized_url": None, "url_hash": None,
                "error": "empty url"}
    try:
        url = URL(raw.strip())
    except MalformedUrlError as e:
        logger.warning("Malformed URL %r: %s", raw, e)
        return {"repaired_url": None, "normalized_url": None, "url_hash": None,
                "error": str(e)}
    normalized = url.normalized_url()
    return {
        "repaired_url": url.repaired_url(),
        "normalized_url": normalized,
        "url_hash": _digest(normalized),
        "error": None,
    }


def canonicalize_frame(df: pd.DataFrame, column: str = "loc") -> pd.DataFrame:
    """Return a copy of ``df`` with repaired/normalized/hash/error columns added."""
    if column not in df.columns:
        raise KeyError(f"Column '{column}' not found in DataFrame")
    rows = [_canonicalize_row(raw) for raw in df[column].tolist()]
    keys = pd.DataFrame(rows, columns=KEY_COLUMNS, index=df.index)
    out = df.copy()
    for name in KEY_COLUMNS:
        out[name] = keys[name]
    return out


def dedupe_frame(df: pd.DataFrame, column: str = "loc") -> pd.DataFrame:
    """
    Canonicalize ``df`` and keep the first row of every dedup key.
    Rows whose URL could not be parsed are dropped.
    """
    out = canonicalize_frame(df, column)
    valid = out[out["error"].isna()]
    dropped = len(out) - len(valid)
    deduped = valid.drop_duplicates(subset="normalized_url", keep="first")
    logger.info(
        "Deduplicated %d rows: %d malformed, %d duplicates, %d kept",
        len(out), dropped, len(valid) - len(deduped), len(deduped),
    )
    return deduped.reset_index(drop=True)
