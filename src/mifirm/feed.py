"""Finds the download page of the newest Mi Fit release from its RSS feed."""

import logging
import xml.etree.ElementTree as ET
from typing import Optional

import click
import requests

from .errors import FeedError

logger = logging.getLogger(__name__)

USER_AGENT = "MiFirm/1.0"
ATOM_NS = "{http://www.w3.org/2005/Atom}"


def make_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})
    return session


def parse_latest_item(xml_text: bytes) -> str:
    """
    Return the identifier of the first item in an RSS or Atom document.

    For RSS this is the item's guid, falling back to its link; for Atom
    the entry id, falling back to the href of its link.

    Raises:
        FeedError: If the document is malformed or has no usable item
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise FeedError(f"Malformed feed: {e}") from e

    item = root.find("./channel/item")
    if item is not None:
        for tag in ("guid", "link"):
            value = (item.findtext(tag) or "").strip()
            if value:
                return value
        raise FeedError("First feed item has neither guid nor link")

    entry = root.find(f"{ATOM_NS}entry")
    if entry is not None:
        value = (entry.findtext(f"{ATOM_NS}id") or "").strip()
        if value:
            return value
        link = entry.find(f"{ATOM_NS}link")
        if link is not None and link.get("href"):
            return link.get("href").strip()
        raise FeedError("First feed entry has neither id nor link")

    raise FeedError("Feed contains no items")


def fetch_latest_release_url(
    feed_url: str,
    session: Optional[requests.Session] = None,
    timeout: float = 15.0,
) -> str:
    """
    Fetch a release feed and return the link of its newest item.

    Args:
        feed_url: RSS or Atom feed URL
        session: Optional requests session, created if not given
        timeout: Request timeout in seconds

    Returns:
        URL of the newest release page

    Raises:
        FeedError: On network errors, HTTP errors or unparseable content
    """
    session = session or make_session()
    logger.info(f"Fetching release feed {feed_url}")

    try:
        response = session.get(feed_url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FeedError(f"Failed to fetch feed {feed_url}: {e}") from e

    url = parse_latest_item(response.content)
    logger.info(f"Latest release: {url}")
    return url


def open_in_browser(url: str) -> None:
    """Open a URL with the system's default browser."""
    logger.debug(f"Opening {url}")
    click.launch(url)
