from .base import BaseClient
from ..config import ERA_LIST_PATH, REQUEST_DELAY_SEC, WIKIPEDIA_BASE_URL
from typing import List, Dict
import logging

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

ERA_LIST_ANCHOR_ID = "日本の元号"


def parse_era_list(html: str, default_href: str = ERA_LIST_PATH) -> List[Dict[str, str]]:
    """
    Extract the ordered era list from the navigation box of an era article.

    Returns a list of {"name": ..., "href": ...} in chronological order.
    """
    soup = BeautifulSoup(html, "html.parser")
    anchor = soup.find(id=ERA_LIST_ANCHOR_ID)
    table = anchor
    for _ in range(3):
        table = table.parent if table is not None else None
    if table is None:
        raise RuntimeError("Gengou table not found!")

    gengous = []
    for link in table.select("li > a"):
        gengous.append({
            "name": link.get_text(),
            "href": link.get("href") or default_href,
        })
    return gengous


class WikipediaClient(BaseClient):
    """
    Client for Japanese Wikipedia era articles.
    Pages are fetched as rendered HTML; the tables are extracted offline.
    """

    def __init__(self, base_url: str = WIKIPEDIA_BASE_URL, **kwargs):
        kwargs.setdefault("rate_limit_sec", REQUEST_DELAY_SEC)
        super().__init__(**kwargs)
        self.base_url = base_url

    def fetch_era_list(self) -> List[Dict[str, str]]:
        """
        Fetches the 大化 article and reads the list of all eras from it.
        """
        html = self.request(
            "GET",
            self.base_url + ERA_LIST_PATH,
            cache_key="wikipedia_era_list_html",
            response_type="text",
        )
        gengous = parse_era_list(html)
        logger.info(f"Found {len(gengous)} eras")
        return gengous

    def fetch_era_page(self, href: str) -> str:
        """Fetches the HTML of a single era article (not cached; saved by the caller)."""
        return self.request("GET", self.base_url + href, response_type="text")
