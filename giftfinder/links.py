from enum import Enum
from typing import Any, Tuple
from urllib.parse import quote, urlsplit

from . import config
from .errors import InvalidLinkError
from .logger import get_logger

log = get_logger(__name__, component="links")

NO_LINK = "#"

AMAZON_DOMAINS = (
    "amazon.com", "amazon.co.uk", "amazon.ca", "amazon.de",
    "amazon.fr", "amazon.it", "amazon.es", "amazon.co.jp",
    "amazon.com.au", "amazon.in",
)


class Retailer(str, Enum):
    AMAZON = "amazon"
    ETSY = "etsy"
    TARGET = "target"
    BEST_BUY = "bestbuy"
    UNKNOWN = "unknown"


def retailer_for_host(host: str) -> Retailer:
    # Checked in priority order; Amazon wins over everything else.
    h = (host or "").lower()
    if any(d in h for d in AMAZON_DOMAINS):
        return Retailer.AMAZON
    if "etsy.com" in h:
        return Retailer.ETSY
    if "target.com" in h:
        return Retailer.TARGET
    if "bestbuy.com" in h:
        return Retailer.BEST_BUY
    return Retailer.UNKNOWN


def _search_term(gift_name: Any) -> str:
    # Same escaping as encodeURIComponent; unpaired surrogates become "?"
    if not gift_name:
        return ""
    return quote(str(gift_name), safe="-_.!~*'()", errors="replace")


def parse_host(link: str) -> Tuple[str, str]:
    """Returns (scheme, hostname) for an absolute URL or raises InvalidLinkError."""
    try:
        parts = urlsplit(link.strip())
        host = parts.hostname
        parts.port  # non-numeric or out-of-range ports raise here
    except ValueError as exc:
        raise InvalidLinkError(f"Invalid URL: {link!r}") from exc
    if not parts.scheme or not host or any(ch.isspace() for ch in parts.netloc):
        raise InvalidLinkError(f"Invalid URL: {link!r}")
    return parts.scheme, host


def process_retailer_link(original_link: Any, gift_name: Any) -> str:
    """
    Turns a model-supplied purchase link into a retailer search for the gift name.
    Amazon searches carry the associate tag. Unknown sites pass through untouched.
    Never raises: anything unusable becomes "#".
    """
    if not isinstance(original_link, str) or not original_link.strip():
        log.warning("empty_purchase_link", link=repr(original_link))
        return NO_LINK

    try:
        _, host = parse_host(original_link)
    except InvalidLinkError as exc:
        log.warning("invalid_purchase_link", link=original_link, error=str(exc))
        return NO_LINK

    retailer = retailer_for_host(host)
    if retailer is Retailer.UNKNOWN:
        return original_link

    term = _search_term(gift_name)

    if retailer is Retailer.AMAZON:
        return f"https://{host}/s?k={term}&tag={config.AMAZON_ASSOCIATE_TAG}"
    if retailer is Retailer.ETSY:
        return f"https://www.etsy.com/search?q={term}"
    if retailer is Retailer.TARGET:
        return f"https://www.target.com/s?searchTerm={term}"
    return f"https://www.bestbuy.com/site/searchpage.jsp?st={term}"


def has_purchase_link(link: Any) -> bool:
    return isinstance(link, str) and bool(link.strip()) and link != NO_LINK
