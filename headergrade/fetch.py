"""Resolve a URL (or a saved response) into a header map for the analyzer."""

import logging
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from headergrade.exceptions import FetchError

logger = logging.getLogger(__name__)

MAX_RETRIES = 3
BACKOFF_FACTOR = 1.0
DEFAULT_TIMEOUT = 5
RETRY_STATUSES = (500, 502, 503, 504)

REQUEST_HEADERS = {
    "User-Agent": ("Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
                   "(KHTML, like Gecko) Chrome/134.0.0.0 Safari/537.36"),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Upgrade-Insecure-Requests": "1",
}


def ensure_scheme(url):
    """Default to HTTPS if no scheme provided."""
    if not urlparse(url).scheme:
        return f"https://{url}"
    return url


def build_session(retries=MAX_RETRIES, backoff_factor=BACKOFF_FACTOR):
    """A requests session that makes at most ``retries`` attempts per request.

    Connection errors, read timeouts and 5xx gateway statuses are retried
    with exponential backoff; the last 5xx response is returned, not raised.
    """
    session = requests.Session()
    extra_attempts = max(retries, 1) - 1
    retry = Retry(
        total=extra_attempts,
        connect=extra_attempts,
        read=extra_attempts,
        status=extra_attempts,
        backoff_factor=backoff_factor,
        status_forcelist=RETRY_STATUSES,
        raise_on_status=False,
    )
    session.mount("http://", HTTPAdapter(max_retries=retry))
    session.mount("https://", HTTPAdapter(max_retries=retry))
    session.headers.update(REQUEST_HEADERS)
    return session


def fetch_headers(url, follow_redirects=True, verify_ssl=True, timeout=DEFAULT_TIMEOUT,
                  retries=MAX_RETRIES):
    """GET a URL and return (headers, status_code, final_url)."""
    url = ensure_scheme(url)

    try:
        with build_session(retries) as session:
            response = session.get(
                url,
                timeout=timeout,
                allow_redirects=follow_redirects,
                verify=verify_ssl,
            )
    except requests.exceptions.SSLError as e:
        raise FetchError(f"SSL certificate verification failed for {url}. "
                         "Use --no-verify to bypass.") from e
    except requests.exceptions.TooManyRedirects as e:
        raise FetchError(f"Too many redirects for {url}") from e
    except (requests.exceptions.ConnectionError, requests.exceptions.Timeout,
            requests.exceptions.RetryError) as e:
        raise FetchError(f"Unable to connect to {url} after {retries} attempts: {e}") from e
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Error fetching headers from {url}: {e}") from e

    if not follow_redirects and 300 <= response.status_code < 400:
        logger.warning(f"Received redirect to {response.headers.get('Location', '')}; "
                       "analyzing the redirect response itself")
    elif not 200 <= response.status_code < 300:
        raise FetchError(f"{url} returned status code {response.status_code}")

    return dict(response.headers), response.status_code, response.url or url


def parse_raw_headers(lines):
    """Parse an optional status line plus ``Name: value`` lines.

    Returns (headers, status_code).  Repeated names are merged with ", ".
    """
    headers = {}
    status_code = None

    for index, line in enumerate(lines):
        line = line.strip()
        if index == 0 and line.startswith("HTTP/"):
            try:
                status_code = int(line.split()[1])
            except (ValueError, IndexError):
                status_code = None
            continue
        if not line or line.startswith("#") or ":" not in line:
            continue

        key, value = line.split(":", 1)
        key, value = key.strip(), value.strip()
        existing = next((k for k in headers if k.lower() == key.lower()), None)
        if existing is not None:
            headers[existing] = f"{headers[existing]}, {value}"
        else:
            headers[key] = value

    return headers, status_code


def read_headers_from_file(file_path):
    """Read a saved response head; returns (headers, status_code, file_path)."""
    try:
        with open(file_path, "r") as file:
            headers, status_code = parse_raw_headers(file.readlines())
    except OSError as e:
        raise FetchError(f"Error reading headers from {file_path}: {e}") from e
    return headers, status_code, file_path
