"""
Example CLI: print this machine's public IP, cached in a file for a day.

    pip install -e .[example]
    python main.py --cache-path ./origin_ip.cache --verbose
"""
from __future__ import annotations
import argparse, logging, sys
from typing import List, Optional

import requests
from pydantic import BaseModel
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from tote import Tote, ToteError

# -------------------------------
# Config
# -------------------------------
ORIGIN_URL = "https://httpbin.org/ip"
CACHE_PATH = "origin_ip.cache"
CACHE_TTL = 86400                 # seconds

logger = logging.getLogger(__name__)

# -------------------------------
# Retry session
# -------------------------------
def _retry_session(
    retries: int = 3,
    backoff_factor: float = 0.5,
    status_forcelist: tuple = (500, 502, 503, 504),
) -> requests.Session:
    s = requests.Session()
    r = Retry(
        total=retries,
        read=retries,
        connect=retries,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        raise_on_status=False,
    )
    a = HTTPAdapter(max_retries=r)
    s.mount("http://", a)
    s.mount("https://", a)
    return s

# -------------------------------
# Cached data
# -------------------------------
class OriginIp(BaseModel):
    origin: str

    @classmethod
    def fetch(cls) -> "OriginIp":
        with _retry_session() as session:
            r = session.get(ORIGIN_URL, timeout=20)
            r.raise_for_status()
            return cls(origin=r.json()["origin"])


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Show public IP (cached)")
    parser.add_argument("--cache-path", default=CACHE_PATH)
    parser.add_argument("--max-age", type=float, default=CACHE_TTL, help="seconds")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cache = Tote(OriginIp, args.cache_path, args.max_age)
    try:
        ip = cache.get()
    except ToteError as e:
        logger.error("could not get origin IP: %s", e)
        return 1
    print(ip.origin)
    return 0


if __name__ == "__main__":
    sys.exit(main())
