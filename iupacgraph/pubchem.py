"""
PubChem PUG REST lookups by compound name.

Used to fetch reference data (IUPAC name, InChI) for a compound so the graph
built from its name can be checked against an independent source.
"""

import time
from typing import Optional
from urllib.parse import quote

import requests
from loguru import logger

from .config import get_settings
from .errors import PubChemError


class PubChemClient:
    """Thin wrapper over a requests session with a minimum gap between calls."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        min_request_interval: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.get("pubchem", "base_url")).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.get("pubchem", "timeout")
        self.min_request_interval = (
            min_request_interval
            if min_request_interval is not None
            else settings.get("pubchem", "min_request_interval")
        )
        self.session = session or requests.Session()
        self._last_request: Optional[float] = None

    def _rate_limit(self):
        if self._last_request is not None:
            elapsed = time.monotonic() - self._last_request
            if elapsed < self.min_request_interval:
                time.sleep(self.min_request_interval - elapsed)
        self._last_request = time.monotonic()

    def compound_property(self, name: str, prop: str) -> str:
        """
        Fetch one property of the compound called `name`.

        Raises:
            PubChemError: On HTTP failure or when the property is missing
        """
        url = f"{self.base_url}/compound/name/{quote(name, safe='')}/property/{prop}/JSON"
        self._rate_limit()
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise PubChemError(f"PubChem request for {name!r} failed: {e}") from e
        except ValueError as e:
            raise PubChemError(f"PubChem returned invalid JSON for {name!r}") from e

        try:
            return data["PropertyTable"]["Properties"][0][prop]
        except (KeyError, IndexError, TypeError):
            raise PubChemError(f"PubChem has no {prop} for {name!r}") from None

    def iupac_name(self, name: str) -> str:
        return self.compound_property(name, "IUPACName")

    def inchi(self, name: str) -> str:
        return self.compound_property(name, "InChI")
