"""HTTP client for the external geocoding provider."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence

import httpx

from ...config import settings
from ..geospatial import is_valid_coordinate
from .models import Coordinate, GeocodeOutcome

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"
STATUS_NO_API_KEY = "NO_API_KEY"
STATUS_HTTP_ERROR = "HTTP_ERROR"
STATUS_NETWORK_ERROR = "NETWORK_ERROR"
STATUS_INVALID_RESPONSE = "INVALID_RESPONSE"
STATUS_UNEXPECTED_ERROR = "UNEXPECTED_ERROR"

logger = logging.getLogger(__name__)


class GeocoderClient:
    """Resolves free-text addresses to coordinates, one provider request per address.

    Provider failures never raise: every lookup ends in a :class:`GeocodeOutcome`
    whose coordinate is ``None`` when the address could not be resolved.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_parallel_requests: int | None = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.base_url = base_url or settings.geocoding_base_url
        self.timeout = timeout if timeout is not None else settings.geocoding_timeout_seconds
        self.max_parallel_requests = max_parallel_requests or settings.geocoding_max_parallel_requests

    def _get_client(self) -> httpx.Client:
        """Create a fresh HTTP client; each worker thread uses its own."""
        return httpx.Client(timeout=httpx.Timeout(self.timeout))

    def lookup(self, address: str, index: int = 0) -> GeocodeOutcome:
        """Geocode ``address`` and keep the provider status alongside the result."""
        if not self.api_key:
            logger.error("Geocoding API key is not configured.")
            return GeocodeOutcome(index=index, address=address, coordinate=None, status=STATUS_NO_API_KEY)

        params = {"address": address, "key": self.api_key}
        client = self._get_client()
        try:
            response = client.get(self.base_url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Geocoding API HTTP error for '{address}': {exc.response.status_code}")
            return GeocodeOutcome(index=index, address=address, coordinate=None, status=STATUS_HTTP_ERROR)
        except httpx.HTTPError as exc:
            logger.error(f"Error fetching geocoding data for '{address}': {exc}")
            return GeocodeOutcome(index=index, address=address, coordinate=None, status=STATUS_NETWORK_ERROR)
        except ValueError as exc:
            logger.error(f"Geocoding API returned invalid JSON for '{address}': {exc}")
            return GeocodeOutcome(index=index, address=address, coordinate=None, status=STATUS_INVALID_RESPONSE)
        finally:
            client.close()

        return self._parse(address, index, data)

    def _parse(self, address: str, index: int, data: object) -> GeocodeOutcome:
        if not isinstance(data, dict):
            logger.error(f"Geocoding API returned an unexpected payload for '{address}'.")
            return GeocodeOutcome(index=index, address=address, coordinate=None, status=STATUS_INVALID_RESPONSE)

        status = str(data.get("status", STATUS_INVALID_RESPONSE))
        results = data.get("results") or []
        if status == STATUS_OK and results:
            try:
                location = results[0]["geometry"]["location"]
                coordinate = Coordinate(float(location["lat"]), float(location["lng"]))
            except (KeyError, IndexError, TypeError, ValueError) as exc:
                logger.error(f"Geocoding API result for '{address}' has no usable location: {exc}")
                return GeocodeOutcome(index=index, address=address, coordinate=None, status=STATUS_INVALID_RESPONSE)
            if not is_valid_coordinate(coordinate):
                logger.error(f"Geocoding API returned an out-of-range location for '{address}': {coordinate}")
                return GeocodeOutcome(index=index, address=address, coordinate=None, status=STATUS_INVALID_RESPONSE)
            return GeocodeOutcome(index=index, address=address, coordinate=coordinate, status=STATUS_OK)

        if status == STATUS_ZERO_RESULTS:
            logger.warning(f"Geocoding API: no results for address '{address}'")
        else:
            logger.error(f"Geocoding API error for '{address}': {status}")
        return GeocodeOutcome(index=index, address=address, coordinate=None, status=status)

    def geocode(self, address: str) -> Coordinate | None:
        """Return the first result's coordinate for ``address`` or ``None`` when not found."""
        return self.lookup(address).coordinate

    def _safe_lookup(self, address: str, index: int) -> GeocodeOutcome:
        try:
            return self.lookup(address, index)
        except Exception as exc:
            logger.exception(f"Unexpected error geocoding '{address}': {exc}")
            return GeocodeOutcome(index=index, address=address, coordinate=None, status=STATUS_UNEXPECTED_ERROR)

    def geocode_many(self, addresses: Sequence[str]) -> list[GeocodeOutcome]:
        """Geocode all addresses concurrently, returning outcomes in input order."""
        if not addresses:
            return []

        start_time = time.time()
        outcomes: list[GeocodeOutcome | None] = [None] * len(addresses)
        workers = min(self.max_parallel_requests, len(addresses))

        with ThreadPoolExecutor(max_workers=workers) as executor:
            future_to_index = {
                executor.submit(self._safe_lookup, address, index): index
                for index, address in enumerate(addresses)
            }
            for future in as_completed(future_to_index):
                index = future_to_index[future]
                outcomes[index] = future.result()

        resolved = sum(1 for outcome in outcomes if outcome is not None and outcome.resolved)
        logger.info(
            f"Geocoded {resolved}/{len(addresses)} addresses in {time.time() - start_time:.2f}s "
            f"(max {workers} concurrent)"
        )
        return [outcome for outcome in outcomes if outcome is not None]


def check_health(client: GeocoderClient | None = None) -> bool:
    """Probe the provider with a well-known address.

    ``ZERO_RESULTS`` still counts as healthy: the provider answered and accepted the key.
    """
    geocoder = client or GeocoderClient()
    if not geocoder.api_key:
        return False
    try:
        outcome = geocoder.lookup("1600 Amphitheatre Parkway, Mountain View, CA")
    except Exception:
        return False
    return outcome.status in (STATUS_OK, STATUS_ZERO_RESULTS)
