"""
Tracking widget client.
Fetches the tracking HTML for a tracking number from the Bing package
tracking endpoint, which covers USPS, UPS, FedEx and DHL.
"""

import asyncio
import aiohttp
from loguru import logger

from parcel.config import ParcelConfig
from parcel.exceptions import TransportError
from parcel.models import Carrier


class TrackingClient:
    """
    Client for the package tracking endpoint.

    The endpoint is unofficial and undocumented; it answers with an HTML
    fragment rather than JSON. Requests are not retried.
    """

    def __init__(self, config: ParcelConfig):
        self.config = config

    def build_url(self, tracking_number: str, carrier: Carrier) -> str:
        return self.config.tracking_url.format(tracking_number, Carrier(carrier).value)

    async def fetch(self, tracking_number: str, carrier: Carrier) -> bytes:
        """
        Fetch the tracking widget for a sanitized tracking number.

        Args:
            tracking_number: Sanitized tracking number
            carrier: Carrier code

        Returns:
            Raw response body

        Raises:
            TransportError: On connection errors, timeouts and non-200 responses
        """
        url = self.build_url(tracking_number, carrier)
        headers = {"User-Agent": self.config.user_agent}
        timeout = aiohttp.ClientTimeout(total=self.config.request_timeout)

        logger.debug(f"GET {url}")
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, headers=headers) as resp:
                    if resp.status >= 300:
                        raise TransportError(
                            f"Tracking request failed: HTTP {resp.status}",
                            status=resp.status,
                        )
                    body = await resp.read()

        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Tracking request timed out after {self.config.request_timeout}s"
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Tracking request failed: {e}") from e

        logger.debug(f"Received {len(body)} bytes for {tracking_number}")
        return body
