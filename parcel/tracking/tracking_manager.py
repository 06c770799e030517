"""
Tracking Manager.
Coordinates validation, fetching and extraction for a tracking lookup.
"""

import asyncio
import io
from typing import Optional
from loguru import logger

from parcel.config import ParcelConfig
from parcel.models import TrackingResult
from parcel.tracking.client import TrackingClient
from parcel.tracking.extractor import TrackingExtractor
from parcel.tracking.normalizer import DateNormalizer, resolve_timezone
from parcel.tracking.validation import sanitize_tracking_number, validate_carrier


class TrackingManager:
    """
    Manages a tracking lookup.

    Steps:
    - Sanitize tracking number and validate carrier
    - Fetch the tracking widget
    - Extract delivery status and updates
    - Annotate the result with tracking number and carrier
    """

    def __init__(
        self,
        config: ParcelConfig,
        client: Optional[TrackingClient] = None,
        normalizer: Optional[DateNormalizer] = None,
    ):
        self.config = config
        self.client = client or TrackingClient(config)
        self.normalizer = normalizer or DateNormalizer(resolve_timezone(config.timezone))
        self.extractor = TrackingExtractor(self.normalizer)

    async def get_tracking(self, tracking_number: str, carrier: str) -> TrackingResult:
        """
        Get tracking information for a shipment.

        Args:
            tracking_number: Tracking number as entered by the user
            carrier: Carrier code, any case

        Returns:
            TrackingResult

        Raises:
            InputValidationError: Before any request is made
            TransportError: If the fetch fails
            SourceFormatError: If the response cannot be parsed
        """
        number = sanitize_tracking_number(tracking_number)
        code = validate_carrier(carrier)

        body = await self.client.fetch(number, code)
        result = self.extractor.parse(io.BytesIO(body))

        result = result.model_copy(update={"tracking_num": number, "carrier": code.value})
        if not result.updates:
            logger.warning("tracking number updates not found")
        else:
            logger.info(f"Tracking {number}: {len(result.updates)} updates, delivered={result.delivered}")

        return result

    def track(self, tracking_number: str, carrier: str) -> TrackingResult:
        """Synchronous wrapper around get_tracking."""
        return asyncio.run(self.get_tracking(tracking_number, carrier))
