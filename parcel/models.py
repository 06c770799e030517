"""
Data models for parcel.
Defines the tracking result produced by the extractor and handed to output.

Flow:
1. Validate tracking number and carrier
2. Fetch the tracking widget HTML
3. Extract delivery status and update rows
4. Normalize dates
5. Serialize the result as JSON or pickle
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class Carrier(str, Enum):
    """Carriers supported by the tracking endpoint."""
    DHL = "DHL"
    FEDEX = "FEDEX"
    UPS = "UPS"
    USPS = "USPS"


class TrackingUpdate(BaseModel):
    """A single status event in a shipment's history."""

    # RFC 3339 when the source date could be parsed, otherwise the raw text
    date_time: str = Field(alias="dateTime")
    location: str
    status: str

    class Config:
        populate_by_name = True
        frozen = True


class TrackingResult(BaseModel):
    """Tracking information scraped for one tracking number."""

    tracking_num: str = Field(default="", alias="trackingNum")
    carrier: Optional[Carrier] = None

    # Status
    delivered: bool = False
    delivery_date_time: str = Field(default="", alias="deliveryDateTime")

    # Most recent first, as emitted by the source
    updates: list[TrackingUpdate] = Field(default_factory=list)

    class Config:
        populate_by_name = True
        frozen = True
        use_enum_values = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize with wire field names, omitting empty optional fields."""
        data = self.model_dump(by_alias=True, mode="json")
        if not data["deliveryDateTime"]:
            data.pop("deliveryDateTime")
        if not data["updates"]:
            data.pop("updates")
        return data
