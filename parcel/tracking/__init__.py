"""
Tracking module.
Fetches and scrapes tracking information for USPS, UPS, FedEx and DHL.
"""

from parcel.tracking.client import TrackingClient
from parcel.tracking.extractor import TrackingExtractor
from parcel.tracking.normalizer import DateNormalizer
from parcel.tracking.tracking_manager import TrackingManager

__all__ = ["TrackingClient", "TrackingExtractor", "DateNormalizer", "TrackingManager"]
