"""
parcel - parcel tracking from the command line.
Scrapes the Bing package tracking widget for USPS, UPS, FedEx and DHL.
"""

__version__ = "1.0.0"
