"""Tests for the tracking manager."""

import pytest

from parcel.config import ParcelConfig
from parcel.exceptions import InputValidationError, SourceFormatError, TransportError
from parcel.tracking.tracking_manager import TrackingManager


class FakeClient:
    """Client returning a canned body."""

    def __init__(self, body: bytes = b"", error: Exception = None):
        self.body = body
        self.error = error
        self.calls = []

    async def fetch(self, tracking_number, carrier):
        self.calls.append((tracking_number, carrier))
        if self.error:
            raise self.error
        return self.body


class TestTrackingManager:
    """Tests for TrackingManager."""

    def test_track_annotates_result(self, normalizer, widget_html):
        """Test the result carries the sanitized number and carrier."""
        client = FakeClient(widget_html)
        manager = TrackingManager(ParcelConfig(), client=client, normalizer=normalizer)

        result = manager.track("9400 1000 0000 0000 0000 00", "usps")

        assert client.calls == [("9400100000000000000000", "USPS")]
        assert result.tracking_num == "9400100000000000000000"
        assert result.carrier == "USPS"
        assert result.delivered is True
        assert len(result.updates) == 2

    def test_invalid_number_not_fetched(self, normalizer):
        """Test validation fails before any request."""
        client = FakeClient()
        manager = TrackingManager(ParcelConfig(), client=client, normalizer=normalizer)

        with pytest.raises(InputValidationError):
            manager.track("123", "ups")

        assert client.calls == []

    def test_invalid_carrier_not_fetched(self, normalizer):
        """Test carrier validation fails before any request."""
        client = FakeClient()
        manager = TrackingManager(ParcelConfig(), client=client, normalizer=normalizer)

        with pytest.raises(InputValidationError):
            manager.track("1Z999AA10123456784", "royalmail")

        assert client.calls == []

    def test_transport_error_propagates(self, normalizer):
        """Test fetch failures abort the lookup."""
        client = FakeClient(error=TransportError("boom"))
        manager = TrackingManager(ParcelConfig(), client=client, normalizer=normalizer)

        with pytest.raises(TransportError):
            manager.track("1Z999AA10123456784", "ups")

    def test_no_updates(self, normalizer):
        """Test a page without updates still returns a result."""
        manager = TrackingManager(ParcelConfig(), client=FakeClient(b"<html></html>"), normalizer=normalizer)

        result = manager.track("1Z999AA10123456784", "ups")

        assert result.updates == []
        assert result.to_dict() == {"trackingNum": "1Z999AA10123456784", "carrier": "UPS", "delivered": False}

    def test_parse_error_propagates(self, normalizer, monkeypatch):
        """Test parse failures abort the lookup."""
        manager = TrackingManager(ParcelConfig(), client=FakeClient(b"<html></html>"), normalizer=normalizer)

        def fail(stream):
            raise SourceFormatError("bad page")

        monkeypatch.setattr(manager.extractor, "parse", fail)

        with pytest.raises(SourceFormatError):
            manager.track("1Z999AA10123456784", "ups")

    def test_timezone_from_config(self):
        """Test the normalizer uses the configured zone."""
        manager = TrackingManager(ParcelConfig(timezone="UTC"), client=FakeClient())

        html = b'<div class="b_focusTextSmall">Estimated delivery: Monday, January 2, 2025</div>'
        manager.client.body = html
        result = manager.track("1Z999AA10123456784", "ups")

        assert result.delivery_date_time == "2025-01-02T00:00:00Z"
