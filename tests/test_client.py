"""Tests for the tracking widget client."""

import asyncio

import pytest
from aiohttp import web
from aiohttp import test_utils

from parcel.config import USER_AGENT, ParcelConfig
from parcel.exceptions import TransportError
from parcel.models import Carrier
from parcel.tracking.client import TrackingClient


def config_for(server: test_utils.TestServer, **kwargs) -> ParcelConfig:
    url = str(server.make_url("/packagetrackingv2")) + "?packNum={}&carrier={}"
    return ParcelConfig(tracking_url=url, **kwargs)


class TestTrackingClient:
    """Tests for TrackingClient."""

    def test_build_url(self):
        """Test the default endpoint template."""
        client = TrackingClient(ParcelConfig())

        url = client.build_url("1Z999AA10123456784", Carrier.UPS)

        assert url == "https://www.bing.com/packagetrackingv2?packNum=1Z999AA10123456784&carrier=UPS"

    @pytest.mark.asyncio
    async def test_fetch_success(self):
        """Test the body is returned and the request carries the browser UA."""
        seen = {}

        async def handler(request):
            seen["query"] = dict(request.query)
            seen["user_agent"] = request.headers.get("User-Agent")
            return web.Response(text="<div>ok</div>", content_type="text/html")

        app = web.Application()
        app.router.add_get("/packagetrackingv2", handler)

        async with test_utils.TestServer(app) as server:
            body = await TrackingClient(config_for(server)).fetch("9400100000000000000000", Carrier.USPS)

        assert body == b"<div>ok</div>"
        assert seen["query"] == {"packNum": "9400100000000000000000", "carrier": "USPS"}
        assert seen["user_agent"] == USER_AGENT

    @pytest.mark.asyncio
    async def test_http_error(self):
        """Test non-2xx responses raise TransportError."""
        async def handler(request):
            return web.Response(status=503)

        app = web.Application()
        app.router.add_get("/packagetrackingv2", handler)

        async with test_utils.TestServer(app) as server:
            with pytest.raises(TransportError) as exc_info:
                await TrackingClient(config_for(server)).fetch("1234567", Carrier.DHL)

        assert exc_info.value.status == 503

    @pytest.mark.asyncio
    async def test_other_2xx_accepted(self):
        """Test any 2xx status is treated as success."""
        async def handler(request):
            return web.Response(status=203, text="<div>cached</div>", content_type="text/html")

        app = web.Application()
        app.router.add_get("/packagetrackingv2", handler)

        async with test_utils.TestServer(app) as server:
            body = await TrackingClient(config_for(server)).fetch("1234567", Carrier.UPS)

        assert body == b"<div>cached</div>"

    @pytest.mark.asyncio
    async def test_timeout(self):
        """Test slow responses raise TransportError."""
        async def handler(request):
            await asyncio.sleep(2)
            return web.Response(text="late")

        app = web.Application()
        app.router.add_get("/packagetrackingv2", handler)

        async with test_utils.TestServer(app) as server:
            client = TrackingClient(config_for(server, request_timeout=0.2))
            with pytest.raises(TransportError, match="timed out"):
                await client.fetch("1234567", Carrier.FEDEX)

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        """Test connection failures raise TransportError."""
        server = test_utils.TestServer(web.Application())
        await server.start_server()
        config = config_for(server)
        await server.close()

        with pytest.raises(TransportError):
            await TrackingClient(config).fetch("1234567", Carrier.UPS)
