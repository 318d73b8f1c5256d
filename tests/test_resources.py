"""Tests for the parallel resource download."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from annotator import config
from annotator.errors import ResourceFetchError
from annotator.resources import fetch_resources


async def _fetch(client: httpx.AsyncClient):
    async with client:
        return await fetch_resources(client)


def test_fetch_resources_returns_bundle(resource_server, font_bytes, animal_background, brain_background):
    bundle = asyncio.run(_fetch(resource_server.client()))
    assert bundle.font == font_bytes
    assert bundle.animal_background == animal_background
    assert bundle.brain_background == brain_background
    assert len(resource_server.requests) == 3


def test_fetch_resources_reports_all_statuses(resource_server):
    resource_server.set_status(config.BASE_IMAGE_BRAIN_URL, 503)
    with pytest.raises(ResourceFetchError) as excinfo:
        asyncio.run(_fetch(resource_server.client()))
    assert excinfo.value.statuses == (200, 200, 503)
    assert str(excinfo.value) == "Failed to download resources. Font: 200, Animals: 200, Brain: 503"


def test_fetch_resources_wraps_transport_errors():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    with pytest.raises(ResourceFetchError) as excinfo:
        asyncio.run(_fetch(client))
    assert excinfo.value.statuses is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_fetch_resources_waits_for_every_request(resource_server):
    brain_url = str(httpx.URL(config.BASE_IMAGE_BRAIN_URL))

    def handler(request):
        if str(request.url) == brain_url:
            raise httpx.ReadTimeout("timed out", request=request)
        return resource_server.handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    with pytest.raises(ResourceFetchError) as excinfo:
        asyncio.run(_fetch(client))
    assert isinstance(excinfo.value.__cause__, httpx.ReadTimeout)
    assert len(resource_server.requests) == 2
