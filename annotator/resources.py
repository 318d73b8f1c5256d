"""Download of the typeface and background images.

The three resources are fetched concurrently on every request. They are not
cached: a request either gets all three or fails as a whole.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx

from annotator import config
from annotator.errors import ResourceFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceBundle:
    font: bytes
    animal_background: bytes
    brain_background: bytes


async def fetch_resources(client: httpx.AsyncClient) -> ResourceBundle:
    """Fetch the typeface and both backgrounds in parallel.

    Raises:
        ResourceFetchError: If any download fails. For non-success responses
            the message names all three status codes.
    """
    # Wait for all three requests so none is left running on the client.
    results = await asyncio.gather(
        client.get(config.FONT_URL),
        client.get(config.BASE_IMAGE_ANIMALS_URL),
        client.get(config.BASE_IMAGE_BRAIN_URL),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, httpx.HTTPError):
            logger.warning("Resource download failed: %s", result)
            raise ResourceFetchError(f"Failed to download resources: {result}") from result
        if isinstance(result, BaseException):
            raise result
    font_resp, animals_resp, brain_resp = results

    logger.debug(
        "Resource statuses: font=%s animals=%s brain=%s",
        font_resp.status_code, animals_resp.status_code, brain_resp.status_code,
    )
    if not (font_resp.is_success and animals_resp.is_success and brain_resp.is_success):
        error = ResourceFetchError.from_statuses(
            font_resp.status_code, animals_resp.status_code, brain_resp.status_code
        )
        logger.warning("%s", error)
        raise error

    return ResourceBundle(
        font=font_resp.content,
        animal_background=animals_resp.content,
        brain_background=brain_resp.content,
    )
