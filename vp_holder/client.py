"""
HTTP side of the flow: exchanging a presentation for an access token and
reading entities from the NGSI-LD context broker.
"""

import base64
import json
import logging
from typing import Any

import httpx

from .errors import ResourceFetchFailed, TokenExchangeFailed
from .models import VerifiablePresentation

logger = logging.getLogger(__name__)

JSON_LD_CONTEXT_REL = "http://www.w3.org/ns/json-ld#context"
ENTITY_TYPE = "Streetlight"


def encode_vp_token(presentation: VerifiablePresentation) -> str:
    """Base64 of the compact JSON presentation, without ``=`` padding."""
    raw = json.dumps(presentation.to_document(), separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(raw.encode("utf-8")).decode("ascii").rstrip("=")


def context_link_header(context_url: str) -> str:
    return f'<{context_url}>; rel="{JSON_LD_CONTEXT_REL}"; type="application/ld+json"'


async def request_access_token(token_url: str, presentation: VerifiablePresentation,
                               timeout: float | None = None) -> str:
    """
    Present ``presentation`` with the ``vp_token`` grant and return the
    bearer token from the verifier's response.

    Raises:
        TokenExchangeFailed: on transport errors, a non-2xx status, or a
            response without ``access_token``
    """
    form = {
        "grant_type": "vp_token",
        "vp_token": encode_vp_token(presentation),
        "presentation_submission": "",
        "scope": "",
    }

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            r = await client.post(
                token_url,
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
            )
    except httpx.HTTPError as e:
        raise TokenExchangeFailed(token_url, None, str(e)) from e

    if not r.is_success:
        raise TokenExchangeFailed(token_url, r.status_code, r.text)

    try:
        data = r.json()
    except ValueError as e:
        raise TokenExchangeFailed(token_url, r.status_code, r.text) from e

    access_token = data.get("access_token") if isinstance(data, dict) else None
    if not isinstance(access_token, str) or not access_token:
        raise TokenExchangeFailed(token_url, r.status_code, r.text)

    logger.info("Obtained access token from %s", token_url)
    return access_token


async def request_streetlights(broker_url: str, access_token: str, context_url: str,
                               timeout: float | None = None) -> Any:
    """Fetch every Streetlight entity visible to ``access_token``."""
    url = f"{broker_url.rstrip('/')}/ngsi-ld/v1/entities"
    headers = {
        "Authorization": f"Bearer {access_token}",
        "Link": context_link_header(context_url),
    }

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            r = await client.get(url, params={"type": ENTITY_TYPE}, headers=headers)
    except httpx.HTTPError as e:
        raise ResourceFetchFailed(url, None, str(e)) from e

    if not r.is_success:
        raise ResourceFetchFailed(str(r.request.url), r.status_code, r.text)

    try:
        entities = r.json()
    except ValueError as e:
        raise ResourceFetchFailed(str(r.request.url), r.status_code, r.text) from e

    logger.info("Fetched %s entities from %s",
                len(entities) if isinstance(entities, list) else "?", broker_url)
    return entities
