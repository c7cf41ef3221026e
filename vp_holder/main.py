import asyncio
import json
import logging
import sys
import uuid
from datetime import datetime
from typing import Any, Callable, Optional

from .client import request_access_token, request_streetlights
from .config import Settings, load_settings
from .errors import ConfigurationError, HolderError
from .models import TimeWindow
from .presentation import assemble_presentation, build_claims, sign_claims
from .storage import load_credential, load_private_key, read_private_key_file

logger = logging.getLogger(__name__)


def signing_key(settings: Settings):
    pem = settings.PRIVATE_KEY
    if not pem.strip():
        pem = read_private_key_file(settings.PRIVATE_KEY_FILE)
    return load_private_key(pem)


async def run(settings: Settings, now: Optional[datetime] = None,
              new_id: Callable[[], uuid.UUID] = uuid.uuid4) -> Any:
    """Present the stored credential, trade it for a token and fetch the streetlights."""
    # One window for iat/nbf/exp and the ISO dates alike
    window = TimeWindow.starting_at(now)

    vc = load_credential(settings.CREDENTIAL_FILE)
    claims = build_claims(vc, window, new_id=new_id)
    vp_jwt = sign_claims(claims, signing_key(settings))
    presentation = assemble_presentation(claims, vp_jwt, vc)

    access_token = await request_access_token(
        settings.VC_VERIFIER_TOKEN_URL, presentation, timeout=settings.HTTP_TIMEOUT)
    return await request_streetlights(
        settings.CONTEXT_BROKER_URL, access_token, settings.CONTEXT_URL,
        timeout=settings.HTTP_TIMEOUT)


def main() -> int:
    logging.basicConfig(level=logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level)
        streetlights = asyncio.run(run(settings))
    except ConfigurationError as e:
        logger.error("%s", e)
        return 2
    except HolderError as e:
        logger.error("%s", e)
        return 1

    print(json.dumps(streetlights, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
