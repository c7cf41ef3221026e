import json
import logging
from pathlib import Path

from jwcrypto import jwk

from .errors import CredentialLoadError, SigningError

logger = logging.getLogger(__name__)


def load_credential(path) -> dict:
    """Read one verifiable credential from a JSON file."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise CredentialLoadError(path, e.strerror or str(e)) from e

    try:
        vc = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise CredentialLoadError(path, f"not UTF-8 text: {e}") from e
    except json.JSONDecodeError as e:
        raise CredentialLoadError(path, f"invalid JSON: {e}") from e

    logger.info("Loaded verifiable credential from %s", path)
    return vc


def load_private_key(pem: str | bytes) -> jwk.JWK:
    # PEMs kept in .env files usually carry literal "\n" sequences
    if isinstance(pem, str):
        pem = pem.replace("\\n", "\n").strip().encode("utf-8")

    try:
        return jwk.JWK.from_pem(pem)
    except (ValueError, TypeError) as e:
        raise SigningError(f"Invalid private key: {e}") from e


def read_private_key_file(path) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise SigningError(f"Cannot read private key file {path}: {e.strerror or e}") from e
