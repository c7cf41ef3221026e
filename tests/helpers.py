"""Decoding helpers for checking what the holder produced."""

import base64
import json

from jwcrypto import jwt


def jwt_header(token: str) -> dict:
    segment = token.split(".")[0]
    return json.loads(base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4)))


def decode_vp_token(vp_token: str) -> dict:
    padded = vp_token + "=" * (-len(vp_token) % 4)
    return json.loads(base64.b64decode(padded).decode("utf-8"))


def verified_claims(token: str, public_key) -> dict:
    """Check the RS256 signature and return the claims, ignoring time claims."""
    verified = jwt.JWT(jwt=token, key=public_key, algs=["RS256"], check_claims=False)
    return json.loads(verified.claims)
