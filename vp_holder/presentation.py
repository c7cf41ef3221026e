import logging
import uuid
from typing import Any, Callable, Mapping

from jwcrypto import jwk, jwt
from jwcrypto.common import JWException

from .errors import MalformedCredential, SigningError
from .models import (
    JwtProof,
    PresentationBody,
    PresentationClaims,
    PresentationRef,
    TimeWindow,
    VerifiablePresentation,
)

logger = logging.getLogger(__name__)

SIGNING_ALG = "RS256"


def credential_issuer(vc: Mapping[str, Any]) -> str:
    if not isinstance(vc, Mapping):
        raise MalformedCredential("Verifiable credential must be a JSON object")
    issuer = vc.get("issuer")
    if not isinstance(issuer, str) or not issuer.strip():
        raise MalformedCredential("Verifiable credential has no 'issuer'")
    return issuer


def build_claims(vc: Mapping[str, Any], window: TimeWindow,
                 new_id: Callable[[], uuid.UUID] = uuid.uuid4) -> PresentationClaims:
    """
    Build the JWT claim-set presenting ``vc``.

    The credential issuer acts as holder and subject. ``nonce``, ``jti`` and
    the inner ``vp.id`` are drawn from ``new_id`` separately on every call.
    """
    issuer = credential_issuer(vc)

    return PresentationClaims(
        iss=issuer,
        sub=issuer,
        iat=window.iat,
        nbf=window.iat,
        exp=window.exp,
        nonce=str(new_id()),
        jti=str(new_id()),
        vp=PresentationBody(
            id=f"urn:uuid:{new_id()}",
            holder=issuer,
            verifiableCredential=[vc],
        ),
    )


def sign_claims(claims: PresentationClaims, private_key: jwk.JWK) -> str:
    """Sign the claim-set as a compact RS256 JWT whose ``kid`` is the issuer."""
    if not isinstance(private_key, jwk.JWK):
        raise SigningError("Signing key must be a JWK")
    if private_key.get("kty") != "RSA" or not private_key.has_private:
        raise SigningError(f"{SIGNING_ALG} needs an RSA private key, got {private_key.get('kty')}")

    token = jwt.JWT(
        header={
            "typ": "JWT",
            "alg": SIGNING_ALG,
            "kid": claims.iss,
        },
        claims=claims.to_payload(),
    )
    try:
        token.make_signed_token(private_key)
        vp_jwt = token.serialize()
    except (JWException, ValueError, TypeError) as e:
        raise SigningError(f"Failed to sign presentation: {e}") from e

    logger.info("Signed presentation %s with kid %s", claims.jti, claims.iss)
    return vp_jwt


def assemble_presentation(claims: PresentationClaims, vp_jwt: str,
                          vc: Mapping[str, Any]) -> VerifiablePresentation:
    """Restructure signed claims into the document the verifier expects."""
    window = TimeWindow.from_epochs(claims.iat, claims.exp)

    return VerifiablePresentation(
        sub=claims.sub,
        iat=claims.iat,
        nonce=claims.nonce,
        vp=PresentationRef(id=claims.vp.id, holder=claims.vp.holder),
        verifiableCredential=[vc],
        holder=claims.iss,
        id=claims.jti,
        issuanceDate=window.issuance_date,
        expirationDate=window.expiration_date,
        proof=JwtProof(jwt=vp_jwt),
    )
