"""
Holder-side presentation flow: present a stored verifiable credential to a
verifier, trade it for an access token and read NGSI-LD entities with it.
"""

from .errors import (
    ConfigurationError,
    ConfigurationInvalid,
    ConfigurationMissing,
    CredentialLoadError,
    HolderError,
    MalformedCredential,
    ResourceFetchFailed,
    SigningError,
    TokenExchangeFailed,
)
from .models import PresentationClaims, TimeWindow, VerifiablePresentation
from .presentation import assemble_presentation, build_claims, sign_claims
from .client import encode_vp_token, request_access_token, request_streetlights

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConfigurationInvalid",
    "ConfigurationMissing",
    "CredentialLoadError",
    "HolderError",
    "MalformedCredential",
    "ResourceFetchFailed",
    "SigningError",
    "TokenExchangeFailed",
    "PresentationClaims",
    "TimeWindow",
    "VerifiablePresentation",
    "assemble_presentation",
    "build_claims",
    "sign_claims",
    "encode_vp_token",
    "request_access_token",
    "request_streetlights",
]
