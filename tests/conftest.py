import json
from datetime import datetime, timezone

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jwcrypto import jwk

from vp_holder.models import TimeWindow

ISSUER = "did:example:123"


@pytest.fixture(scope="session")
def rsa_pem():
    """PEM-encoded RSA private key."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("ascii")


@pytest.fixture(scope="session")
def private_key(rsa_pem):
    return jwk.JWK.from_pem(rsa_pem.encode("ascii"))


@pytest.fixture(scope="session")
def public_key(private_key):
    return jwk.JWK.from_json(private_key.export_public())


@pytest.fixture
def credential():
    return {
        "@context": ["https://www.w3.org/2018/credentials/v1"],
        "type": ["VerifiableCredential", "StreetlightOperatorCredential"],
        "issuer": ISSUER,
        "issuanceDate": "2024-01-01T00:00:00Z",
        "credentialSubject": {"id": "did:example:operator", "role": "operator"},
        "proof": {"type": "JwtProof2020", "jwt": "eyJ..."},
    }


@pytest.fixture
def window():
    return TimeWindow.starting_at(datetime(2024, 5, 1, 12, 0, 0, 250000, tzinfo=timezone.utc))


@pytest.fixture
def credential_file(tmp_path, credential):
    path = tmp_path / "verifiable-credential.json"
    path.write_text(json.dumps(credential), encoding="utf-8")
    return path
