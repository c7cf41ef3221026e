from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

VC_CONTEXT = "https://www.w3.org/2018/credentials/v1"
VP_TYPE = ["VerifiablePresentation"]
PROOF_TYPE = "JwtProof2020"

# Lifetime of a presentation, in seconds
PRESENTATION_VALIDITY = 30


def iso_timestamp(moment: datetime) -> str:
    """Render an aware datetime as ``2024-01-31T12:00:00.000Z``."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class TimeWindow:
    """
    Validity window of one presentation.

    Both the epoch seconds used in the JWT and the ISO strings used in the
    presentation document are read from the same two datetimes.
    """
    issued_at: datetime
    expires_at: datetime

    @classmethod
    def starting_at(cls, now: Optional[datetime] = None, validity: int = PRESENTATION_VALIDITY):
        if now is None:
            now = datetime.now(timezone.utc)
        elif now.tzinfo is None:
            raise ValueError("TimeWindow needs a timezone-aware datetime")
        issued_at = now.astimezone(timezone.utc).replace(microsecond=0)
        return cls(issued_at=issued_at, expires_at=issued_at + timedelta(seconds=validity))

    @classmethod
    def from_epochs(cls, iat: int, exp: int):
        return cls(
            issued_at=datetime.fromtimestamp(iat, timezone.utc),
            expires_at=datetime.fromtimestamp(exp, timezone.utc),
        )

    @property
    def iat(self) -> int:
        return int(self.issued_at.timestamp())

    @property
    def exp(self) -> int:
        return int(self.expires_at.timestamp())

    @property
    def issuance_date(self) -> str:
        return iso_timestamp(self.issued_at)

    @property
    def expiration_date(self) -> str:
        return iso_timestamp(self.expires_at)


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class PresentationBody(_Document):
    context: List[str] = Field(default_factory=lambda: [VC_CONTEXT], alias="@context")
    id: str
    type: List[str] = Field(default_factory=lambda: list(VP_TYPE))
    holder: str
    verifiableCredential: List[Dict[str, Any]]


class PresentationClaims(_Document):
    """JWT claim-set signed by the holder."""
    iss: str
    sub: str
    iat: int
    nbf: int
    exp: int
    nonce: str
    jti: str
    vp: PresentationBody

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class PresentationRef(_Document):
    id: str
    holder: str


class JwtProof(_Document):
    type: str = PROOF_TYPE
    jwt: str


class VerifiablePresentation(_Document):
    """Presentation document posted to the verifier's token endpoint."""
    sub: str
    iat: int
    nonce: str
    vp: PresentationRef
    verifiableCredential: List[Dict[str, Any]]
    holder: str
    id: str
    type: List[str] = Field(default_factory=lambda: list(VP_TYPE))
    context: List[str] = Field(default_factory=lambda: [VC_CONTEXT], alias="@context")
    issuanceDate: str
    expirationDate: str
    proof: JwtProof

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
