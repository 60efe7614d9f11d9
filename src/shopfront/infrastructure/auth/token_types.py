"""Token payload models.

Defines the claims carried inside Shopfront bearer tokens.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class TokenClaims(BaseModel):
    """Claims embedded in a bearer token.

    ``exp - iat`` always equals the issuing service's TTL.
    """

    model_config = ConfigDict(frozen=True)

    sub: StrictStr = Field(..., description="Subject (user ID) the token asserts")
    iat: StrictInt = Field(..., description="Unix timestamp when the token was issued")
    exp: StrictInt = Field(..., description="Unix timestamp when the token expires")

    @property
    def subject(self) -> str:
        return self.sub

    @property
    def issued_at(self) -> int:
        return self.iat

    @property
    def expires_at(self) -> int:
        return self.exp
