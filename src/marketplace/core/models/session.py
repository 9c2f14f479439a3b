from datetime import datetime

from pydantic import BaseModel, Field


class SessionClaims(BaseModel):
    """Verified claims carried by a session token."""

    user_id: str = Field(description="Subject of the token")
    role: str = Field(description="Role at issuance time")
    exp: datetime = Field(description="Absolute expiry")
    iat: datetime = Field(description="Issuance time")
    jti: str | None = None
