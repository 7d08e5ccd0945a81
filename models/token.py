# models/token.py
from pydantic import BaseModel, ConfigDict, Field


class TokenMetadata(BaseModel):
    """Canonical description of a coin on one network."""

    model_config = ConfigDict(frozen=True)

    address: str = Field(..., description="Full coin type, e.g. 0x…::sui::SUI")
    symbol: str = Field(..., description="Display symbol")
    decimals: int = Field(..., ge=0, le=255, description="Decimal scale")
    name: str = Field(default="", description="Human readable coin name")
