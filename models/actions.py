# models/actions.py
from pydantic import BaseModel, ConfigDict, Field

from models.token import TokenMetadata

# Move amounts are u64
U64_MAX = 2**64 - 1


# -----------------------------
# Resolved parameters (Resolver → Builder)
# -----------------------------
class MintParams(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)


class SwapParams(BaseModel):
    """
    Amounts are integer base units; slippage is a fraction.
    """

    model_config = ConfigDict(frozen=True)

    from_token: TokenMetadata
    destination_token: TokenMetadata
    amount_in: int = Field(..., ge=0, le=U64_MAX)
    min_amount_out: int = Field(..., ge=0, le=U64_MAX)
    slippage: float = Field(..., ge=0, le=1)

    @property
    def slippage_bps(self) -> int:
        return int(round(self.slippage * 10_000))
