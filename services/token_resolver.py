# services/token_resolver.py
"""
Symbol / coin type resolution and decimal-scale conversion.
"""

import logging
from decimal import Decimal, InvalidOperation, ROUND_DOWN
from typing import Any, Dict, Optional, Tuple, Union

from core.outcome import FailureKind, StageFailure
from core.ports import TokenRegistry
from models.token import TokenMetadata

logger = logging.getLogger("token_resolver")

MAX_DECIMALS = 255


# -----------------------------
# Amount conversion
# -----------------------------
def _check_decimals(decimals: int) -> None:
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise TypeError(f"decimals must be an integer, got {type(decimals).__name__}")
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"decimals must be between 0 and {MAX_DECIMALS}, got {decimals}")


def to_base_units(amount: Union[int, float, str, Decimal], decimals: int) -> int:
    """
    Human amount -> integer base units (amount * 10**decimals), rounded down.

    Floats go through str() so 0.1 stays 0.1 instead of its binary expansion.
    """
    _check_decimals(decimals)
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount!r}")

    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")
    if value < 0:
        raise ValueError(f"Amount must not be negative, got {amount!r}")

    scaled = value.scaleb(decimals)
    return int(scaled.to_integral_value(rounding=ROUND_DOWN))


def from_base_units(units: int, decimals: int) -> Decimal:
    _check_decimals(decimals)
    return Decimal(units).scaleb(-decimals)


# -----------------------------
# Resolver
# -----------------------------
class TokenResolver:
    """
    Resolves token references for ONE pipeline run.
    The cache lives as long as this instance.
    """

    def __init__(self, registry: TokenRegistry, network: str):
        self.registry = registry
        self.network = network
        self._cache: Dict[str, Optional[TokenMetadata]] = {}

    async def resolve(self, reference: str) -> Optional[TokenMetadata]:
        key = reference.strip()
        if key in self._cache:
            return self._cache[key]

        metadata = await self.registry.resolve(key, self.network)
        logger.info(f"[RESOLVE] network={self.network}, reference={key}, found={metadata is not None}")
        self._cache[key] = metadata
        return metadata

    async def resolve_pair(
        self,
        from_reference: str,
        destination_reference: str,
        intent: Optional[Dict[str, Any]] = None,
    ) -> Union[Tuple[TokenMetadata, TokenMetadata], StageFailure]:
        """
        Resolves both sides before deciding, so the failure names every
        side that could not be found.
        """
        unresolved: Dict[str, str] = {}
        errors: Dict[str, str] = {}
        resolved: Dict[str, TokenMetadata] = {}

        for side, reference in (
            ("from_token", from_reference),
            ("destination_token", destination_reference),
        ):
            try:
                metadata = await self.resolve(reference)
            except Exception as e:
                logger.warning(f"[RESOLVE ERROR] side={side}, reference={reference}, error={e}")
                errors[side] = str(e)
                metadata = None

            if metadata is None:
                unresolved[side] = reference
            else:
                resolved[side] = metadata

        if unresolved:
            labels = {"from_token": "from token", "destination_token": "destination token"}
            described = ", ".join(f"{labels[side]}: {ref}" for side, ref in unresolved.items())
            message = f"Token not found on {self.network}: {described}"
            if errors:
                message += " (" + "; ".join(f"{labels[s]}: {e}" for s, e in errors.items()) + ")"
            return StageFailure(
                kind=FailureKind.TOKEN_NOT_FOUND,
                message=message,
                intent=intent,
                details={"unresolved": unresolved, "network": self.network},
            )

        return resolved["from_token"], resolved["destination_token"]
