# services/sui_registry.py

import logging
import re
from typing import Dict, Optional

from models.token import TokenMetadata
from services.sui_rpc import SuiRpcClient, SuiRpcError

logger = logging.getLogger("sui_registry")

COIN_TYPE_PATTERN = re.compile(r"^(0x[0-9a-fA-F]{1,64})::(\w+)::(\w+)$")

SUI_COIN_TYPE = "0x2::sui::SUI"

# -----------------------------
# Well-known symbols per network
# -----------------------------
KNOWN_COIN_TYPES: Dict[str, Dict[str, str]] = {
    "mainnet": {
        "SUI": SUI_COIN_TYPE,
        "USDC": "0xdba34672e30cb065b1f93e3ab55318768fd6fef66c15942c9f7cb846e2f900e7::usdc::USDC",
        "USDT": "0xc060006111016b8a020ad5b33834984a437aaa7d3c74c18e09a95d48aceab08c::coin::COIN",
        "CETUS": "0x06864a6f921804860930db6ddbe2e16acdf8504495ea7481637a1c8b9a8fe54b::cetus::CETUS",
        "DEEP": "0xdeeb7a4662eec9f2f3def03fb937a663dddaa2e215b8078a284d026b7946c270::deep::DEEP",
        "NAVX": "0xa99b8952d4f7d947ea77fe0ecdcc9e5fc0bcab2841d6e2a5aa00c3044e5544b5::navx::NAVX",
    },
    "testnet": {"SUI": SUI_COIN_TYPE},
    "devnet": {"SUI": SUI_COIN_TYPE},
    "localnet": {"SUI": SUI_COIN_TYPE},
}


def normalize_coin_type(coin_type: str) -> Optional[str]:
    """
    0x2::sui::SUI -> 0x000…0002::sui::SUI
    Returns None when the string is not a coin type.
    """
    match = COIN_TYPE_PATTERN.match(coin_type.strip())
    if not match:
        return None
    address, module, name = match.groups()
    return f"0x{address[2:].lower().rjust(64, '0')}::{module}::{name}"


class SuiTokenRegistry:
    """
    Resolves a symbol or coin type to TokenMetadata through suix_getCoinMetadata.
    """

    def __init__(self, rpc: SuiRpcClient, known_coin_types: Optional[Dict[str, Dict[str, str]]] = None):
        self.rpc = rpc
        self.known_coin_types = known_coin_types or KNOWN_COIN_TYPES

    def coin_type_for(self, reference: str, network: str) -> Optional[str]:
        normalized = normalize_coin_type(reference)
        if normalized:
            return normalized

        known = self.known_coin_types.get(network.lower(), {})
        coin_type = known.get(reference.strip().upper())
        return normalize_coin_type(coin_type) if coin_type else None

    async def resolve(self, reference: str, network: str) -> Optional[TokenMetadata]:
        coin_type = self.coin_type_for(reference, network)
        if coin_type is None:
            logger.info(f"[UNKNOWN SYMBOL] network={network}, reference={reference}")
            return None

        try:
            metadata = await self.rpc.call("suix_getCoinMetadata", [coin_type])
        except SuiRpcError as e:
            logger.warning(f"[COIN METADATA ERROR] coin_type={coin_type}, error={e.message}")
            return None

        if not metadata:
            return None

        return TokenMetadata(
            address=coin_type,
            symbol=metadata.get("symbol") or coin_type.rsplit("::", 1)[-1],
            decimals=int(metadata["decimals"]),
            name=metadata.get("name") or "",
        )
