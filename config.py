import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()


def get_env_var(name: str, env: Optional[Mapping[str, str]] = None) -> str:
    """Get environment variable or raise a clear error if missing."""
    source = os.environ if env is None else env
    value = source.get(name)
    if not value:
        raise RuntimeError(
            f"❌ Missing required environment variable: {name}\n"
            f"👉 Did you copy .env.example to .env and fill in your keys?"
        )
    return value


# -----------------------------
# Pipeline configuration
# -----------------------------
@dataclass(frozen=True)
class PipelineConfig:
    """
    Read-only settings shared by every pipeline run.
    Built once, passed explicitly, never mutated.
    """

    network: str = "testnet"
    rpc_url: Optional[str] = None

    nft_package_id: Optional[str] = None
    nft_module: Optional[str] = None

    swap_package_id: Optional[str] = None
    swap_module: Optional[str] = None
    swap_allowed_networks: Tuple[str, ...] = ("mainnet",)

    default_slippage: float = 0.01
    # None means the caller must state min_amount_out explicitly
    default_min_amount_out: Optional[float] = 0.0

    gas_budget: int = 10_000_000
    extraction_timeout: float = 30.0
    execution_timeout: float = 60.0

    model_name: str = "gemini-1.5-flash"

    @property
    def fullnode_url(self) -> str:
        if self.rpc_url:
            return self.rpc_url
        return f"https://fullnode.{self.network}.sui.io:443"

    @property
    def mint_configured(self) -> bool:
        return bool(self.nft_package_id and self.nft_module)

    @property
    def swap_configured(self) -> bool:
        return bool(self.swap_package_id and self.swap_module)


def _optional_float(raw: Optional[str], default: Optional[float]) -> Optional[float]:
    if raw is None or raw.strip() == "":
        return default
    if raw.strip().lower() in {"none", "null"}:
        return None
    return float(raw)


def load_config(env: Optional[Mapping[str, str]] = None) -> PipelineConfig:
    """Build a PipelineConfig from the environment (or any mapping)."""
    source = os.environ if env is None else env
    defaults = PipelineConfig()

    allowed = source.get("SWAP_ALLOWED_NETWORKS")
    if allowed:
        allowed_networks = tuple(
            n.strip().lower() for n in allowed.split(",") if n.strip()
        )
    else:
        allowed_networks = defaults.swap_allowed_networks

    return PipelineConfig(
        network=source.get("SUI_NETWORK", defaults.network).strip().lower(),
        rpc_url=source.get("SUI_RPC_URL") or None,
        nft_package_id=source.get("NFT_PACKAGE_ID") or None,
        nft_module=source.get("NFT_MODULE") or None,
        swap_package_id=source.get("SWAP_PACKAGE_ID") or None,
        swap_module=source.get("SWAP_MODULE") or None,
        swap_allowed_networks=allowed_networks,
        default_slippage=float(
            source.get("DEFAULT_SLIPPAGE") or defaults.default_slippage
        ),
        default_min_amount_out=_optional_float(
            source.get("DEFAULT_MIN_AMOUNT_OUT"), defaults.default_min_amount_out
        ),
        gas_budget=int(source.get("SUI_GAS_BUDGET") or defaults.gas_budget),
        extraction_timeout=float(
            source.get("EXTRACTION_TIMEOUT") or defaults.extraction_timeout
        ),
        execution_timeout=float(
            source.get("EXECUTION_TIMEOUT") or defaults.execution_timeout
        ),
        model_name=source.get("GEMINI_MODEL_NAME") or defaults.model_name,
    )


# Optional vars (with defaults)
DEBUG = os.getenv("DEBUG", "false").lower() == "true"
PORT = int(os.getenv("PORT", "8000"))
