# tests/conftest.py
import sys
from pathlib import Path

# ---------------------------------------------------------
# Ensure project root is on PYTHONPATH BEFORE app imports
# ---------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

from config import PipelineConfig
from tests.fakes import (
    SUI,
    USDC,
    FakeChain,
    FakeRegistry,
    FakeSigner,
    RecordingCallback,
)


# ---------------------------------------------------------
# Fixtures
# ---------------------------------------------------------
@pytest.fixture
def mainnet_config():
    return PipelineConfig(
        network="mainnet",
        nft_package_id="0xnftpackage",
        nft_module="testnet_nft",
        swap_package_id="0xswappackage",
        swap_module="router",
    )


@pytest.fixture
def testnet_config():
    return PipelineConfig(
        network="testnet",
        nft_package_id="0xnftpackage",
        nft_module="testnet_nft",
        swap_package_id="0xswappackage",
        swap_module="router",
    )


@pytest.fixture
def registry():
    return FakeRegistry({"SUI": SUI, "USDC": USDC})


@pytest.fixture
def chain():
    return FakeChain()


@pytest.fixture
def signer():
    return FakeSigner()


@pytest.fixture
def callback():
    return RecordingCallback()
