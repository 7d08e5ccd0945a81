import pytest

from config import PipelineConfig, get_env_var, load_config


def test_defaults_from_empty_env():
    config = load_config({})

    assert config == PipelineConfig()
    assert config.fullnode_url == "https://fullnode.testnet.sui.io:443"
    assert not config.mint_configured


def test_env_overrides():
    config = load_config(
        {
            "SUI_NETWORK": "MAINNET",
            "NFT_PACKAGE_ID": "0xpkg",
            "NFT_MODULE": "nft",
            "SWAP_ALLOWED_NETWORKS": "mainnet, testnet",
            "DEFAULT_SLIPPAGE": "0.005",
            "DEFAULT_MIN_AMOUNT_OUT": "none",
            "SUI_RPC_URL": "http://127.0.0.1:9000",
        }
    )

    assert config.network == "mainnet"
    assert config.mint_configured
    assert config.swap_allowed_networks == ("mainnet", "testnet")
    assert config.default_slippage == 0.005
    assert config.default_min_amount_out is None
    assert config.fullnode_url == "http://127.0.0.1:9000"


def test_config_is_immutable():
    with pytest.raises(AttributeError):
        PipelineConfig().network = "mainnet"


def test_get_env_var_raises_clear_error():
    with pytest.raises(RuntimeError, match="GOOGLE_API_KEY"):
        get_env_var("GOOGLE_API_KEY", {})
