# services/transaction_builder.py

from config import PipelineConfig
from models.actions import MintParams, SwapParams
from models.transaction import TransactionCall

MINT_FUNCTION = "mint_to_sender"
SWAP_FUNCTION = "swap"


def build_mint_call(config: PipelineConfig, params: MintParams) -> TransactionCall:
    """
    {package}::{module}::mint_to_sender(name, description, url)
    """
    if not config.mint_configured:
        raise ValueError("NFT_PACKAGE_ID and NFT_MODULE must be configured")

    return TransactionCall(
        package=config.nft_package_id,
        module=config.nft_module,
        function=MINT_FUNCTION,
        arguments=(params.name, params.description, params.url),
    )


def build_swap_call(config: PipelineConfig, params: SwapParams) -> TransactionCall:
    """
    {package}::{module}::swap<From, To>(amount_in, min_amount_out, slippage_bps)

    u64 values travel as decimal strings.
    """
    if not config.swap_configured:
        raise ValueError("SWAP_PACKAGE_ID and SWAP_MODULE must be configured")

    return TransactionCall(
        package=config.swap_package_id,
        module=config.swap_module,
        function=SWAP_FUNCTION,
        type_arguments=(params.from_token.address, params.destination_token.address),
        arguments=(
            str(params.amount_in),
            str(params.min_amount_out),
            params.slippage_bps,
        ),
    )
