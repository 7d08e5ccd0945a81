# agents/prompts.py
"""
Prompt templates. `{{text}}` is the user's message, `{{fields}}` the schema
description rendered by IntentSchema.describe().
"""

EXTRACTION_SYSTEM_PROMPT = (
    "You are a precise parameter extraction assistant for blockchain actions on Sui.\n"
    "Extract ONLY what the user actually said. Never invent token names, amounts or URLs.\n"
    "Use null for any value that cannot be determined from the message."
)

MINT_TEMPLATE = """Extract NFT information from the following message:

{{text}}

Return a JSON object with:
{{fields}}

Example:
```json
{
    "name": "Spring Poem",
    "description": "A beautiful poem about spring",
    "url": "ipfs://QmXXX..."
}
```

Return ONLY the JSON object."""

SWAP_TEMPLATE = """Respond with a JSON markdown block containing only the extracted values. Use null for any values that cannot be determined.

Example response:
```json
{
    "from_token": "sui",
    "destination_token": "usdc",
    "amount": 1,
    "min_amount_out": 0.99,
    "slippage": 0.01
}
```
or
```json
{
    "from_token": "0x2::sui::SUI",
    "destination_token": "0xdba34672e30cb065b1f93e3ab55318768fd6fef66c15942c9f7cb846e2f900e7::usdc::USDC",
    "amount": 1,
    "min_amount_out": 0.99,
    "slippage": 0.01
}
```

{{text}}

Given the message, extract the following information about the requested token swap:
{{fields}}

Respond with a JSON markdown block containing only the extracted values."""
