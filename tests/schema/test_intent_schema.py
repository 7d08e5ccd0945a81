import pytest

from core.schema import MINT_SCHEMA, SWAP_SCHEMA
from services.intent_validator import validate_intent


def test_with_defaults_returns_new_schema():
    schema = SWAP_SCHEMA.with_defaults(slippage=0.05)

    assert schema.get("slippage").default == 0.05
    assert SWAP_SCHEMA.get("slippage").default == 0.01


def test_none_default_makes_min_amount_out_required():
    schema = SWAP_SCHEMA.with_defaults(min_amount_out=None)

    assert schema.get("min_amount_out").nullable is False

    result = validate_intent(
        {"from_token": "SUI", "destination_token": "USDC", "amount": 1},
        schema,
    )
    assert not result.ok
    assert result.missing == ("min_amount_out",)


def test_with_defaults_rejects_unknown_fields():
    with pytest.raises(KeyError):
        SWAP_SCHEMA.with_defaults(gas=1)


def test_describe_mentions_every_field():
    description = SWAP_SCHEMA.describe()

    for name in SWAP_SCHEMA.field_names():
        assert f"- {name} " in description
    assert "Use null if not mentioned" in description


def test_draft_model_accepts_nulls_and_is_cached():
    draft = MINT_SCHEMA.draft_model()

    instance = draft(name=None, description="d", url=None)
    assert instance.model_dump() == {"name": None, "description": "d", "url": None}
    assert MINT_SCHEMA.draft_model() is draft
    assert draft.__name__ == "MintNftDraft"


@pytest.mark.parametrize(
    "overrides",
    [
        {"slippage": 5.0},
        {"slippage": -0.1},
        {"min_amount_out": -1.0},
        {"slippage": float("nan")},
    ],
)
def test_with_defaults_rejects_out_of_range_defaults(overrides):
    with pytest.raises(ValueError, match="Invalid default for swap_token"):
        SWAP_SCHEMA.with_defaults(**overrides)


def test_with_defaults_accepts_boundary_values():
    schema = SWAP_SCHEMA.with_defaults(slippage=1.0, min_amount_out=0)

    assert schema.get("slippage").default == 1.0
    assert schema.get("min_amount_out").default == 0
