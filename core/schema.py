# core/schema.py
import math
from dataclasses import dataclass, replace
from enum import Enum
from functools import lru_cache
from typing import Any, Optional, Tuple, Type

from pydantic import BaseModel, Field, create_model


class FieldType(str, Enum):
    STRING = "string"
    NUMBER = "number"


@dataclass(frozen=True)
class FieldSpec:
    """
    One expected parameter of an action.
    `default` is only ever applied to nullable fields.
    """

    name: str
    type: FieldType
    description: str = ""
    nullable: bool = False
    default: Any = None
    minimum: Optional[float] = None
    maximum: Optional[float] = None
    exclusive_minimum: bool = False

    def in_range(self, value: Any) -> bool:
        # bool is an int subclass, never a quantity
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        if not math.isfinite(value):
            return False
        if self.minimum is not None:
            if self.exclusive_minimum and value <= self.minimum:
                return False
            if value < self.minimum:
                return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True


@dataclass(frozen=True)
class IntentSchema:
    """
    Declarative shape of a single action's parameters.
    """

    name: str
    fields: Tuple[FieldSpec, ...]

    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get(self, name: str) -> Optional[FieldSpec]:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    def with_defaults(self, **overrides: Any) -> "IntentSchema":
        """
        Return a copy with new defaults for nullable fields.
        A None default turns the field into a required one.
        Raises ValueError when a default falls outside the field's bounds.
        """
        unknown = set(overrides) - set(self.field_names())
        if unknown:
            raise KeyError(f"Unknown schema fields: {', '.join(sorted(unknown))}")

        fields = []
        for spec in self.fields:
            if spec.name in overrides:
                default = overrides[spec.name]
                if (
                    default is not None
                    and spec.type is FieldType.NUMBER
                    and not spec.in_range(default)
                ):
                    raise ValueError(
                        f"Invalid default for {self.name}.{spec.name}: {default!r} "
                        f"(allowed: {_describe_bounds(spec)})"
                    )
                spec = replace(spec, default=default, nullable=default is not None)
            fields.append(spec)
        return IntentSchema(name=self.name, fields=tuple(fields))

    def describe(self) -> str:
        lines = []
        for spec in self.fields:
            line = f"- {spec.name} ({spec.type.value}): {spec.description}"
            if spec.nullable:
                line += f" Use null if not mentioned (defaults to {spec.default})."
            lines.append(line)
        return "\n".join(lines)

    def draft_model(self) -> Type[BaseModel]:
        return _draft_model_for(self)


def _describe_bounds(spec: FieldSpec) -> str:
    parts = []
    if spec.minimum is not None:
        parts.append(f"{'>' if spec.exclusive_minimum else '>='} {spec.minimum:g}")
    if spec.maximum is not None:
        parts.append(f"<= {spec.maximum:g}")
    return " and ".join(parts) if parts else "any finite number"


_PY_TYPES = {
    FieldType.STRING: str,
    FieldType.NUMBER: float,
}


@lru_cache(maxsize=None)
def _draft_model_for(schema: IntentSchema) -> Type[BaseModel]:
    """
    Every field optional: the LLM output is a candidate, not a trusted value.
    """
    definitions = {
        spec.name: (Optional[_PY_TYPES[spec.type]], Field(None, description=spec.description))
        for spec in schema.fields
    }
    model_name = "".join(part.title() for part in schema.name.split("_")) + "Draft"
    return create_model(model_name, **definitions)


# -----------------------------
# Action schemas
# -----------------------------
MINT_SCHEMA = IntentSchema(
    name="mint_nft",
    fields=(
        FieldSpec("name", FieldType.STRING, "NFT name"),
        FieldSpec("description", FieldType.STRING, "NFT content or description"),
        FieldSpec("url", FieldType.STRING, "NFT URL, e.g. ipfs://..."),
    ),
)

SWAP_SCHEMA = IntentSchema(
    name="swap_token",
    fields=(
        FieldSpec(
            "from_token",
            FieldType.STRING,
            "Source token to swap from, symbol or full coin type",
        ),
        FieldSpec(
            "destination_token",
            FieldType.STRING,
            "Destination token to swap to, symbol or full coin type",
        ),
        FieldSpec(
            "amount",
            FieldType.NUMBER,
            "Amount of the source token to swap, in whole tokens",
            minimum=0,
            exclusive_minimum=True,
        ),
        FieldSpec(
            "slippage",
            FieldType.NUMBER,
            "Maximum tolerated slippage as a fraction (0.01 = 1%)",
            nullable=True,
            default=0.01,
            minimum=0,
            maximum=1,
        ),
        FieldSpec(
            "min_amount_out",
            FieldType.NUMBER,
            "Minimum amount of the destination token to receive, in whole tokens",
            nullable=True,
            default=0,
            minimum=0,
        ),
    ),
)
