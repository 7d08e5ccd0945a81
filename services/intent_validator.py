# services/intent_validator.py

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from core.schema import FieldType, IntentSchema


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    values: Dict[str, Any] = field(default_factory=dict)
    missing: Tuple[str, ...] = ()
    mismatched: Tuple[str, ...] = ()
    defaulted: Tuple[str, ...] = ()

    def describe(self) -> str:
        parts = []
        if self.missing:
            parts.append(f"missing: {', '.join(self.missing)}")
        if self.mismatched:
            parts.append(f"invalid: {', '.join(self.mismatched)}")
        return "; ".join(parts) if parts else "valid"


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_intent(candidate: Any, schema: IntentSchema) -> ValidationResult:
    """
    Exhaustive structural check of an extracted candidate.

    Rules:
    - Pure, no external calls
    - Never raises for shape mismatches
    - null is accepted only for nullable fields (their default is applied)
    """
    if not isinstance(candidate, Mapping):
        return ValidationResult(ok=False, missing=schema.field_names())

    values: Dict[str, Any] = {}
    missing = []
    mismatched = []
    defaulted = []

    for spec in schema.fields:
        value = candidate.get(spec.name)

        if _is_absent(value):
            if spec.nullable:
                values[spec.name] = spec.default
                defaulted.append(spec.name)
            else:
                missing.append(spec.name)
            continue

        if spec.type is FieldType.STRING:
            if not isinstance(value, str):
                mismatched.append(spec.name)
                continue
            values[spec.name] = value.strip()

        elif spec.type is FieldType.NUMBER:
            if not spec.in_range(value):
                mismatched.append(spec.name)
                continue
            values[spec.name] = value

    ok = not missing and not mismatched
    return ValidationResult(
        ok=ok,
        values=values if ok else {},
        missing=tuple(missing),
        mismatched=tuple(mismatched),
        defaulted=tuple(defaulted),
    )
