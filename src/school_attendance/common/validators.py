from __future__ import annotations

from typing import Iterable

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} inválido")
    return value.strip()


def require_non_negative(values: Iterable[int], field_name: str) -> list[int]:
    out: list[int] = []
    for v in values:
        try:
            n = int(v)
        except (TypeError, ValueError):
            raise ValidationError(f"{field_name} inválido")
        if n < 0:
            raise ValidationError(f"{field_name} não pode ser negativo")
        out.append(n)
    return out
