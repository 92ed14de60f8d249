from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} tidak boleh kosong")
    return str(value).strip()


def require_non_negative_int(value, field_name: str) -> int:
    if isinstance(value, bool) or isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field_name} harus berupa bilangan bulat")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} harus berupa bilangan bulat") from None
    if number < 0:
        raise ValidationError(f"{field_name} tidak boleh negatif")
    return number
