"""Payment data shapes exchanged over the mock API.

All of them are immutable: config lives for the whole process, sessions are
built once per request and only serialized afterwards.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from .errors import ValidationError


JsonObject = dict[str, Any]
Amount = int | float

INVALID_AMOUNT = "Некорректная сумма платежа"


@dataclass(frozen=True, slots=True)
class PaymentsConfig:
    provider: str = "mock"
    public_key: str = "pk_test_mocked"
    return_url: str = "http://localhost:3000/thanks"
    currency: str = "RUB"
    locale: str = "ru-RU"

    def as_dict(self) -> JsonObject:
        return {
            "provider": self.provider,
            "publicKey": self.public_key,
            "returnUrl": self.return_url,
            "currency": self.currency,
            "locale": self.locale,
        }


@dataclass(frozen=True, slots=True)
class SessionRequest:
    """Validated body of a session-creation call.

    ``currency`` and ``description`` are ``None`` when the caller left them
    out; providers substitute their defaults.
    """

    amount: Amount
    currency: str | None = None
    description: str | None = None

    @classmethod
    def from_body(cls, body: Any) -> "SessionRequest":
        data: Mapping[str, Any] = body if isinstance(body, dict) else {}
        return cls(
            amount=coerce_amount(data.get("amount")),
            currency=_optional_text(data.get("currency"), "currency"),
            description=_optional_text(data.get("description"), "description"),
        )


@dataclass(frozen=True, slots=True)
class PaymentSession:
    id: str
    provider: str
    amount: Amount
    currency: str
    description: str
    confirmation_url: str
    created_at: str

    def as_dict(self) -> JsonObject:
        return {
            "id": self.id,
            "provider": self.provider,
            "amount": self.amount,
            "currency": self.currency,
            "description": self.description,
            "confirmationUrl": self.confirmation_url,
            "createdAt": self.created_at,
        }


def coerce_amount(value: Any) -> Amount:
    """Turn a JSON ``amount`` into a positive finite number.

    Numeric strings are accepted; integral strings come back as ``int`` so
    ``"100"`` and ``100`` produce the same session amount.
    """

    # bool is an int subclass; true/false are not amounts.
    if value is None or isinstance(value, bool):
        raise ValidationError(INVALID_AMOUNT)

    number: Amount
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValidationError(INVALID_AMOUNT)
        try:
            parsed = float(text)
        except ValueError:
            raise ValidationError(INVALID_AMOUNT) from None
        number = int(parsed) if parsed.is_integer() else parsed
    else:
        raise ValidationError(INVALID_AMOUNT)

    # isfinite() on a huge int overflows; ints are always finite anyway.
    if isinstance(number, float) and not math.isfinite(number):
        raise ValidationError(INVALID_AMOUNT)
    if number <= 0:
        raise ValidationError(INVALID_AMOUNT)
    return number


def _optional_text(value: Any, field: str) -> str | None:
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValidationError(f"Некорректное поле {field}")
    return value
