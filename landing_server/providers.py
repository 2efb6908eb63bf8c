"""Payment provider capability and the mock implementation.

The API layer only talks to ``PaymentProvider``; swapping in a real provider
means registering another implementation in ``PROVIDERS``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable
from urllib.parse import urlencode

from .models import PaymentSession, PaymentsConfig, SessionRequest
from .versioning import new_id, now_utc_iso


log = logging.getLogger("landing_server.providers")

DEFAULT_DESCRIPTION = "Покупка тарифа"
SESSION_PREFIX = "sess"


class PaymentProvider(ABC):
    name: str

    def __init__(self, config: PaymentsConfig) -> None:
        self.config = config

    @abstractmethod
    def create_session(self, request: SessionRequest) -> PaymentSession:
        raise NotImplementedError


class MockPaymentProvider(PaymentProvider):
    """Builds synthetic sessions; no network, no state."""

    name = "mock"

    def __init__(
        self,
        config: PaymentsConfig,
        *,
        id_factory: Callable[[str], str] = new_id,
        clock: Callable[[], str] = now_utc_iso,
    ) -> None:
        super().__init__(config)
        self._new_id = id_factory
        self._now = clock

    def create_session(self, request: SessionRequest) -> PaymentSession:
        session_id = self._new_id(SESSION_PREFIX)
        # The confirmation link gets its own token, never a copy of session_id.
        confirmation_id = self._new_id(SESSION_PREFIX)
        return PaymentSession(
            id=session_id,
            provider=self.config.provider,
            amount=request.amount,
            currency=request.currency or self.config.currency,
            description=request.description or DEFAULT_DESCRIPTION,
            confirmation_url=confirmation_url(self.config.return_url, confirmation_id),
            created_at=self._now(),
        )


PROVIDERS: dict[str, type[PaymentProvider]] = {
    MockPaymentProvider.name: MockPaymentProvider,
}


def confirmation_url(return_url: str, session_id: str) -> str:
    separator = "&" if "?" in return_url else "?"
    return f"{return_url}{separator}{urlencode({'session_id': session_id})}"


def build_provider(config: PaymentsConfig) -> PaymentProvider:
    provider_cls = PROVIDERS.get(config.provider)
    if provider_cls is None:
        log.info("No implementation for provider %r; using mock sessions", config.provider)
        provider_cls = MockPaymentProvider
    return provider_cls(config)
