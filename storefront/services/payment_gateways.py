"""Per-gateway redirect URLs and success conventions."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.config import settings
from storefront.models.purchase import PaymentGateway


class GatewayPolicy(ABC):
    """How one payment provider is redirected to and how it reports back."""

    gateway: PaymentGateway

    def __init__(self, base_url: str) -> None:
        self._base_url = base_url.rstrip("/")

    @abstractmethod
    def payment_url(self, purchase_id: int, redirect_url: str) -> str:
        """Return the URL the buyer is sent to in order to pay."""

    @abstractmethod
    def is_successful(self, status: str) -> bool:
        """Interpret the status token posted back by the gateway."""


class PaypalPolicy(GatewayPolicy):
    """PayPal reports ``1`` for an approved payment and ``0`` otherwise."""

    gateway = PaymentGateway.PAYPAL
    SUCCESS_STATUS = "1"

    def payment_url(self, purchase_id: int, redirect_url: str) -> str:
        return f"{self._base_url}/{purchase_id}?redirectUrl={redirect_url}"

    def is_successful(self, status: str) -> bool:
        return status.strip() == self.SUCCESS_STATUS


class PagSeguroPolicy(GatewayPolicy):
    """PagSeguro reports ``SUCESSO`` (some integrations send ``SUCESS``)."""

    gateway = PaymentGateway.PAGSEGURO
    SUCCESS_STATUSES = frozenset({"SUCESSO", "SUCESS"})

    def payment_url(self, purchase_id: int, redirect_url: str) -> str:
        return f"{self._base_url}?returnId={purchase_id}&redirectUrl={redirect_url}"

    def is_successful(self, status: str) -> bool:
        return status.strip().upper() in self.SUCCESS_STATUSES


def policy_for(gateway: PaymentGateway) -> GatewayPolicy:
    if gateway is PaymentGateway.PAYPAL:
        return PaypalPolicy(settings.PAYPAL_BASE_URL)
    if gateway is PaymentGateway.PAGSEGURO:
        return PagSeguroPolicy(settings.PAGSEGURO_BASE_URL)
    raise ValueError(f"Unsupported payment gateway: {gateway}")
