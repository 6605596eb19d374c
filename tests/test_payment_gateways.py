"""Unit tests for gateway URL building and status interpretation."""

import pytest

from storefront.models.purchase import PaymentGateway, PurchaseStatus
from storefront.services.payment_gateways import (
    PagSeguroPolicy,
    PaypalPolicy,
    policy_for,
)

REDIRECT = "http://localhost/api/purchases/confirm-payment"


@pytest.mark.unit
def test_paypal_payment_url():
    policy = policy_for(PaymentGateway.PAYPAL)

    assert isinstance(policy, PaypalPolicy)
    assert policy.payment_url(42, REDIRECT) == f"paypal.com/42?redirectUrl={REDIRECT}"


@pytest.mark.unit
def test_pagseguro_payment_url():
    policy = policy_for(PaymentGateway.PAGSEGURO)

    assert isinstance(policy, PagSeguroPolicy)
    assert (
        policy.payment_url(42, REDIRECT)
        == f"pagseguro.com?returnId=42&redirectUrl={REDIRECT}"
    )


@pytest.mark.unit
def test_custom_base_url_is_trimmed():
    policy = PaypalPolicy("https://sandbox.paypal.com/")

    assert policy.payment_url(7, REDIRECT).startswith("https://sandbox.paypal.com/7?")


@pytest.mark.unit
@pytest.mark.parametrize(
    ("status", "expected"),
    [("1", True), (" 1 ", True), ("0", False), ("2", False), ("SUCESSO", False)],
)
def test_paypal_status(status, expected):
    assert PaypalPolicy("paypal.com").is_successful(status) is expected


@pytest.mark.unit
@pytest.mark.parametrize(
    ("status", "expected"),
    [
        ("SUCESSO", True),
        ("SUCESS", True),
        ("sucesso", True),
        ("ERRO", False),
        ("1", False),
    ],
)
def test_pagseguro_status(status, expected):
    assert PagSeguroPolicy("pagseguro.com").is_successful(status) is expected


@pytest.mark.unit
def test_terminal_statuses():
    assert not PurchaseStatus.PENDING.is_terminal
    assert PurchaseStatus.PAID.is_terminal
    assert PurchaseStatus.FAILED.is_terminal
