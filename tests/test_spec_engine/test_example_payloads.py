"""Tests for canned example payload selection."""
from __future__ import annotations

from src.spec_engine.services.example_payloads import (
    DOMAIN_EXAMPLES,
    EXAMPLE_TIMESTAMP,
    GENERIC_EXAMPLE,
    canned_example,
    response_example,
)


class TestCannedExample:
    def test_keyword_in_name(self):
        assert "customerReference" in canned_example("Customer Directory - Register")

    def test_keyword_in_domain(self):
        assert "paymentOrderReference" in canned_example("Order Tracking", "Payment Order")

    def test_match_is_case_insensitive(self):
        assert "loanReference" in canned_example("CONSUMER LOAN")

    def test_first_keyword_wins(self):
        # "Customer Account" matches both; customer comes first in the table.
        assert "customerReference" in canned_example("Customer Account")

    def test_no_match_falls_back_to_generic(self):
        assert canned_example("Treasury Dealing", "Treasury") == GENERIC_EXAMPLE
        assert "generalDetails" in canned_example("Zzz")

    def test_returns_a_copy(self):
        example = canned_example("Customer Directory")
        example["customerData"]["name"] = "Changed"
        assert canned_example("Customer Directory")["customerData"]["name"] != "Changed"

    def test_every_keyword_has_distinct_shape(self):
        shapes = [tuple(example) for _, example in DOMAIN_EXAMPLES]
        assert len(shapes) == len(set(shapes))


class TestResponseExample:
    def test_get_returns_data(self):
        example = response_example("Payment Order - Retrieve", "Payment Order", "GET")
        assert example["success"] is True
        assert example["timestamp"] == EXAMPLE_TIMESTAMP
        assert "paymentOrderReference" in example["data"]
        assert "resourceId" not in example

    def test_write_returns_acknowledgement(self):
        example = response_example("Payment Order - Initiate", "Payment Order", "post")
        assert example["message"] == "Operation completed successfully"
        assert example["resourceId"].startswith("RES-")
        assert "data" not in example

    def test_is_deterministic(self):
        first = response_example("Payment Order - Initiate", "Payment Order", "POST")
        second = response_example("Payment Order - Initiate", "Payment Order", "POST")
        assert first == second
        assert first["transactionId"].startswith("TXN-")

    def test_ids_differ_per_api(self):
        first = response_example("Payment Order - Initiate", "Payment Order", "POST")
        second = response_example("Current Account - Initiate", "Deposit", "POST")
        assert first["transactionId"] != second["transactionId"]
