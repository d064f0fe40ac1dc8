"""Canned example payloads for generated documents.

Examples are picked by the first keyword of :data:`DOMAIN_EXAMPLES` that
appears in the API's name or domain.  The table is illustrative sample
data and may be extended freely; anything unmatched gets
:data:`GENERIC_EXAMPLE`.  All values are fixed so documents are
reproducible.
"""
from __future__ import annotations

import copy
from typing import Any

from src.shared.utils import short_hash

EXAMPLE_TIMESTAMP = "2024-01-15T10:30:00Z"

DOMAIN_EXAMPLES: list[tuple[str, dict[str, Any]]] = [
    ("customer", {
        "customerReference": "CR123456",
        "customerData": {
            "name": "Jane Doe",
            "email": "jane.doe@example.com",
            "phone": "+1234567890",
            "address": {
                "street": "123 Main St",
                "city": "Springfield",
                "country": "US",
                "postalCode": "12345",
            },
        },
    }),
    ("account", {
        "accountReference": "AC789012",
        "accountType": "Savings",
        "currency": "USD",
        "balance": 1000.00,
    }),
    ("transaction", {
        "transactionReference": "TX345678",
        "amount": 500.00,
        "currency": "USD",
        "fromAccount": "AC789012",
        "toAccount": "AC789013",
        "description": "Transfer",
    }),
    ("payment", {
        "paymentOrderReference": "PO456789",
        "amount": 250.75,
        "currency": "EUR",
        "debtorAccount": "DE89370400440532013000",
        "creditorAccount": "FR1420041010050500013M02606",
        "requestedExecutionDate": "2024-01-16",
    }),
    ("card", {
        "cardDetails": {
            "cardNumber": "****-****-****-1234",
            "accountId": "ACC-789",
            "outstandingAmount": 2500.00,
            "dueDate": "2024-02-15",
        },
    }),
    ("loan", {
        "loanReference": "LN112233",
        "principal": 25000.00,
        "currency": "USD",
        "termMonths": 60,
        "interestRate": 5.25,
    }),
    ("credit", {
        "applicationReference": "CA998877",
        "requestedAmount": 15000.00,
        "applicant": {
            "customerId": "CUST-12345",
            "annualIncome": 65000,
            "employmentStatus": "Employed",
        },
    }),
    ("deposit", {
        "depositReference": "DP554433",
        "amount": 5000.00,
        "currency": "USD",
        "termDays": 180,
    }),
    ("investment", {
        "portfolioReference": "PF667788",
        "instrument": "ETF",
        "quantity": 10,
        "orderType": "Market",
    }),
    ("fraud", {
        "screeningReference": "FS223344",
        "transactionReference": "TX345678",
        "channel": "Online",
        "indicators": ["velocity", "geo-mismatch"],
    }),
    ("risk", {
        "riskReference": "RK778899",
        "riskType": "Credit",
        "exposure": 120000.00,
        "rating": "BBB",
    }),
    ("compliance", {
        "reportReference": "RC101112",
        "regulation": "AML",
        "reportingPeriod": "2024-Q1",
        "status": "Draft",
    }),
    ("product", {
        "productDetails": {
            "productId": "PROD-789",
            "productName": "Premium Savings Account",
            "productType": "Savings",
            "features": ["Online Banking", "Mobile App", "ATM Access"],
        },
    }),
    ("agreement", {
        "agreementDetails": {
            "customerId": "CUST-12345",
            "agreementType": "Credit Facility",
            "agreementDate": "2024-01-15",
            "status": "Active",
        },
    }),
]

GENERIC_EXAMPLE: dict[str, Any] = {
    "generalDetails": {
        "id": "ID-123456",
        "type": "Standard Request",
        "timestamp": EXAMPLE_TIMESTAMP,
        "status": "Active",
    },
}


def canned_example(name: str, domain: str = "") -> dict[str, Any]:
    """Return a copy of the first keyword example matching *name* or *domain*."""
    haystack = f"{name} {domain}".lower()
    for keyword, example in DOMAIN_EXAMPLES:
        if keyword in haystack:
            return copy.deepcopy(example)
    return copy.deepcopy(GENERIC_EXAMPLE)


def response_example(name: str, domain: str, method: str) -> dict[str, Any]:
    """Build the success-response example for an operation.

    Reads return the canned record under ``data``; writes return an
    acknowledgement with a resource identifier.
    """
    example: dict[str, Any] = {
        "success": True,
        "timestamp": EXAMPLE_TIMESTAMP,
        "transactionId": f"TXN-{short_hash(name)}",
    }
    if method.upper() == "GET":
        example["data"] = canned_example(name, domain)
    else:
        example["message"] = "Operation completed successfully"
        example["resourceId"] = f"RES-{short_hash(f'{name}:{method.upper()}')}"
    return example
