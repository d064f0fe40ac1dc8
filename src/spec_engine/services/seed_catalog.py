"""Seed data for the service-domain catalog.

Every :class:`ServiceCatalog` starts from a fresh copy of these records.
"""
from __future__ import annotations

from src.shared.models.catalog import ApiTemplate, Endpoint, ServiceDomain


def seed_domains() -> list[ServiceDomain]:
    """Return the built-in service domains in catalog order."""
    return [
        ServiceDomain(
            name="Customer Management",
            description="End-to-end management of customer information and relationships",
            business_areas=["onboarding", "kyc", "customer-data", "relationship-management"],
            common_apis=[
                "Customer Directory",
                "Customer Reference Data Management",
                "Customer Relationship Management",
            ],
        ),
        ServiceDomain(
            name="Product Management",
            description="Management of the banking product and service catalog",
            business_areas=["product-catalog", "pricing", "product-lifecycle"],
            common_apis=["Product Directory", "Product Design", "Product Deployment"],
        ),
        ServiceDomain(
            name="Customer Offer",
            description="Personalised offers for customers",
            business_areas=["marketing", "cross-selling", "personalization"],
            common_apis=["Customer Offer", "Next Best Action", "Campaign Management"],
        ),
        ServiceDomain(
            name="Customer Agreement",
            description="Agreements and contracts held with customers",
            business_areas=["contracts", "terms-conditions", "legal-agreements"],
            common_apis=["Customer Agreement", "Contract Management", "Terms and Conditions"],
        ),
        ServiceDomain(
            name="Payment Order",
            description="Processing of payment orders",
            business_areas=["payments", "transfers", "payment-processing"],
            common_apis=["Payment Order", "Payment Initiation", "Payment Tracking"],
        ),
        ServiceDomain(
            name="Payment Execution",
            description="Execution and settlement of payments",
            business_areas=["settlement", "clearing", "payment-execution"],
            common_apis=["Payment Execution", "ACH Operations", "Wire Transfer Operations"],
        ),
        ServiceDomain(
            name="Card Transaction",
            description="Processing of card transactions",
            business_areas=["card-processing", "authorization", "settlement"],
            common_apis=["Card Transaction", "Card Authorization", "Card Settlement"],
        ),
        ServiceDomain(
            name="Credit Management",
            description="Credit management and credit risk assessment",
            business_areas=["credit-assessment", "loan-origination", "credit-monitoring"],
            common_apis=["Credit Management", "Credit Assessment", "Credit Facility"],
        ),
        ServiceDomain(
            name="Loan",
            description="Lifecycle management of loans",
            business_areas=["loan-origination", "loan-servicing", "collections"],
            common_apis=["Loan", "Mortgage Loan", "Consumer Loan"],
        ),
        ServiceDomain(
            name="Deposit",
            description="Management of deposit accounts",
            business_areas=["account-management", "deposits", "savings"],
            common_apis=["Current Account", "Savings Account", "Time Deposit"],
        ),
        ServiceDomain(
            name="Investment Account",
            description="Management of investment accounts",
            business_areas=["investments", "portfolio-management", "trading"],
            common_apis=["Investment Account", "Portfolio Management", "Securities Trading"],
        ),
        ServiceDomain(
            name="Risk Management",
            description="Enterprise-wide risk management",
            business_areas=["risk-assessment", "compliance", "monitoring"],
            common_apis=[
                "Market Risk Management",
                "Credit Risk Management",
                "Operational Risk Management",
            ],
        ),
        ServiceDomain(
            name="Fraud Detection",
            description="Fraud detection and prevention",
            business_areas=["fraud-prevention", "monitoring", "investigation"],
            common_apis=["Fraud Detection", "Transaction Monitoring", "Fraud Investigation"],
        ),
        ServiceDomain(
            name="Compliance",
            description="Regulatory compliance management",
            business_areas=["regulatory-compliance", "reporting", "audit"],
            common_apis=["Regulatory Compliance", "Regulatory Reporting", "Audit Trail"],
        ),
    ]


def seed_api_templates() -> list[ApiTemplate]:
    """Return the built-in API templates in registration order."""
    return [
        ApiTemplate(
            name="Customer Directory",
            domain="Customer Management",
            description="Central directory of customer information",
            endpoints=[
                Endpoint(
                    path="/customer-directory/register",
                    method="POST",
                    operation="Register",
                    description="Register a new customer in the directory",
                ),
                Endpoint(
                    path="/customer-directory/{customer-directory-entry-id}/retrieve",
                    method="GET",
                    operation="Retrieve",
                    description="Retrieve customer information",
                ),
                Endpoint(
                    path="/customer-directory/{customer-directory-entry-id}/update",
                    method="PUT",
                    operation="Update",
                    description="Update customer information",
                ),
            ],
            coverage=["customer registration", "customer lookup", "customer data updates"],
            limitations=["no behavioural analysis", "limited to core customer data"],
        ),
        ApiTemplate(
            name="Payment Order",
            domain="Payment Order",
            description="Management of payment orders",
            endpoints=[
                Endpoint(
                    path="/payment-order/initiate",
                    method="POST",
                    operation="Initiate",
                    description="Initiate a new payment order",
                ),
                Endpoint(
                    path="/payment-order/{payment-order-id}/retrieve",
                    method="GET",
                    operation="Retrieve",
                    description="Retrieve the status of a payment order",
                ),
                Endpoint(
                    path="/payment-order/{payment-order-id}/update",
                    method="PUT",
                    operation="Update",
                    description="Update a payment order",
                ),
            ],
            coverage=["payment initiation", "order tracking", "funds validation"],
            limitations=[
                "does not execute payments",
                "requires integration with Payment Execution",
            ],
        ),
        ApiTemplate(
            name="Credit Assessment",
            domain="Credit Management",
            description="Credit risk assessment",
            endpoints=[
                Endpoint(
                    path="/credit-assessment/evaluate",
                    method="POST",
                    operation="Evaluate",
                    description="Evaluate a credit application",
                ),
                Endpoint(
                    path="/credit-assessment/{assessment-id}/retrieve",
                    method="GET",
                    operation="Retrieve",
                    description="Retrieve an assessment result",
                ),
            ],
            coverage=["credit scoring", "risk analysis", "recommendations"],
            limitations=["requires historical data", "subject to local regulation"],
        ),
        ApiTemplate(
            name="Current Account",
            domain="Deposit",
            description="Operation of current (checking) accounts",
            endpoints=[
                Endpoint(
                    path="/current-account/initiate",
                    method="POST",
                    operation="Initiate",
                    description="Open a current account",
                ),
                Endpoint(
                    path="/current-account/{current-account-id}/retrieve",
                    method="GET",
                    operation="Retrieve",
                    description="Retrieve account details and balance",
                ),
                Endpoint(
                    path="/current-account/{current-account-id}/update",
                    method="PUT",
                    operation="Update",
                    description="Update account settings",
                ),
            ],
            coverage=["account opening", "balance enquiry", "account maintenance"],
            limitations=["no overdraft facility handling"],
        ),
        ApiTemplate(
            name="Card Authorization",
            domain="Card Transaction",
            description="Authorization of card transactions",
            endpoints=[
                Endpoint(
                    path="/card-authorization/execute",
                    method="POST",
                    operation="Execute",
                    description="Authorize a card transaction",
                ),
                Endpoint(
                    path="/card-authorization/{card-authorization-id}/retrieve",
                    method="GET",
                    operation="Retrieve",
                    description="Retrieve an authorization decision",
                ),
            ],
            coverage=["real-time authorization", "authorization lookup"],
            limitations=["no chargeback handling"],
        ),
        ApiTemplate(
            name="Fraud Detection",
            domain="Fraud Detection",
            description="Screening of activity for fraud indicators",
            endpoints=[
                Endpoint(
                    path="/fraud-detection/evaluate",
                    method="POST",
                    operation="Evaluate",
                    description="Screen a transaction for fraud",
                ),
                Endpoint(
                    path="/fraud-detection/{fraud-case-id}/retrieve",
                    method="GET",
                    operation="Retrieve",
                    description="Retrieve a fraud screening result",
                ),
            ],
            coverage=["transaction screening", "risk scoring"],
            limitations=["no case management workflow"],
        ),
    ]
