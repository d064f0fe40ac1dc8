"""Integration tests for the Spec Engine MCP server.

Tests the MCP tool functions exposed by ``src.spec_engine.mcp_server`` by
patching the module-level catalog and refiner with fresh instances so each
test runs against an isolated registry.
"""
from __future__ import annotations

import pytest
from mcp.server.fastmcp import FastMCP

from src.spec_engine.services.ai_refinement import ApiRefiner
from src.spec_engine.services.catalog import ServiceCatalog

API_ENTRY = {
    "name": "Payment Order - Retrieve",
    "domain": "Payment Order",
    "endpoint": "/payment-order/{payment-order-id}/retrieve",
    "method": "GET",
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def spec_engine_mcp(monkeypatch, completion_factory):
    """Set up the Spec Engine MCP server with an isolated catalog.

    The refiner's collaborator always fails, so refinement degrades.
    """
    import src.spec_engine.mcp_server as mod

    monkeypatch.setattr(mod, "catalog", ServiceCatalog())
    monkeypatch.setattr(
        mod, "refiner", ApiRefiner(completion_factory(error=RuntimeError("offline")))
    )
    yield mod


# ---------------------------------------------------------------------------
# MCP instance sanity checks
# ---------------------------------------------------------------------------


class TestSpecEngineMCPInstance:
    """Verify the FastMCP instance is correctly wired."""

    def test_mcp_is_fastmcp_instance(self, spec_engine_mcp):
        assert isinstance(spec_engine_mcp.mcp, FastMCP)

    def test_mcp_has_registered_tools(self, spec_engine_mcp):
        tools = spec_engine_mcp.mcp._tool_manager._tools
        for name in (
            "list_domains",
            "get_domain",
            "register_domains",
            "register_apis",
            "get_apis_for_domains",
            "generate_openapi_spec",
            "generate_use_case_spec",
            "validate_openapi_spec",
        ):
            assert name in tools

    def test_mcp_name(self, spec_engine_mcp):
        assert spec_engine_mcp.mcp.name == "Spec Engine"


# ---------------------------------------------------------------------------
# Catalog tools
# ---------------------------------------------------------------------------


class TestCatalogTools:
    def test_list_domains(self, spec_engine_mcp):
        result = spec_engine_mcp.list_domains()
        assert len(result) == 14
        assert "businessAreas" in result[0]

    def test_list_domains_search(self, spec_engine_mcp):
        result = spec_engine_mcp.list_domains(search="fraud")
        assert [d["name"] for d in result] == ["Fraud Detection"]

    def test_get_domain(self, spec_engine_mcp):
        assert spec_engine_mcp.get_domain("Deposit")["name"] == "Deposit"

    def test_get_domain_missing(self, spec_engine_mcp):
        assert "error" in spec_engine_mcp.get_domain("Treasury")

    def test_register_domains_idempotent(self, spec_engine_mcp):
        candidate = {"name": "Treasury", "description": "Treasury operations"}
        spec_engine_mcp.register_domains([candidate])
        result = spec_engine_mcp.register_domains([candidate])
        assert result["total"] == 1
        names = [d["name"] for d in spec_engine_mcp.list_domains()]
        assert names.count("Treasury") == 1

    def test_register_domains_invalid(self, spec_engine_mcp):
        result = spec_engine_mcp.register_domains([{"name": "NoDescription"}])
        assert "error" in result

    def test_register_apis_then_discover(self, spec_engine_mcp):
        spec_engine_mcp.register_apis([{"name": "Foo", "domain": "Bar", "description": "..."}])
        result = spec_engine_mcp.get_apis_for_domains(["Bar"])
        assert any(e["name"].startswith("Foo - ") for e in result["suggestedApis"])

    def test_get_apis_for_domains_degrades(self, spec_engine_mcp):
        result = spec_engine_mcp.get_apis_for_domains(["Payment Order"], "Pay invoices")
        assert result["refinement"] == "degraded"
        assert result["total"] == 3


# ---------------------------------------------------------------------------
# Document tools
# ---------------------------------------------------------------------------


class TestDocumentTools:
    def test_generate_openapi_spec(self, spec_engine_mcp):
        result = spec_engine_mcp.generate_openapi_spec(API_ENTRY)
        assert result["validation"]["isValid"] is True
        operation = result["spec"]["paths"][API_ENTRY["endpoint"]]["get"]
        assert "requestBody" not in operation

    def test_generate_openapi_spec_with_customization(self, spec_engine_mcp):
        result = spec_engine_mcp.generate_openapi_spec(
            API_ENTRY, {"notes": "Internal only", "customHeaders": {"X-Channel": "web"}}
        )
        assert result["spec"]["info"]["description"].endswith("**Notes:** Internal only")

    def test_generate_openapi_spec_invalid_entry(self, spec_engine_mcp):
        assert "error" in spec_engine_mcp.generate_openapi_spec({"name": "No endpoint"})

    def test_generate_use_case_spec(self, spec_engine_mcp):
        result = spec_engine_mcp.generate_use_case_spec({
            "title": "Card payments",
            "suggestedApis": [
                {
                    "name": "Card Authorization",
                    "domain": "Card Transaction",
                    "endpoints": [
                        {"path": "/card-authorization/execute", "method": "POST", "operation": "Execute"}
                    ],
                }
            ],
        })
        assert result["validation"]["valid"] is True
        assert result["spec"]["info"]["title"] == "APIs for: Card payments"

    def test_generate_use_case_spec_invalid(self, spec_engine_mcp):
        assert "error" in spec_engine_mcp.generate_use_case_spec({"suggestedApis": []})

    def test_validate_openapi_spec(self, spec_engine_mcp):
        result = spec_engine_mcp.validate_openapi_spec({"openapi": "3.0.0"})
        assert result["isValid"] is False
        assert "No paths defined" in result["errors"]
