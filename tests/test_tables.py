"""Tests for child table definitions and fetching."""

from __future__ import annotations

import httpx
import pytest

from supplierworker.harvester.context import SourceContext
from supplierworker.harvester.retry import RetryPolicy
from supplierworker.harvester.tables import SUPPLIER_TABLES, ChildTableFetcher

SUPPLIER_URL = "https://fusion.example.com/fscmRestApi/resources/latest/suppliers"


def make_fetcher(handler, sleeps) -> ChildTableFetcher:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    context = SourceContext(client=client, token="tok", supplier_url=SUPPLIER_URL)
    return ChildTableFetcher(context, RetryPolicy(max_attempts=3, delay=2.0, sleep=sleeps))


def table(key: str):
    return next(t for t in SUPPLIER_TABLES if t.key == key)


class TestSupplierTables:
    """Test the canonical table list."""

    def test_canonical_order(self):
        assert [t.path for t in SUPPLIER_TABLES] == [
            "sites",
            "DFF",
            "businessClassifications",
            "contacts",
            "productsAndServices",
            "addresses",
        ]

    def test_every_table_is_described(self):
        for t in SUPPLIER_TABLES:
            assert t.heading
            assert t.description
            assert t.fields

    def test_contacts_fields(self):
        assert table("contacts").fields == (
            "FirstName",
            "LastName",
            "JobTitle",
            "PhoneNumber",
            "Email",
            "Status",
        )


class TestChildTableFetcher:
    """Test fetching and rendering of one child table."""

    @pytest.mark.asyncio
    async def test_requests_child_resource(self, sleeps):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json={"items": [], "hasMore": False})

        await make_fetcher(handler, sleeps).fetch("300000047", table("sites"))

        assert requests[0].url.path.endswith("/suppliers/300000047/child/sites")
        assert requests[0].url.params["fields"] == ",".join(table("sites").fields)

    @pytest.mark.asyncio
    async def test_renders_rows_from_every_page(self, sleeps):
        def handler(request):
            offset = int(request.url.params["offset"])
            return httpx.Response(
                200,
                json={
                    "items": [{"CategoryName": f"Cat{offset}"}],
                    "hasMore": offset == 0,
                },
            )

        text = await make_fetcher(handler, sleeps).fetch("1", table("products_and_services"))

        assert text.startswith("| CategoryName | CategoryDescription | CategoryType |\n")
        assert text.endswith("| Cat0\n| Cat100\n")

    @pytest.mark.asyncio
    async def test_no_rows_renders_empty(self, sleeps):
        def handler(request):
            return httpx.Response(200, json={"items": [], "hasMore": False})

        assert await make_fetcher(handler, sleeps).fetch("1", table("dff")) == ""

    @pytest.mark.asyncio
    async def test_three_failures_give_empty_section(self, sleeps):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(500, text="Internal Server Error")

        text = await make_fetcher(handler, sleeps).fetch("1", table("contacts"))

        assert text == ""
        assert len(calls) == 3
        assert sleeps.delays == [2.0, 2.0]

    @pytest.mark.asyncio
    async def test_partial_rows_kept_after_failure(self, sleeps):
        def handler(request):
            if request.url.params["offset"] == "0":
                return httpx.Response(
                    200,
                    json={"items": [{"FirstName": "Ada", "LastName": "Lovelace"}], "hasMore": True},
                )
            return httpx.Response(502)

        fetcher = make_fetcher(handler, sleeps)
        rows = await fetcher.fetch_rows("1", table("contacts"))
        assert rows == [{"FirstName": "Ada", "LastName": "Lovelace"}]

    @pytest.mark.asyncio
    async def test_transport_errors_do_not_propagate(self, sleeps):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        assert await make_fetcher(handler, sleeps).fetch("1", table("addresses")) == ""
