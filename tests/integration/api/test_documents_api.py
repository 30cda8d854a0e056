"""
Integration tests for Document API endpoints

Drives the HTTP surface end to end on a real SQLite database.
"""

import pytest
from decimal import Decimal
from httpx import AsyncClient

ACME_INVOICE = {
    "kind": "invoice",
    "party_id": "client_acme",
    "currency": "INR",
    "line_items": [
        {"description": "Social media retainer", "quantity": "2", "unit_rate": "5000"},
        {"description": "Ad creative pack", "quantity": "1", "unit_rate": "1500"},
    ],
    "tax_rate": "18",
    "due_date": "2026-02-01",
}


async def create_document(client: AsyncClient, **overrides) -> dict:
    payload = {**ACME_INVOICE, **overrides}
    response = await client.post("/documents", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def move(client: AsyncClient, document_id: str, expected: str, requested: str, note=None):
    body = {"expected_status": expected, "requested_status": requested}
    if note is not None:
        body["note"] = note
    return await client.put(f"/documents/{document_id}/transition", json=body)


@pytest.mark.usefixtures("clients")
class TestDocumentsAPIIntegration:
    """Integration tests for /documents"""

    @pytest.mark.asyncio
    async def test_create_invoice(self, client: AsyncClient, transport, dispatcher):
        response = await client.post("/documents", json=ACME_INVOICE)

        assert response.status_code == 201
        data = response.json()
        assert data["kind"] == "invoice"
        assert data["status"] == "draft"
        assert data["number"].startswith("INV-")
        assert Decimal(data["subtotal"]) == Decimal("11500")
        assert Decimal(data["tax_amount"]) == Decimal("2070")
        assert Decimal(data["total"]) == Decimal("13570")
        assert data["formatted_total"] == "₹13,570.00"
        assert [Decimal(item["amount"]) for item in data["line_items"]] == [
            Decimal("10000"),
            Decimal("1500"),
        ]
        assert data["allowed_transitions"] == ["sent"]
        assert data["due_date"] == "2026-02-01"

        await dispatcher.drain()
        assert len(transport.messages) == 1
        assert transport.messages[0].to == "team@agency.test"

    @pytest.mark.asyncio
    async def test_create_ignores_caller_supplied_amounts(self, client: AsyncClient):
        payload = {
            **ACME_INVOICE,
            "line_items": [
                {"description": "Retainer", "quantity": "3", "unit_rate": "100", "amount": "1"},
            ],
            "tax_rate": "0",
        }

        response = await client.post("/documents", json=payload)

        assert response.status_code == 201
        assert Decimal(response.json()["total"]) == Decimal("300")

    @pytest.mark.asyncio
    async def test_create_invoice_without_lines_is_rejected(self, client: AsyncClient):
        response = await client.post("/documents", json={**ACME_INVOICE, "line_items": []})

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["field"] == "line_items"

    @pytest.mark.asyncio
    async def test_create_with_unsupported_currency_is_rejected(self, client: AsyncClient):
        response = await client.post("/documents", json={**ACME_INVOICE, "currency": "XYZ"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_create_with_malformed_body_is_rejected(self, client: AsyncClient):
        response = await client.post("/documents", json={"kind": "receipt", "party_id": "client_acme"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_get_document(self, client: AsyncClient):
        created = await create_document(client)

        response = await client.get(f"/documents/{created['id']}")

        assert response.status_code == 200
        data = response.json()
        assert data["number"] == created["number"]
        assert len(data["line_items"]) == 2
        assert data["transition_log"][0]["status"] == "draft"

    @pytest.mark.asyncio
    async def test_get_unknown_document(self, client: AsyncClient):
        response = await client.get("/documents/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "DOCUMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_invoice_payment_flow(self, client: AsyncClient, transport, dispatcher):
        created = await create_document(client)

        sent = await move(client, created["id"], "draft", "sent")
        assert sent.status_code == 200
        assert sent.json()["sent_at"] is not None
        assert sent.json()["allowed_transitions"] == ["cancelled", "overdue", "paid", "partial"]

        partial = await move(client, created["id"], "sent", "partial", note="Half received")
        assert partial.status_code == 200

        paid = await move(client, created["id"], "partial", "paid")
        assert paid.status_code == 200
        data = paid.json()
        assert data["status"] == "paid"
        assert data["closed_at"] is not None
        assert [entry["status"] for entry in data["transition_log"]] == [
            "draft",
            "sent",
            "partial",
            "paid",
        ]

        await dispatcher.drain()
        assert len(transport.messages) == 4

    @pytest.mark.asyncio
    async def test_invalid_transition(self, client: AsyncClient):
        created = await create_document(client)

        response = await move(client, created["id"], "draft", "paid")

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "INVALID_TRANSITION"
        assert error["details"] == {"kind": "invoice", "from_status": "draft", "to_status": "paid"}

        unchanged = await client.get(f"/documents/{created['id']}")
        assert unchanged.json()["status"] == "draft"
        assert len(unchanged.json()["transition_log"]) == 1

    @pytest.mark.asyncio
    async def test_transition_of_finalized_document(self, client: AsyncClient):
        created = await create_document(client)
        await move(client, created["id"], "draft", "sent")
        await move(client, created["id"], "sent", "paid")

        response = await move(client, created["id"], "paid", "paid")

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["code"] == "ALREADY_FINALIZED"
        assert error["message"] == "This invoice is already paid"

    @pytest.mark.asyncio
    async def test_transition_of_unknown_document(self, client: AsyncClient):
        response = await move(client, "does-not-exist", "draft", "sent")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "DOCUMENT_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_stale_expected_status_conflicts(self, client: AsyncClient, transport, dispatcher):
        created = await create_document(
            client, kind="proposal", line_items=[], title="Launch campaign"
        )
        await move(client, created["id"], "draft", "sent")

        accepted = await move(client, created["id"], "sent", "accepted", note="Approved")
        rejected = await move(client, created["id"], "sent", "rejected", note="Too late")

        assert accepted.status_code == 200
        assert rejected.status_code == 409
        error = rejected.json()["error"]
        assert error["code"] == "CONFLICT"
        assert error["details"]["actual_status"] == "accepted"

        document = (await client.get(f"/documents/{created['id']}")).json()
        assert document["status"] == "accepted"
        assert document["client_feedback"] == "Approved"

        await dispatcher.drain()
        assert len(transport.messages) == 3

    @pytest.mark.asyncio
    async def test_transition_requires_expected_status(self, client: AsyncClient):
        created = await create_document(client)

        response = await client.put(
            f"/documents/{created['id']}/transition", json={"requested_status": "sent"}
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_update_draft_recomputes_totals(self, client: AsyncClient):
        created = await create_document(client)

        response = await client.put(
            f"/documents/{created['id']}",
            json={"expected_status": "draft", "tax_rate": "5", "notes": "Net 15"},
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["subtotal"]) == Decimal("11500")
        assert Decimal(data["tax_amount"]) == Decimal("575")
        assert Decimal(data["total"]) == Decimal("12075")
        assert data["notes"] == "Net 15"
        assert data["due_date"] == "2026-02-01"
        assert len(data["line_items"]) == 2

    @pytest.mark.asyncio
    async def test_update_replaces_line_items(self, client: AsyncClient):
        created = await create_document(client)

        response = await client.put(
            f"/documents/{created['id']}",
            json={
                "expected_status": "draft",
                "line_items": [{"description": "Strategy workshop", "quantity": "1", "unit_rate": "20000"}],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert [item["description"] for item in data["line_items"]] == ["Strategy workshop"]
        assert Decimal(data["total"]) == Decimal("23600")

    @pytest.mark.asyncio
    async def test_update_after_send_is_rejected(self, client: AsyncClient):
        created = await create_document(client)
        await move(client, created["id"], "draft", "sent")

        response = await client.put(
            f"/documents/{created['id']}",
            json={"expected_status": "sent", "notes": "Changed my mind"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_list_documents_with_filters(self, client: AsyncClient):
        invoice = await create_document(client)
        await create_document(client, party_id="client_globex")
        proposal = await create_document(client, kind="proposal", line_items=[], title="Rebrand")
        await move(client, invoice["id"], "draft", "sent")

        everything = await client.get("/documents")
        assert everything.status_code == 200
        assert everything.json()["total"] == 3

        invoices = await client.get("/documents", params={"kind": "invoice"})
        assert invoices.json()["total"] == 2

        sent = await client.get("/documents", params={"status": "sent"})
        assert [doc["id"] for doc in sent.json()["documents"]] == [invoice["id"]]

        globex = await client.get("/documents", params={"party_id": "client_globex"})
        assert globex.json()["total"] == 1

        proposals = await client.get("/documents", params={"kind": "proposal", "status": "draft"})
        assert [doc["number"] for doc in proposals.json()["documents"]] == [proposal["number"]]

        page = await client.get("/documents", params={"limit": 2, "offset": 0})
        assert len(page.json()["documents"]) == 2
        assert page.json()["total"] == 3
        assert page.json()["limit"] == 2

    @pytest.mark.asyncio
    async def test_list_rejects_oversized_page(self, client: AsyncClient):
        response = await client.get("/documents", params={"limit": 1000})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_quote_totals(self, client: AsyncClient):
        response = await client.post(
            "/documents/totals",
            json={
                "currency": "INR",
                "line_items": ACME_INVOICE["line_items"],
                "tax_rate": "18",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total"]) == Decimal("13570")
        assert data["formatted_total"] == "₹13,570.00"

        listed = await client.get("/documents")
        assert listed.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_quote_totals_rejects_negative_quantity(self, client: AsyncClient):
        response = await client.post(
            "/documents/totals",
            json={
                "currency": "INR",
                "line_items": [{"description": "Refund", "quantity": "-1", "unit_rate": "100"}],
            },
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_preview_next_number(self, client: AsyncClient):
        preview = await client.get("/documents/sequences/invoice/next")
        assert preview.status_code == 200
        assert preview.json()["next_number"].endswith("-000001")

        created = await create_document(client)
        assert created["number"] == preview.json()["next_number"]

        after = await client.get("/documents/sequences/invoice/next")
        assert after.json()["next_number"].endswith("-000002")

    @pytest.mark.asyncio
    async def test_download_pdf(self, client: AsyncClient):
        created = await create_document(client)

        response = await client.get(f"/documents/{created['id']}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert f"{created['number']}.pdf" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_stored_lines_reproduce_stored_totals(self, client: AsyncClient):
        created = await create_document(
            client,
            line_items=[
                {"description": "Reel edits", "quantity": "0.333333", "unit_rate": "10000.5"},
                {"description": "Boosting", "quantity": "2.125", "unit_rate": "999.999999"},
            ],
            tax_rate="18.25",
        )

        fetched = (await client.get(f"/documents/{created['id']}")).json()
        edited = await client.put(
            f"/documents/{created['id']}",
            json={"expected_status": "draft", "title": "Renamed"},
        )

        assert edited.status_code == 200
        for field in ("subtotal", "tax_amount", "total"):
            assert Decimal(fetched[field]) == Decimal(created[field])
            assert Decimal(edited.json()[field]) == Decimal(created[field])
        assert [Decimal(item["quantity"]) for item in fetched["line_items"]] == [
            Decimal("0.333333"),
            Decimal("2.125"),
        ]
        assert [Decimal(item["amount"]) for item in edited.json()["line_items"]] == [
            Decimal(item["amount"]) for item in created["line_items"]
        ]

    @pytest.mark.asyncio
    async def test_create_rejects_quantity_finer_than_stored(self, client: AsyncClient):
        payload = {
            **ACME_INVOICE,
            "line_items": [{"description": "Sliver", "quantity": "0.0000004", "unit_rate": "10000000"}],
        }

        response = await client.post("/documents", json=payload)

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["field"] == "line_items[0].quantity"

        listed = await client.get("/documents")
        assert listed.json()["total"] == 0

    @pytest.mark.asyncio
    async def test_create_rejects_amounts_beyond_storage_range(self, client: AsyncClient):
        payload = {
            **ACME_INVOICE,
            "line_items": [{"description": "Too big", "quantity": "1000000", "unit_rate": "999999999"}],
        }

        response = await client.post("/documents", json=payload)

        assert response.status_code == 400
        assert response.json()["error"]["details"]["field"] == "line_items[0]"
