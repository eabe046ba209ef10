"""Tests for API routes against the in-memory Notion fake."""

import httpx
import pytest

from tests.factories import heading, image, paragraph, pdf_file, template_page_blocks

MIB = 1024 * 1024


def lead_page_properties(name: str = "Ada Lovelace", record_type: str = "Lead") -> dict:
    return {
        "Customer Name": {"type": "title", "title": [{"plain_text": name}]},
        "Type": {"type": "select", "select": {"name": record_type}},
    }


class TestHealthRoutes:
    """Tests for health checks."""

    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    @pytest.mark.asyncio
    async def test_notion_health(self, client, fake_notion):
        response = await client.get("/api/health/notion")

        assert response.status_code == 200
        assert response.json()["database"] == fake_notion.database["id"]

    @pytest.mark.asyncio
    async def test_notion_health_unreachable(self, client, fake_notion):
        fake_notion.fail.add("retrieve_database")

        response = await client.get("/api/health/notion")

        assert response.status_code == 503
        assert response.json() == {"error": "Notion health check failed"}


class TestLeadRoutes:
    """Tests for lead listing, creation and transitions."""

    @pytest.mark.asyncio
    async def test_create_then_fetch_keeps_job_types(self, client, fake_notion):
        response = await client.post(
            "/api/leads", json={"customerName": "Ada Lovelace", "jobType": "Camera, Alarm"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["templateSeeded"] is True
        created = fake_notion.called("create_page")[0][1]
        assert created["Job Type"] == {"multi_select": [{"name": "Camera"}, {"name": "Alarm"}]}

        fetched = await client.get(f"/api/leads/{body['id']}")

        assert fetched.status_code == 200
        lead = fetched.json()["lead"]
        assert lead["jobType"] == "Camera, Alarm"
        assert lead["customerName"] == "Ada Lovelace"
        assert lead["email"] is None

    @pytest.mark.asyncio
    async def test_create_reports_template_failure(self, client, fake_notion, monkeypatch):
        async def bad_gateway(block_id, children, after=None):
            url = f"https://api.notion.com/v1/blocks/{block_id}/children"
            httpx.Response(502, request=httpx.Request("PATCH", url)).raise_for_status()

        monkeypatch.setattr(fake_notion, "append_block_children", bad_gateway)

        response = await client.post("/api/leads", json={"customerName": "Ada"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] in fake_notion.pages
        assert body == {"success": True, "id": body["id"], "templateSeeded": False}
        assert "api.notion.com" not in response.text

    @pytest.mark.asyncio
    async def test_list_only_leads(self, client, fake_notion):
        lead_id = fake_notion.add_page(lead_page_properties("Lead One"))
        fake_notion.add_page(lead_page_properties("Sale One", "Sale"))

        response = await client.get("/api/leads")

        assert response.status_code == 200
        leads = response.json()["leads"]
        assert [lead["id"] for lead in leads] == [lead_id]
        assert fake_notion.called("query_database")[0][1] == {
            "property": "Type",
            "select": {"equals": "Lead"},
        }

    @pytest.mark.asyncio
    async def test_partial_update_sends_only_present_fields(self, client, fake_notion):
        page_id = fake_notion.add_page(lead_page_properties())

        response = await client.patch(f"/api/leads/{page_id}", json={"city": "Austin"})

        assert response.status_code == 200
        assert response.json() == {"success": True}
        _, sent_id, properties = fake_notion.called("update_page")[0]
        assert sent_id == page_id
        assert properties == {"City": {"rich_text": [{"text": {"content": "Austin"}}]}}

    @pytest.mark.asyncio
    async def test_explicit_null_clears_field(self, client, fake_notion):
        page_id = fake_notion.add_page(lead_page_properties())

        await client.patch(f"/api/leads/{page_id}", json={"salesRepresentative": None})

        properties = fake_notion.called("update_page")[0][2]
        assert properties == {"Sales Representative": {"select": None}}

    @pytest.mark.asyncio
    async def test_convert_moves_lead_to_sales(self, client, fake_notion):
        page_id = fake_notion.add_page(lead_page_properties())

        response = await client.patch(f"/api/leads/{page_id}/convert")

        assert response.status_code == 200
        sales_date = response.json()["salesDate"]
        assert (await client.get("/api/leads")).json()["leads"] == []
        sales = (await client.get("/api/sales")).json()["sales"]
        assert [(s["id"], s["salesDate"]) for s in sales] == [(page_id, sales_date)]

    @pytest.mark.asyncio
    async def test_cancel(self, client, fake_notion):
        page_id = fake_notion.add_page(lead_page_properties())

        response = await client.patch(f"/api/leads/{page_id}/cancel")

        assert response.status_code == 200
        assert fake_notion.pages[page_id]["properties"]["Type"]["select"] == {"name": "Canceled"}

    @pytest.mark.asyncio
    async def test_invalid_id(self, client, fake_notion):
        response = await client.get("/api/leads/not-a-page")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid page ID"}
        assert fake_notion.calls == []

    @pytest.mark.asyncio
    async def test_upstream_failure_is_generic(self, client, fake_notion):
        fake_notion.fail.add("query_database")

        response = await client.get("/api/leads")

        assert response.status_code == 500
        assert response.json() == {"error": "Upstream request failed"}


class TestSaleAndPaymentRoutes:
    """Tests for the sales and payments views."""

    @pytest.mark.asyncio
    async def test_sale_status_update(self, client, fake_notion):
        page_id = fake_notion.add_page(lead_page_properties(record_type="Sale"))

        response = await client.patch(
            f"/api/sales/{page_id}", json={"appointmentStatus": "Scheduled"}
        )

        assert response.status_code == 200
        properties = fake_notion.called("update_page")[0][2]
        assert properties == {"Appointment Status": {"status": {"name": "Scheduled"}}}
        sale = (await client.get(f"/api/sales/{page_id}")).json()["sale"]
        assert sale["appointmentStatus"] == "Scheduled"

    @pytest.mark.asyncio
    async def test_payment_flags_default_to_no(self, client, fake_notion):
        fake_notion.add_page(lead_page_properties(record_type="Sale"))

        response = await client.get("/api/payments")

        payment = response.json()["payments"][0]
        assert payment["allPaymentsFinished"] == "No"
        assert payment["liveRepresentativePaid"] == "No"
        assert payment["salesRepresentativePaid"] == "No"

    @pytest.mark.asyncio
    async def test_payment_flags_read_independently(self, client, fake_notion):
        properties = lead_page_properties(record_type="Sale")
        properties["Live Representative Paid"] = {"type": "select", "select": {"name": "Yes"}}
        fake_notion.add_page(properties)

        payment = (await client.get("/api/payments")).json()["payments"][0]

        assert payment["liveRepresentativePaid"] == "Yes"
        assert payment["allPaymentsFinished"] == "No"

    @pytest.mark.asyncio
    async def test_mark_payments_finished(self, client, fake_notion):
        page_id = fake_notion.add_page(lead_page_properties(record_type="Sale"))

        response = await client.patch(
            f"/api/payments/{page_id}", json={"allPaymentsFinished": True}
        )

        assert response.status_code == 200
        payment = (await client.get("/api/payments")).json()["payments"][0]
        assert payment["allPaymentsFinished"] == "Yes"


class TestCommentRoutes:
    """Tests for comment listing, creation and deletion."""

    @pytest.mark.asyncio
    async def test_add_then_list(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        created = await client.post(
            f"/api/comments/{page_id}", json={"text": "Called customer", "sectionType": "sales"}
        )

        assert created.status_code == 200
        comment = created.json()["comment"]
        listed = await client.get(f"/api/comments/{page_id}", params={"section": "sales"})
        comments = listed.json()["comments"]
        assert len(comments) == 1
        assert comments[0]["text"] == "Called customer"
        assert comments[0]["timestamp"] == comment["timestamp"]
        assert comments[0]["blockId"] == comment["blockId"]

    @pytest.mark.asyncio
    async def test_missing_section_heading(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=[heading("Sales Documents")])

        response = await client.post(
            f"/api/comments/{page_id}", json={"text": "Hi", "sectionType": "appointment"}
        )

        assert response.status_code == 404
        assert "Appointment Comments" in response.json()["error"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload", [{"text": "", "sectionType": "sales"}, {"text": "Hi"}, {"text": "   "}]
    )
    async def test_text_and_section_required(self, client, fake_notion, payload):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.post(f"/api/comments/{page_id}", json=payload)

        assert response.status_code == 400
        assert response.json() == {"error": "Text and section type are required"}

    @pytest.mark.asyncio
    async def test_unknown_section_rejected(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.post(
            f"/api/comments/{page_id}", json={"text": "Hi", "sectionType": "billing"}
        )

        assert response.status_code == 400
        assert "error" in response.json()

    @pytest.mark.asyncio
    async def test_delete(self, client, fake_notion):
        comment = paragraph("[SALES COMMENT] **[Jan 5, 2025, 3:45 PM]**\nold")
        page_id = fake_notion.add_page(blocks=[heading("Sales Comments"), comment])

        response = await client.delete(
            f"/api/comments/{page_id}", params={"blockId": comment["id"]}
        )

        assert response.status_code == 200
        listed = await client.get(f"/api/comments/{page_id}")
        assert listed.json()["comments"] == []

    @pytest.mark.asyncio
    async def test_delete_requires_block_id(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.delete(f"/api/comments/{page_id}")

        assert response.status_code == 400
        assert response.json() == {"error": "Block ID is required"}
        assert fake_notion.called("delete_block") == []


class TestDocumentRoutes:
    """Tests for document listing, deletion and upload."""

    @pytest.mark.asyncio
    async def test_list_section(self, client, fake_notion):
        contract = pdf_file("https://f.example.com/contract.pdf")
        page_id = fake_notion.add_page(blocks=[heading("Sales Documents"), contract])

        response = await client.get(f"/api/documents/{page_id}", params={"section": "sales"})

        documents = response.json()["documents"]
        assert documents == [
            {
                "id": contract["id"],
                "type": "file",
                "fileName": "contract.pdf",
                "fileUrl": "https://f.example.com/contract.pdf",
                "createdTime": "2025-01-05T15:45:00.000Z",
                "lastEditedTime": "2025-01-05T15:45:00.000Z",
            }
        ]

    @pytest.mark.asyncio
    async def test_delete_then_absent(self, client, fake_notion):
        keep = image("https://f.example.com/keep.png")
        drop = image("https://f.example.com/drop.png")
        page_id = fake_notion.add_page(blocks=[heading("Sales Documents"), keep, drop])

        response = await client.delete(f"/api/documents/{page_id}", params={"blockId": drop["id"]})

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Document deleted successfully"}
        listed = (await client.get(f"/api/documents/{page_id}")).json()["documents"]
        assert [d["id"] for d in listed] == [keep["id"]]

    @pytest.mark.asyncio
    async def test_upload_image(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.post(
            f"/api/documents/{page_id}/upload",
            params={"section": "appointment"},
            files={"file": ("roof.jpg", b"\xff\xd8" * 1024, "image/jpeg")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Image uploaded successfully"
        assert body["document"]["fileName"] == "roof.jpg"
        listed = await client.get(f"/api/documents/{page_id}", params={"section": "appointment"})
        assert [d["id"] for d in listed.json()["documents"]] == [body["document"]["id"]]

    @pytest.mark.asyncio
    async def test_upload_pdf_defaults_to_sales(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.post(
            f"/api/documents/{page_id}/upload",
            files={"file": ("quote.pdf", b"%PDF-1.7", "application/pdf")},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "PDF uploaded successfully"
        assert response.json()["document"]["type"] == "file"
        listed = await client.get(f"/api/documents/{page_id}", params={"section": "sales"})
        assert len(listed.json()["documents"]) == 1

    @pytest.mark.asyncio
    async def test_upload_to_missing_section(self, client, fake_notion):
        page_id = fake_notion.add_page(
            blocks=[heading("Sales Comments"), paragraph(), heading("Sales Documents")]
        )

        response = await client.post(
            f"/api/documents/{page_id}/upload",
            params={"section": "appointment"},
            files={"file": ("site.jpg", b"\x00" * (2 * MIB), "image/jpeg")},
        )

        assert response.status_code == 404
        assert "Appointment Documents (Owner)" in response.json()["error"]
        assert fake_notion.called("append_block_children") == []

    @pytest.mark.asyncio
    async def test_upload_rejects_text(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.post(
            f"/api/documents/{page_id}/upload",
            files={"file": ("notes.txt", b"hello", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Only image files and PDFs are allowed"}
        assert fake_notion.calls == []

    @pytest.mark.asyncio
    async def test_upload_rejects_oversized(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.post(
            f"/api/documents/{page_id}/upload",
            files={"file": ("big.png", b"\x00" * (20 * MIB + 1), "image/png")},
        )

        assert response.status_code == 400
        assert response.json() == {"error": "File size must be less than 20MB"}
        assert fake_notion.calls == []

    @pytest.mark.asyncio
    async def test_upload_requires_file(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.post(f"/api/documents/{page_id}/upload")

        assert response.status_code == 400
        assert response.json() == {"error": "File is required"}


class TestSchemaRoute:
    """Tests for dropdown option discovery."""

    @pytest.mark.asyncio
    async def test_select_like_properties_only(self, client, fake_notion):
        fake_notion.database["properties"] = {
            "Sales Representative": {
                "type": "select",
                "select": {"options": [{"id": "a", "name": "Sam", "color": "blue"}]},
            },
            "Job Type": {
                "type": "multi_select",
                "multi_select": {"options": [{"id": "b", "name": "Camera", "color": "red"}]},
            },
            "Appointment Status": {
                "type": "status",
                "status": {"options": [{"id": "c", "name": "Scheduled", "color": "green"}]},
            },
            "Email": {"type": "rich_text", "rich_text": {}},
        }

        response = await client.get("/api/schema")

        schema = response.json()["schema"]
        assert set(schema) == {"Sales Representative", "Job Type", "Appointment Status"}
        assert schema["Job Type"] == {
            "type": "multi_select",
            "options": [{"id": "b", "name": "Camera", "color": "red"}],
        }


class TestErrorShapes:
    """Tests for error bodies and request guards."""

    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/api/unknown")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}

    @pytest.mark.asyncio
    async def test_csrf_rejects_foreign_origin(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.post(
            f"/api/comments/{page_id}",
            json={"text": "Hi", "sectionType": "sales"},
            headers={"Origin": "https://evil.example.com"},
        )

        assert response.status_code == 403
        assert fake_notion.calls == []

    @pytest.mark.asyncio
    async def test_csrf_allows_configured_origin(self, client, fake_notion):
        page_id = fake_notion.add_page(blocks=template_page_blocks())

        response = await client.post(
            f"/api/comments/{page_id}",
            json={"text": "Hi", "sectionType": "sales"},
            headers={"Origin": "http://localhost:3000"},
        )

        assert response.status_code == 200
