"""Tests for the contact form endpoint."""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models import ContactMessageDB


class TestContact:
    """Tests for POST /api/contact."""

    async def test_submit_contact(self, client: AsyncClient, session: AsyncSession) -> None:
        response = await client.post(
            "/api/contact",
            json={"name": "Jane", "email": "Jane@Example.com", "message": "Hello there"},
        )

        assert response.status_code == 201
        assert response.json() == {"success": True, "message": "Message received!"}

        stored = (await session.execute(select(ContactMessageDB))).scalars().all()
        assert len(stored) == 1
        assert stored[0].email == "jane@example.com"
        assert stored[0].message == "Hello there"

    async def test_no_token_needed(self, client: AsyncClient, auth_headers: dict) -> None:
        payload = {"name": "Jane", "email": "jane@example.com", "message": "Hi"}

        anonymous = await client.post("/api/contact", json=payload)
        signed_in = await client.post("/api/contact", json=payload, headers=auth_headers)
        bad_token = await client.post(
            "/api/contact",
            json=payload,
            headers={"Authorization": "Bearer garbage"},
        )

        assert anonymous.status_code == 201
        assert signed_in.status_code == 201
        assert bad_token.status_code == 201

    async def test_missing_message(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/contact",
            json={"name": "Jane", "email": "jane@example.com"},
        )

        assert response.status_code == 400

    async def test_invalid_email(self, client: AsyncClient) -> None:
        response = await client.post(
            "/api/contact",
            json={"name": "Jane", "email": "jane", "message": "Hi"},
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid email format"
