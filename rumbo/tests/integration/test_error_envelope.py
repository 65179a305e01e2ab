"""
Error Envelope Integration Tests
Forma común de los errores y endpoints de sistema
"""

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from rumbo.core.database import Base
from rumbo.domain.models.user import User


class TestErrorEnvelope:
    @pytest.mark.asyncio
    async def test_envelope_carries_request_id(self, client: AsyncClient):
        response = await client.post(
            "/api/auth/login",
            json={"identificador": "nadie", "contrasena": "x"},
            headers={"X-Request-ID": "4b1e2a1c9f7d4e0a8b6c5d3e2f1a0b9c"},
        )

        body = response.json()
        assert body["exito"] is False
        assert body["request_id"] == "4b1e2a1c9f7d4e0a8b6c5d3e2f1a0b9c"
        assert response.headers["X-Request-ID"] == body["request_id"]

    @pytest.mark.asyncio
    async def test_unknown_route(self, client: AsyncClient):
        response = await client.get("/api/no-existe")

        assert response.status_code == 404
        assert response.json()["codigo"] == "RECURSO_NO_ENCONTRADO"

    @pytest.mark.asyncio
    async def test_body_shape_error(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.post(
            "/api/tests/guardar", json={"testId": "uno", "puntuacion": 5}, headers=headers
        )

        assert response.status_code == 422
        body = response.json()
        assert body["codigo"] == "DATOS_INVALIDOS"
        assert body["errores"]

    @pytest.mark.asyncio
    async def test_database_failure(self, app, client: AsyncClient):
        async with app.state.database.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        response = await client.post(
            "/api/auth/login", json={"identificador": "ana@x.com", "contrasena": "secret1"}
        )

        assert response.status_code == 502
        assert response.json()["codigo"] == "ERROR_BASE_DATOS"

    @pytest.mark.asyncio
    async def test_missing_signing_key(self, app, settings, client: AsyncClient, db_session):
        payload = {
            "nombre": "Ana",
            "email": "ana@x.com",
            "contrasena": "secret1",
            "nombreUsuario": "ana123",
            "rol": "user",
        }
        app.state.token_issuer.secret_key = None

        response = await client.post("/api/auth/registro", json=payload)

        assert response.status_code == 500
        assert response.json()["codigo"] == "CLAVE_FIRMA_FALTANTE"
        count = await db_session.scalar(select(func.count()).select_from(User))
        assert count == 0

        app.state.token_issuer.secret_key = settings.jwt_secret_key
        retry = await client.post("/api/auth/registro", json=payload)

        assert retry.status_code == 201


class TestSystemEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["environment"] == "test"

    @pytest.mark.asyncio
    async def test_root(self, client: AsyncClient):
        response = await client.get("/")

        assert response.json()["exito"] is True
