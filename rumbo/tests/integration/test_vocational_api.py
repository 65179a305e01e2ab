"""
Vocational Results Integration Tests
"""

import pytest
from httpx import AsyncClient

RESULT = {
    "respuestas": {"p1": 4, "p2": 5},
    "carreras": ["Medicina", "Biología"],
    "promedio_general": 4.5,
    "zona_ikigai": "pasion",
}


class TestVocationalResults:
    @pytest.mark.asyncio
    async def test_save_and_read_latest(self, client: AsyncClient, register):
        ana, headers = await register("ana123")

        saved = await client.post("/api/vocacional/resultado", json=RESULT, headers=headers)
        latest = await client.get(f"/api/vocacional/ultimo/{ana['id']}", headers=headers)

        assert saved.status_code == 201
        assert latest.status_code == 200
        datos = latest.json()["datos"]
        assert datos["id"] == saved.json()["datos"]["id"]
        assert datos["respuestas"] == {"p1": 4, "p2": 5}
        assert datos["carreras"] == ["Medicina", "Biología"]

    @pytest.mark.asyncio
    async def test_missing_fields(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.post(
            "/api/vocacional/resultado", json={"respuestas": {"p1": 1}}, headers=headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["codigo"] == "DATOS_VOCACIONALES_REQUERIDOS"
        assert body["detalles"]["faltantes"] == ["carreras", "zona_ikigai"]

    @pytest.mark.asyncio
    async def test_latest_without_results(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.get("/api/vocacional/ultimo", headers=headers)

        assert response.status_code == 404
        assert response.json()["codigo"] == "RESULTADO_NO_ENCONTRADO"

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient, register):
        ana, headers = await register("ana123")
        for zona, promedio in [("pasion", 4.0), ("pasion", 3.0), ("mision", 2.0)]:
            await client.post(
                "/api/vocacional/resultado",
                json={**RESULT, "zona_ikigai": zona, "promedio_general": promedio},
                headers=headers,
            )

        response = await client.get(f"/api/vocacional/estadisticas/{ana['id']}", headers=headers)

        datos = response.json()["datos"]
        assert datos["total_resultados"] == 3
        assert datos["promedio_general"] == "3.00"
        assert datos["distribucion_zonas"] == [
            {"zona_ikigai": "pasion", "cantidad": 2, "porcentaje": 67},
            {"zona_ikigai": "mision", "cantidad": 1, "porcentaje": 33},
        ]

    @pytest.mark.asyncio
    async def test_empty_stats(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.get("/api/vocacional/estadisticas", headers=headers)

        assert response.json()["datos"] == {
            "total_resultados": 0,
            "promedio_general": "0.00",
            "distribucion_zonas": [],
        }

    @pytest.mark.asyncio
    async def test_history_private_profile(self, client: AsyncClient, register):
        ana, ana_headers = await register("ana123")
        _, beto_headers = await register("beto")
        await client.post("/api/vocacional/resultado", json=RESULT, headers=ana_headers)
        await client.put("/api/usuario/perfil", json={"perfil_privado": True}, headers=ana_headers)

        blocked = await client.get(f"/api/vocacional/historial/{ana['id']}", headers=beto_headers)
        await client.post(f"/api/usuario/seguir/{ana['id']}", headers=beto_headers)
        allowed = await client.get(f"/api/vocacional/historial/{ana['id']}", headers=beto_headers)

        assert blocked.status_code == 403
        assert blocked.json()["codigo"] == "PERFIL_PRIVADO"
        assert allowed.json()["total"] == 1

    @pytest.mark.asyncio
    async def test_delete(self, client: AsyncClient, register):
        _, headers = await register("ana123")
        saved = await client.post("/api/vocacional/resultado", json=RESULT, headers=headers)
        result_id = saved.json()["datos"]["id"]

        deleted = await client.delete(f"/api/vocacional/resultado/{result_id}", headers=headers)
        history = await client.get("/api/vocacional/resultados", headers=headers)

        assert deleted.status_code == 200
        assert history.json()["datos"] == []
