"""
Test Results Integration Tests
Catálogo, resultados, estadísticas y ranking
"""

import uuid

import pytest
from httpx import AsyncClient


async def save(client: AsyncClient, headers, test_id: int, puntuacion: float, areas=None):
    response = await client.post(
        "/api/tests/guardar",
        json={"testId": test_id, "puntuacion": puntuacion, "areas": areas},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["datos"]


@pytest.mark.usefixtures("catalog")
class TestCatalog:
    @pytest.mark.asyncio
    async def test_lists_active_tests(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.get("/api/tests/", headers=headers)

        body = response.json()
        assert body["total"] == 2
        assert [t["id"] for t in body["datos"]] == [1, 2]

    @pytest.mark.asyncio
    async def test_inactive_test_not_found(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.get("/api/tests/detalle/3", headers=headers)

        assert response.status_code == 404
        assert response.json()["codigo"] == "TEST_NO_ENCONTRADO"


@pytest.mark.usefixtures("catalog")
class TestResults:
    @pytest.mark.asyncio
    async def test_save_and_list(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        saved = await save(client, headers, 1, 87.5, {"ciencias": 90})
        response = await client.get("/api/tests/mis-resultados", headers=headers)

        assert saved["areas"] == {"ciencias": 90}
        assert [r["id"] for r in response.json()["datos"]] == [saved["id"]]

    @pytest.mark.asyncio
    async def test_missing_score(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.post("/api/tests/guardar", json={"testId": 1}, headers=headers)

        assert response.status_code == 400
        assert response.json()["codigo"] == "DATOS_TEST_REQUERIDOS"

    @pytest.mark.asyncio
    async def test_delete_only_own_results(self, client: AsyncClient, register):
        _, ana_headers = await register("ana123")
        _, beto_headers = await register("beto")
        saved = await save(client, ana_headers, 1, 70)

        foreign = await client.delete(f"/api/tests/eliminar/{saved['id']}", headers=beto_headers)
        own = await client.delete(f"/api/tests/eliminar/{saved['id']}", headers=ana_headers)

        assert foreign.status_code == 404
        assert foreign.json()["codigo"] == "RESULTADO_NO_ENCONTRADO"
        assert own.status_code == 200

    @pytest.mark.asyncio
    async def test_stats(self, client: AsyncClient, register):
        _, headers = await register("ana123")
        await save(client, headers, 1, 60)
        await save(client, headers, 1, 80)
        await save(client, headers, 2, 90)

        response = await client.get("/api/tests/estadisticas", headers=headers)

        datos = response.json()["datos"]
        assert datos["total_tests"] == 3
        assert datos["promedio_general"] == 76.67
        assert datos["distribucion_tests"][0] == {"test_id": 1, "cantidad": 2, "promedio": 70.0}

    @pytest.mark.asyncio
    async def test_private_results_hidden(self, client: AsyncClient, register):
        ana, ana_headers = await register("ana123")
        _, beto_headers = await register("beto")
        await client.put("/api/usuario/perfil", json={"perfil_privado": True}, headers=ana_headers)

        response = await client.get(f"/api/tests/resultados/{ana['id']}", headers=beto_headers)

        assert response.status_code == 403
        assert response.json()["codigo"] == "PERFIL_PRIVADO"


@pytest.mark.usefixtures("catalog")
class TestUpdateResult:
    @pytest.mark.asyncio
    async def test_update_own_result(self, client: AsyncClient, register):
        _, headers = await register("ana123")
        saved = await save(client, headers, 1, 60, {"ciencias": 50})

        response = await client.put(
            f"/api/tests/{saved['id']}", json={"puntuacion": 88}, headers=headers
        )

        assert response.status_code == 200
        datos = response.json()["datos"]
        assert datos["puntuacion"] == 88.0
        assert datos["areas"] == {"ciencias": 50}

    @pytest.mark.asyncio
    async def test_foreign_result_forbidden(self, client: AsyncClient, register):
        _, ana_headers = await register("ana123")
        _, beto_headers = await register("beto")
        saved = await save(client, ana_headers, 1, 60)

        response = await client.put(
            f"/api/tests/{saved['id']}", json={"puntuacion": 100}, headers=beto_headers
        )

        assert response.status_code == 403
        assert response.json()["codigo"] == "RESULTADO_AJENO"

    @pytest.mark.asyncio
    async def test_unknown_result(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.put(
            f"/api/tests/{uuid.uuid4()}", json={"puntuacion": 10}, headers=headers
        )

        assert response.status_code == 404
        assert response.json()["codigo"] == "RESULTADO_NO_ENCONTRADO"

    @pytest.mark.asyncio
    async def test_empty_update(self, client: AsyncClient, register):
        _, headers = await register("ana123")
        saved = await save(client, headers, 1, 60)

        response = await client.put(f"/api/tests/{saved['id']}", json={}, headers=headers)

        assert response.status_code == 400
        assert response.json()["codigo"] == "SIN_DATOS_ACTUALIZAR"


@pytest.mark.usefixtures("catalog")
class TestSummary:
    @pytest.mark.asyncio
    async def test_own_summary(self, client: AsyncClient, register):
        ana, headers = await register("ana123")
        await save(client, headers, 2, 90)

        response = await client.get("/api/tests/resumen", headers=headers)

        datos = response.json()["datos"]
        assert datos["usuario"] == {"id": ana["id"], "es_propietario": True}
        assert len(datos["resultados"]) == 1
        assert datos["estadisticas"]["total_tests"] == 1
        assert [t["id"] for t in datos["tests_disponibles"]] == [1, 2]
        assert datos["permisos"] == {"ver_resultados": True, "ver_estadisticas": True}

    @pytest.mark.asyncio
    async def test_private_profile_summary_is_empty(self, client: AsyncClient, register):
        ana, ana_headers = await register("ana123")
        _, beto_headers = await register("beto")
        await save(client, ana_headers, 1, 70)
        await client.put("/api/usuario/perfil", json={"perfil_privado": True}, headers=ana_headers)

        response = await client.get(f"/api/tests/resumen/{ana['id']}", headers=beto_headers)

        assert response.status_code == 200
        datos = response.json()["datos"]
        assert datos["resultados"] == []
        assert datos["estadisticas"]["total_tests"] == 0
        assert datos["usuario"]["es_propietario"] is False
        assert datos["permisos"] == {"ver_resultados": False, "ver_estadisticas": False}

    @pytest.mark.asyncio
    async def test_unknown_user_summary(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.get(f"/api/tests/resumen/{uuid.uuid4()}", headers=headers)

        assert response.status_code == 404


@pytest.mark.usefixtures("catalog")
class TestRanking:
    @pytest.mark.asyncio
    async def test_best_score_per_user(self, client: AsyncClient, register):
        ana, ana_headers = await register("ana123")
        beto, beto_headers = await register("beto")
        await save(client, ana_headers, 1, 70)
        await save(client, ana_headers, 1, 95)
        await save(client, beto_headers, 1, 80)

        response = await client.get("/api/tests/1/ranking", headers=ana_headers)

        datos = response.json()["datos"]
        assert [(r["posicion"], r["usuario_id"], r["mejor_puntuacion"]) for r in datos] == [
            (1, ana["id"], 95.0),
            (2, beto["id"], 80.0),
        ]

    @pytest.mark.asyncio
    async def test_limit(self, client: AsyncClient, register):
        _, ana_headers = await register("ana123")
        _, beto_headers = await register("beto")
        await save(client, ana_headers, 1, 70)
        await save(client, beto_headers, 1, 80)

        response = await client.get("/api/tests/1/ranking", params={"limite": 1}, headers=ana_headers)

        assert len(response.json()["datos"]) == 1

    @pytest.mark.asyncio
    async def test_unknown_test(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.get("/api/tests/42/ranking", headers=headers)

        assert response.status_code == 404
        assert response.json()["codigo"] == "TEST_NO_ENCONTRADO"
