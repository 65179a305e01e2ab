"""
Profile & Follow Integration Tests
Perfiles, privacidad, búsqueda y grafo de seguimiento
"""

import uuid

import pytest
from httpx import AsyncClient


class TestProfile:
    @pytest.mark.asyncio
    async def test_own_profile(self, client: AsyncClient, register):
        usuario, headers = await register("ana123")

        response = await client.get("/api/usuario/perfil", headers=headers)

        assert response.status_code == 200
        assert response.json()["usuario"]["email"] == usuario["email"]

    @pytest.mark.asyncio
    async def test_update_profile(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.put(
            "/api/usuario/perfil",
            json={"biografia": "Me gusta la biología", "perfil_privado": True, "role": "student"},
            headers=headers,
        )

        assert response.status_code == 200
        usuario = response.json()["usuario"]
        assert usuario["biografia"] == "Me gusta la biología"
        assert usuario["perfil_privado"] is True
        assert usuario["rol"] == "estudiante"

    @pytest.mark.asyncio
    async def test_update_without_data(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.put("/api/usuario/perfil", json={}, headers=headers)

        assert response.status_code == 400
        assert response.json()["codigo"] == "SIN_DATOS_ACTUALIZAR"

    @pytest.mark.asyncio
    async def test_public_profile_hides_email(self, client: AsyncClient, register):
        ana, _ = await register("ana123")
        _, beto_headers = await register("beto")

        response = await client.get(f"/api/usuario/perfil/{ana['id']}", headers=beto_headers)

        assert response.status_code == 200
        perfil = response.json()["usuario"]
        assert "email" not in perfil
        assert perfil["seguidores"] == 0
        assert perfil["siguiendo"] is False

    @pytest.mark.asyncio
    async def test_unknown_profile(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.get(f"/api/usuario/perfil/{uuid.uuid4()}", headers=headers)

        assert response.status_code == 404
        assert response.json()["codigo"] == "USUARIO_NO_ENCONTRADO"


class TestPrivacy:
    """Perfil privado: visible solo para el dueño y sus seguidores"""

    @pytest.mark.asyncio
    async def test_private_profile_requires_follow(self, client: AsyncClient, register):
        ana, ana_headers = await register("ana123")
        _, beto_headers = await register("beto")
        await client.put("/api/usuario/perfil", json={"perfil_privado": True}, headers=ana_headers)

        blocked = await client.get(f"/api/usuario/estadisticas/{ana['id']}", headers=beto_headers)
        assert blocked.status_code == 403
        assert blocked.json()["codigo"] == "PERFIL_PRIVADO"

        follow = await client.post(f"/api/usuario/seguir/{ana['id']}", headers=beto_headers)
        assert follow.status_code == 200

        allowed = await client.get(f"/api/usuario/estadisticas/{ana['id']}", headers=beto_headers)
        assert allowed.status_code == 200
        assert allowed.json()["datos"]["seguidores"] == 1
        assert allowed.json()["datos"]["privacidad"] is True

    @pytest.mark.asyncio
    async def test_owner_sees_private_data(self, client: AsyncClient, register):
        ana, headers = await register("ana123")
        await client.put("/api/usuario/perfil", json={"perfil_privado": True}, headers=headers)

        response = await client.get(f"/api/usuario/seguidores/{ana['id']}", headers=headers)

        assert response.status_code == 200
        assert response.json()["datos"] == []


class TestFollow:
    @pytest.mark.asyncio
    async def test_follow_lifecycle(self, client: AsyncClient, register):
        ana, ana_headers = await register("ana123")
        beto, beto_headers = await register("beto")

        await client.post(f"/api/usuario/seguir/{ana['id']}", headers=beto_headers)

        check = await client.get(
            f"/api/usuario/verificar-seguimiento/{ana['id']}", headers=beto_headers
        )
        followers = await client.get("/api/usuario/seguidores", headers=ana_headers)
        following = await client.get("/api/usuario/seguidos", headers=beto_headers)

        assert check.json()["sigue"] is True
        assert [u["id"] for u in followers.json()["datos"]] == [beto["id"]]
        assert [u["id"] for u in following.json()["datos"]] == [ana["id"]]

        unfollow = await client.delete(f"/api/usuario/seguir/{ana['id']}", headers=beto_headers)
        again = await client.delete(f"/api/usuario/seguir/{ana['id']}", headers=beto_headers)

        assert unfollow.status_code == 200
        assert again.status_code == 404
        assert again.json()["codigo"] == "NO_SIGUE_USUARIO"

    @pytest.mark.asyncio
    async def test_self_follow(self, client: AsyncClient, register):
        ana, headers = await register("ana123")

        response = await client.post(f"/api/usuario/seguir/{ana['id']}", headers=headers)

        assert response.status_code == 400
        assert response.json()["codigo"] == "AUTO_SEGUIMIENTO"

    @pytest.mark.asyncio
    async def test_duplicate_follow(self, client: AsyncClient, register):
        ana, _ = await register("ana123")
        _, beto_headers = await register("beto")

        await client.post(f"/api/usuario/seguir/{ana['id']}", headers=beto_headers)
        response = await client.post(f"/api/usuario/seguir/{ana['id']}", headers=beto_headers)

        assert response.status_code == 409
        assert response.json()["codigo"] == "YA_SIGUE_USUARIO"

    @pytest.mark.asyncio
    async def test_follow_unknown_user(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.post(f"/api/usuario/seguir/{uuid.uuid4()}", headers=headers)

        assert response.status_code == 404
        assert response.json()["codigo"] == "USUARIO_NO_ENCONTRADO"


class TestSearch:
    @pytest.mark.asyncio
    async def test_search_excludes_requester(self, client: AsyncClient, register):
        _, headers = await register("anabel", nombre="Anabel")
        await register("ana123", nombre="Ana")
        await register("beto", nombre="Beto")

        response = await client.get("/api/usuario/buscar", params={"q": "ANA"}, headers=headers)

        assert response.status_code == 200
        assert [u["nombre_usuario"] for u in response.json()["datos"]] == ["ana123"]

    @pytest.mark.asyncio
    async def test_search_term_too_short(self, client: AsyncClient, register):
        _, headers = await register("ana123")

        response = await client.get("/api/usuario/buscar", params={"q": "a"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["codigo"] == "BUSQUEDA_MUY_CORTA"

    @pytest.mark.asyncio
    async def test_search_by_role(self, client: AsyncClient, register):
        _, headers = await register("ana123")
        await register("profe", rol="maestro")

        response = await client.get("/api/usuario/buscar-por-rol/teacher", headers=headers)

        assert [u["nombre_usuario"] for u in response.json()["datos"]] == ["profe"]

    @pytest.mark.asyncio
    async def test_username_suggestions(self, client: AsyncClient, register):
        _, headers = await register("ana123")
        await register("ana1231")

        response = await client.get("/api/usuario/verificar-username/ana123", headers=headers)

        body = response.json()
        assert body["disponible"] is False
        assert body["sugerencias"] == ["ana1232", "ana1233", "ana1234"]


class TestDashboard:
    @pytest.mark.asyncio
    async def test_dashboard(self, client: AsyncClient, register):
        _, headers = await register("ana123")
        await client.post(
            "/api/vocacional/resultado",
            json={"respuestas": {"p1": 5}, "carreras": ["Biología"], "zona_ikigai": "pasion"},
            headers=headers,
        )

        response = await client.get("/api/usuario/dashboard", headers=headers)

        datos = response.json()["datos"]
        assert datos["usuario"]["nombre_usuario"] == "ana123"
        assert datos["estadisticas"]["resultados_vocacionales"] == 1
        assert datos["ultimo_resultado_vocacional"]["zona_ikigai"] == "pasion"
        assert datos["ultimo_resultado_vocacional"]["carreras"] == ["Biología"]
