"""
Test Results Service Unit Tests
"""

import uuid
from datetime import datetime
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from rumbo.features.test_results import exceptions as test_exceptions
from rumbo.features.test_results import repository as test_repository
from rumbo.features.test_results import service as test_service
from rumbo.features.user.exceptions import NoDataToUpdateException, PrivateProfileException
from rumbo.features.user.privacy import PrivacyGate

ME = uuid.uuid4()


@pytest.fixture
def test_repo():
    repo = AsyncMock(spec=test_repository.VocationalTestRepository)
    repo.get_active.return_value = MagicMock(id=1)
    return repo


@pytest.fixture
def result_repo():
    return AsyncMock(spec=test_repository.TestResultRepository)


@pytest.fixture
def db():
    return AsyncMock()


@pytest.fixture
def service(test_repo, result_repo, db):
    return test_service.TestResultsService(
        test_repo=test_repo,
        result_repo=result_repo,
        privacy_gate=AsyncMock(spec=PrivacyGate),
        db=db,
    )


class TestSaveResult:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("test_id, puntuacion", [(None, 80.0), (1, None)])
    async def test_required_fields(self, service, result_repo, test_id, puntuacion):
        with pytest.raises(test_exceptions.TestDataRequiredException):
            await service.save_result(ME, test_id, puntuacion)

        result_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_test(self, service, test_repo, result_repo):
        test_repo.get_active.return_value = None

        with pytest.raises(test_exceptions.TestNotFoundException):
            await service.save_result(ME, 99, 50)

        result_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_score_is_valid(self, service, result_repo, db):
        await service.save_result(ME, 1, 0, {"artes": 0})

        result_repo.create.assert_awaited_once_with(
            usuario_id=ME, test_id=1, puntuacion=0.0, areas={"artes": 0}
        )
        db.commit.assert_awaited_once()


class TestUpdateResult:
    @pytest.mark.asyncio
    async def test_requires_a_field(self, service, result_repo):
        with pytest.raises(NoDataToUpdateException):
            await service.update_result(uuid.uuid4(), ME)

        result_repo.get.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_result(self, service, result_repo, db):
        result_repo.get.return_value = None

        with pytest.raises(test_exceptions.ResultNotFoundException):
            await service.update_result(uuid.uuid4(), ME, puntuacion=50)

        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_foreign_result(self, service, result_repo, db):
        result_repo.get.return_value = SimpleNamespace(usuario_id=uuid.uuid4(), puntuacion=40.0, areas=None)

        with pytest.raises(test_exceptions.ResultNotOwnedException) as exc_info:
            await service.update_result(uuid.uuid4(), ME, puntuacion=99)

        assert exc_info.value.status_code == 403
        db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_only_given_fields_change(self, service, result_repo, db):
        stored = SimpleNamespace(usuario_id=ME, puntuacion=40.0, areas={"artes": 10})
        result_repo.get.return_value = stored

        updated = await service.update_result(uuid.uuid4(), ME, puntuacion=75)

        assert updated is stored
        assert stored.puntuacion == 75.0
        assert stored.areas == {"artes": 10}
        db.commit.assert_awaited_once()


class TestSummary:
    @pytest.mark.asyncio
    async def test_private_profile_gives_empty_summary(self, service, test_repo, result_repo):
        service.privacy_gate.ensure_can_view.side_effect = PrivateProfileException()
        test_repo.list_active.return_value = []
        other = uuid.uuid4()

        summary = await service.summary(other, ME)

        assert summary.resultados == []
        assert summary.estadisticas.total_tests == 0
        assert summary.permisos.ver_resultados is False
        assert summary.permisos.ver_estadisticas is False
        assert summary.usuario.id == other
        assert summary.usuario.es_propietario is False
        result_repo.list_by_user.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_own_summary(self, service, test_repo, result_repo):
        test_repo.list_active.return_value = []
        result_repo.list_by_user.return_value = []
        result_repo.summary.return_value = (0, None, None)
        result_repo.distribution.return_value = []

        summary = await service.summary(ME, ME)

        assert summary.usuario.es_propietario is True
        assert summary.permisos.ver_resultados is True


class TestStatsAndRanking:
    @pytest.mark.asyncio
    async def test_stats(self, service, result_repo):
        last = datetime(2030, 5, 1, 12, 0)
        result_repo.summary.return_value = (3, 71.6666, last)
        result_repo.distribution.return_value = [(1, 2, 65.0), (2, 1, 85.0)]

        stats = await service.stats(ME, ME)

        assert stats.total_tests == 3
        assert stats.promedio_general == 71.67
        assert stats.ultimo_test_fecha == last
        assert [d.test_id for d in stats.distribucion_tests] == [1, 2]

    @pytest.mark.asyncio
    async def test_stats_without_results(self, service, result_repo):
        result_repo.summary.return_value = (0, None, None)
        result_repo.distribution.return_value = []

        stats = await service.stats(ME, ME)

        assert stats.total_tests == 0
        assert stats.promedio_general == 0.0
        assert stats.ultimo_test_fecha is None

    @pytest.mark.asyncio
    async def test_ranking_positions(self, service, result_repo):
        rows = [
            SimpleNamespace(
                usuario_id=uuid.uuid4(),
                nombre_usuario=name,
                foto_perfil=None,
                mejor_puntuacion=score,
                ultima_fecha=None,
            )
            for name, score in [("zoe", 95.0), ("ana", 80.0)]
        ]
        result_repo.ranking.return_value = rows

        ranking = await service.ranking(1)

        assert [(r.posicion, r.nombre_usuario) for r in ranking] == [(1, "zoe"), (2, "ana")]
        result_repo.ranking.assert_awaited_once_with(1, 10)

    @pytest.mark.asyncio
    async def test_ranking_limit_clamped(self, service, result_repo):
        result_repo.ranking.return_value = []

        await service.ranking(1, limit=1000)

        result_repo.ranking.assert_awaited_once_with(1, 100)
