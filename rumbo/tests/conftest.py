"""
Pytest Configuration and Fixtures
Fixtures de pruebas: aplicación sobre SQLite en memoria y Google simulado
"""

from typing import Any, AsyncGenerator, Dict

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from rumbo.core.auth.providers.google_oauth import GoogleIdentityBridge
from rumbo.core.auth.token_issuer import TokenIssuer
from rumbo.core.config import Settings
from rumbo.features.test_results import models as test_models
from rumbo.main import create_app

TEST_SECRET = "rumbo-test-secret-key-0123456789abcdef"
GOOGLE_USERINFO_URL = "https://google.test/oauth2/v1/userinfo"


class GoogleStub:
    """Respuesta configurable del endpoint userinfo"""

    def __init__(self):
        self.status_code = 200
        self.payload: Dict[str, Any] = {
            "email": "luis@gmail.com",
            "name": "Luis Pérez",
            "picture": "https://lh3.googleusercontent.com/luis.jpg",
        }
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        app_env="test",
        database_url="sqlite+aiosqlite://",
        jwt_secret_key=TEST_SECRET,
        google_userinfo_url=GOOGLE_USERINFO_URL,
        log_level="WARNING",
    )


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(secret_key=TEST_SECRET)


@pytest.fixture
def google_stub() -> GoogleStub:
    return GoogleStub()


@pytest.fixture
async def app(settings: Settings, google_stub: GoogleStub):
    """Aplicación con tablas creadas y Google sustituido por MockTransport"""
    application = create_app(settings)
    application.state.identity_bridge = GoogleIdentityBridge(
        userinfo_url=settings.google_userinfo_url,
        transport=httpx.MockTransport(google_stub.handler),
    )
    await application.state.database.create_all()
    yield application
    await application.state.database.dispose()


@pytest.fixture
async def client(app) -> AsyncGenerator[httpx.AsyncClient, None]:
    """Cliente HTTP contra la aplicación (sin red)"""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def db_session(app) -> AsyncGenerator[AsyncSession, None]:
    """Sesión directa sobre la misma base de datos que usa la aplicación"""
    async with app.state.database.session_factory() as session:
        yield session


@pytest.fixture
def register(client: httpx.AsyncClient):
    """
    Registra un usuario por la API

    Returns:
        callable: async (nombre_usuario, **campos) -> (usuario, headers)
    """

    async def _register(nombre_usuario: str = "ana123", **fields):
        payload = {
            "nombre": fields.pop("nombre", nombre_usuario.capitalize()),
            "email": fields.pop("email", f"{nombre_usuario}@x.com"),
            "contrasena": fields.pop("contrasena", "secret1"),
            "nombreUsuario": nombre_usuario,
            "rol": fields.pop("rol", "user"),
        }
        payload.update(fields)
        response = await client.post("/api/auth/registro", json=payload)
        assert response.status_code == 201, response.text
        data = response.json()
        return data["usuario"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest.fixture
async def catalog(db_session: AsyncSession):
    """Dos tests activos (ids 1 y 2) y uno inactivo (id 3)"""
    db_session.add_all(
        [
            test_models.VocationalTest(id=1, nombre="Intereses", duracion=15, preguntas_total=40),
            test_models.VocationalTest(id=2, nombre="Aptitudes", duracion=20, preguntas_total=30),
            test_models.VocationalTest(id=3, nombre="Retirado", activo=False),
        ]
    )
    await db_session.commit()
