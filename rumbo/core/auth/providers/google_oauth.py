"""
Google OAuth Provider
Obtiene la identidad de Google a partir de un access token (endpoint userinfo)
"""

from dataclasses import dataclass
from typing import Optional

import httpx

from ...logging import get_logger
from ..exceptions import (
    BridgeTimeoutException,
    BridgeTokenInvalidException,
    BridgeTokenMalformedException,
    NetworkErrorException,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class GoogleUserInfo:
    """Identidad confirmada por Google"""

    email: str
    nombre: str
    foto: Optional[str] = None


class GoogleIdentityBridge:
    """
    Cliente del endpoint userinfo de Google

    El access token viaja en la cabecera Authorization, nunca en la URL,
    para que no acabe en los logs de acceso.
    """

    def __init__(
        self,
        userinfo_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            userinfo_url: URL del endpoint userinfo
            timeout: timeout total de la petición en segundos
            transport: transporte httpx alternativo (tests)
        """
        self.userinfo_url = userinfo_url
        self.timeout = timeout
        self.transport = transport

    async def fetch_user_info(self, access_token: str) -> GoogleUserInfo:
        """
        Consulta la identidad asociada al token

        Raises:
            BridgeTokenInvalidException: 401, otro 4xx o respuesta sin email
            BridgeTokenMalformedException: 400
            BridgeTimeoutException: sin respuesta dentro del timeout
            NetworkErrorException: fallo de conexión/DNS o 5xx de Google
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(
                    self.userinfo_url,
                    params={"alt": "json"},
                    headers={"Authorization": f"Bearer {access_token}"},
                )
        except httpx.TimeoutException:
            logger.warning("google_userinfo_timeout", timeout=self.timeout)
            raise BridgeTimeoutException()
        except httpx.TransportError as e:
            logger.warning("google_userinfo_network_error", error=type(e).__name__)
            raise NetworkErrorException(type(e).__name__)

        if response.status_code == 401:
            raise BridgeTokenInvalidException()
        if response.status_code == 400:
            raise BridgeTokenMalformedException()
        if response.status_code >= 500:
            logger.warning("google_userinfo_upstream_error", status_code=response.status_code)
            raise NetworkErrorException(f"HTTP {response.status_code}")
        if response.status_code != 200:
            raise BridgeTokenInvalidException()

        try:
            data = response.json()
        except ValueError:
            raise BridgeTokenInvalidException()

        email = (data.get("email") or "").strip().lower() if isinstance(data, dict) else ""
        if not email:
            raise BridgeTokenInvalidException()

        nombre = (data.get("name") or "").strip() or email.split("@")[0]
        return GoogleUserInfo(email=email, nombre=nombre, foto=data.get("picture") or None)
