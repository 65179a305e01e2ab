"""
Token Issuer
Emisión y verificación de tokens de sesión (JWT)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from .exceptions import (
    InvalidTokenException,
    SigningKeyMissingException,
    TokenExpiredException,
)
from .roles import DEFAULT_ROLE


@dataclass(frozen=True)
class TokenClaims:
    """Claims verificados de un token de sesión"""

    id: str
    email: str
    nombre: Optional[str]
    rol: str
    expiracion: datetime


class TokenIssuer:
    """
    Emisor de tokens de sesión

    Tokens sin estado firmados con HMAC; validez de `expire_days` días.
    """

    def __init__(
        self,
        secret_key: Optional[str],
        algorithm: str = "HS256",
        expire_days: int = 7,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_days = expire_days

    def _require_key(self) -> str:
        if not self.secret_key:
            raise SigningKeyMissingException()
        return self.secret_key

    def issue(self, claims: Dict[str, Any], now: Optional[datetime] = None) -> str:
        """
        Firma un token

        Args:
            claims: debe contener id y email; nombre y rol son opcionales
            now: instante de emisión (por defecto, ahora en UTC)

        Returns:
            str: token firmado

        Raises:
            SigningKeyMissingException: no hay clave configurada
        """
        key = self._require_key()
        issued_at = now or datetime.now(timezone.utc)

        to_encode = {
            "sub": str(claims["id"]),
            "id": str(claims["id"]),
            "email": claims["email"],
            "nombre": claims.get("nombre"),
            "rol": claims.get("rol") or DEFAULT_ROLE,
            "iat": issued_at,
            "exp": issued_at + timedelta(days=self.expire_days),
        }
        return jwt.encode(to_encode, key, algorithm=self.algorithm)

    def issue_for_user(self, user) -> str:
        """Emite un token con los datos de un `User`"""
        return self.issue(
            {"id": user.id, "email": user.email, "nombre": user.nombre, "rol": user.rol}
        )

    def verify(self, token: str) -> TokenClaims:
        """
        Verifica firma y expiración

        Raises:
            TokenExpiredException: token caducado
            InvalidTokenException: firma, formato o claims inválidos
            SigningKeyMissingException: no hay clave configurada
        """
        key = self._require_key()
        try:
            payload = jwt.decode(token, key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredException()
        except JWTError:
            raise InvalidTokenException()

        user_id = payload.get("id") or payload.get("sub")
        email = payload.get("email")
        exp = payload.get("exp")
        if not user_id or not email or exp is None:
            raise InvalidTokenException()

        return TokenClaims(
            id=str(user_id),
            email=email,
            nombre=payload.get("nombre"),
            rol=payload.get("rol") or DEFAULT_ROLE,
            expiracion=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
