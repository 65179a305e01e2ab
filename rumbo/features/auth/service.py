"""
Auth Service
Lógica de negocio de autenticación
"""

import random
import re
import uuid
from typing import Optional, Tuple
from urllib.parse import quote

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.auth import hashing
from ...core.auth.exceptions import InvalidTokenException, SigningKeyMissingException
from ...core.auth.providers.google_oauth import GoogleIdentityBridge
from ...core.auth.roles import DEFAULT_ROLE, normalize_role
from ...core.auth.token_issuer import TokenIssuer
from ...core.database import translate_db_errors, utcnow
from ...core.logging import get_logger
from ...domain.models.user import User
from .repository import UserRepository
from .exceptions import (
    CurrentPasswordIncorrectException,
    DuplicateUserException,
    EmailRequiredException,
    EmailTakenException,
    IncompleteCredentialsException,
    IncorrectPasswordException,
    InvalidAccountCredentialDataException,
    InvalidEmailException,
    NameRequiredException,
    PasswordRequiredException,
    PasswordTooShortException,
    RoleRequiredException,
    UserNotFoundException,
    UsernameRequiredException,
    UsernameTakenException,
    UsernameTooShortException,
)

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
MIN_USERNAME_LENGTH = 3
USERNAME_BASE_LENGTH = 15
USERNAME_ATTEMPTS = 5


def synthesize_username(nombre: str) -> str:
    """Nombre de usuario para cuentas creadas desde Google: base_1234"""
    base = re.sub(r"[^a-z0-9]", "_", nombre.lower())[:USERNAME_BASE_LENGTH]
    return f"{base}{random.randint(1000, 9999)}"


class AuthService:
    """
    Servicio de autenticación

    Login con contraseña (con migración bcrypt → SHA-256), registro,
    login con Google y cambio de contraseña.

    DI Pattern: todas las dependencias llegan por el constructor.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        token_issuer: TokenIssuer,
        identity_bridge: GoogleIdentityBridge,
        db: AsyncSession,
        default_avatar_url: str = "",
    ):
        """
        Args:
            user_repo: repository de usuarios
            token_issuer: emisor de tokens de sesión
            identity_bridge: cliente userinfo de Google
            db: sesión asíncrona de la petición
            default_avatar_url: plantilla de avatar ({nombre}) para cuentas de Google sin foto
        """
        self.user_repo = user_repo
        self.token_issuer = token_issuer
        self.identity_bridge = identity_bridge
        self.db = db
        self.default_avatar_url = default_avatar_url

    @translate_db_errors
    async def authenticate_with_password(
        self, identifier: Optional[str], secret: Optional[str]
    ) -> Tuple[User, str]:
        """
        Login con email o nombre de usuario

        Si la cuenta guarda un hash bcrypt y la contraseña es correcta, se
        reescribe como SHA-256 antes de responder.

        Args:
            identifier: email o nombre de usuario (coincidencia exacta)
            secret: contraseña en claro

        Returns:
            Tuple[User, str]: (usuario, token)

        Raises:
            IncompleteCredentialsException: falta algún campo
            UserNotFoundException: no hay cuenta
            InvalidAccountCredentialDataException: la cuenta no tiene contraseña
            UnrecognizedCredentialEncodingException: hash en formato desconocido
            IncorrectPasswordException: contraseña incorrecta
        """
        identifier = (identifier or "").strip()
        if not identifier or not secret or not secret.strip():
            raise IncompleteCredentialsException()

        user = await self.user_repo.get_by_identifier(identifier)
        if user is None:
            raise UserNotFoundException()

        stored = user.contrasena_hash
        if not isinstance(stored, str) or not stored.strip():
            logger.error("account_without_password", usuario_id=str(user.id))
            raise InvalidAccountCredentialDataException()

        matched, scheme = hashing.verify(secret, stored)
        if not matched:
            raise IncorrectPasswordException()

        if scheme is hashing.HashScheme.ADAPTIVE_SALTED:
            user.contrasena_hash = hashing.fixed_digest(secret)
            user.updated_at = utcnow()
            token = await self._commit_with_token(user)
            logger.info("password_hash_migrated", usuario_id=str(user.id))
        else:
            token = self.token_issuer.issue_for_user(user)

        logger.info("login_succeeded", usuario_id=str(user.id))
        return user, token

    @translate_db_errors
    async def register(
        self,
        nombre: Optional[str],
        email: Optional[str],
        contrasena: Optional[str],
        nombre_usuario: Optional[str],
        rol: Optional[str],
    ) -> Tuple[User, str]:
        """
        Registro de una cuenta nueva

        La validación termina en el primer fallo y no toca la base de datos.

        Returns:
            Tuple[User, str]: (usuario creado, token)

        Raises:
            ValidationException: campo ausente o inválido (código específico)
            EmailTakenException: email ya registrado
            UsernameTakenException: nombre de usuario ocupado
            DuplicateUserException: conflicto detectado por la base de datos
        """
        nombre = (nombre or "").strip()
        email = (email or "").strip()
        nombre_usuario = (nombre_usuario or "").strip()
        rol = (rol or "").strip()

        if not nombre:
            raise NameRequiredException()
        if not email:
            raise EmailRequiredException()
        if not EMAIL_PATTERN.match(email):
            raise InvalidEmailException()
        if not contrasena:
            raise PasswordRequiredException()
        if len(contrasena) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShortException(MIN_PASSWORD_LENGTH)
        if not nombre_usuario:
            raise UsernameRequiredException()
        if len(nombre_usuario) < MIN_USERNAME_LENGTH:
            raise UsernameTooShortException(MIN_USERNAME_LENGTH)
        if not rol:
            raise RoleRequiredException()
        rol = normalize_role(rol)

        email = email.lower()

        existing = await self.user_repo.find_conflict(email, nombre_usuario)
        if existing is not None:
            if existing.email.lower() == email:
                raise EmailTakenException()
            raise UsernameTakenException()

        now = utcnow()
        user = User(
            id=uuid.uuid4(),
            nombre=nombre,
            email=email,
            nombre_usuario=nombre_usuario,
            contrasena_hash=hashing.fixed_digest(contrasena),
            rol=rol,
            fecha_creacion=now,
            updated_at=now,
        )

        try:
            user = await self.user_repo.save(user)
            token = await self._commit_with_token(user)
        except IntegrityError:
            await self.db.rollback()
            logger.warning("register_unique_violation", nombre_usuario=nombre_usuario)
            raise DuplicateUserException()

        logger.info("user_registered", usuario_id=str(user.id), rol=rol)
        return user, token

    @translate_db_errors
    async def authenticate_with_identity_bridge(
        self, access_token: Optional[str]
    ) -> Tuple[User, str]:
        """
        Login con un access token de Google

        Crea la cuenta la primera vez (sin contraseña).

        Returns:
            Tuple[User, str]: (usuario, token)

        Raises:
            InvalidTokenException: token vacío
            BridgeTokenInvalidException / BridgeTokenMalformedException /
            BridgeTimeoutException / NetworkErrorException: fallo de Google
        """
        access_token = (access_token or "").strip()
        if not access_token:
            raise InvalidTokenException()

        info = await self.identity_bridge.fetch_user_info(access_token)

        user = await self.user_repo.get_by_email(info.email)
        created = user is None
        if created:
            user = await self._create_bridge_account(info.email, info.nombre, info.foto)
        elif info.foto and not user.foto_perfil:
            user.foto_perfil = info.foto
            user.updated_at = utcnow()

        try:
            token = await self._commit_with_token(user)
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateUserException()

        if created:
            logger.info("google_account_created", usuario_id=str(user.id))
        logger.info("google_login_succeeded", usuario_id=str(user.id))
        return user, token

    async def _create_bridge_account(
        self, email: str, nombre: str, foto: Optional[str]
    ) -> User:
        nombre_usuario = synthesize_username(nombre)
        for _ in range(USERNAME_ATTEMPTS - 1):
            if not await self.user_repo.exists_by_username(nombre_usuario):
                break
            nombre_usuario = synthesize_username(nombre)

        now = utcnow()
        user = User(
            id=uuid.uuid4(),
            nombre=nombre,
            email=email,
            nombre_usuario=nombre_usuario,
            contrasena_hash=None,
            rol=DEFAULT_ROLE,
            foto_perfil=foto or self.default_avatar_url.format(nombre=quote(nombre)),
            fecha_creacion=now,
            updated_at=now,
        )
        try:
            return await self.user_repo.save(user)
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateUserException()

    async def _commit_with_token(self, user: User) -> str:
        """
        Emite el token y confirma la transacción

        Sin clave de firma no se confirma nada: la cuenta creada o el hash
        migrado se descartan con el rollback.
        """
        try:
            token = self.token_issuer.issue_for_user(user)
        except SigningKeyMissingException:
            await self.db.rollback()
            raise
        await self.db.commit()
        return token

    @translate_db_errors
    async def change_password(
        self,
        user_id: uuid.UUID,
        current: Optional[str],
        new: Optional[str],
    ) -> None:
        """
        Cambia la contraseña del usuario autenticado

        Verifica la actual con cualquier esquema soportado, sin migración.

        Raises:
            PasswordTooShortException: nueva contraseña < 6 caracteres
            UserNotFoundException: la cuenta ya no existe
            InvalidAccountCredentialDataException: cuenta sin contraseña
            CurrentPasswordIncorrectException: la actual no coincide
        """
        new = new or ""
        if len(new) < MIN_PASSWORD_LENGTH:
            raise PasswordTooShortException(MIN_PASSWORD_LENGTH)

        user = await self.user_repo.get(user_id)
        if user is None:
            raise UserNotFoundException()

        stored = user.contrasena_hash
        if not isinstance(stored, str) or not stored.strip():
            raise InvalidAccountCredentialDataException()

        matched, _ = hashing.verify(current or "", stored)
        if not matched:
            raise CurrentPasswordIncorrectException()

        user.contrasena_hash = hashing.fixed_digest(new)
        user.updated_at = utcnow()
        await self.db.commit()
        logger.info("password_changed", usuario_id=str(user.id))
