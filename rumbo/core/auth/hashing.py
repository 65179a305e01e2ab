"""
Password Hash Resolver
Clasificación y verificación de hashes almacenados (bcrypt heredado / SHA-256)

Las cuentas antiguas guardan bcrypt; las nuevas, SHA-256 en hex. El login
migra bcrypt → SHA-256 tras una verificación correcta.
"""

import hashlib
import hmac
import string
from enum import Enum
from typing import Tuple

from passlib.context import CryptContext

from .exceptions import UnrecognizedCredentialEncodingException

_HEX_DIGITS = frozenset(string.hexdigits)
_FIXED_DIGEST_LENGTH = 64


class HashScheme(str, Enum):
    """Variante de hash almacenado"""

    ADAPTIVE_SALTED = "bcrypt"
    FIXED_DIGEST = "sha256"


# Solo verificación: nunca se generan hashes bcrypt nuevos
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def classify(stored: str) -> HashScheme:
    """
    Clasifica un hash almacenado

    Args:
        stored: valor de `contrasena_hash`

    Returns:
        HashScheme: variante detectada

    Raises:
        UnrecognizedCredentialEncodingException: ni bcrypt ni SHA-256
    """
    value = stored.strip()
    if value.startswith("$2"):
        return HashScheme.ADAPTIVE_SALTED
    if len(value) == _FIXED_DIGEST_LENGTH and all(c in _HEX_DIGITS for c in value):
        return HashScheme.FIXED_DIGEST
    raise UnrecognizedCredentialEncodingException()


def fixed_digest(plain: str) -> str:
    """SHA-256 en hex minúsculas de la contraseña (UTF-8)"""
    return hashlib.sha256(plain.encode("utf-8")).hexdigest()


def verify_adaptive(plain: str, stored: str) -> bool:
    """Verifica contra un hash bcrypt"""
    try:
        return pwd_context.verify(plain, stored.strip())
    except ValueError:
        # hash bcrypt corrupto
        return False


def verify_fixed_digest(plain: str, stored: str) -> bool:
    """Compara en tiempo constante, sin distinguir mayúsculas en el hex"""
    return hmac.compare_digest(fixed_digest(plain), stored.strip().lower())


def verify(plain: str, stored: str) -> Tuple[bool, HashScheme]:
    """
    Verifica una contraseña con el esquema que corresponda

    Returns:
        Tuple[bool, HashScheme]: (coincide, esquema del hash almacenado)
    """
    scheme = classify(stored)
    if scheme is HashScheme.ADAPTIVE_SALTED:
        return verify_adaptive(plain, stored), scheme
    return verify_fixed_digest(plain, stored), scheme
