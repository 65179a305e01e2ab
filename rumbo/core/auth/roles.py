"""
User Roles
Roles permitidos y normalización
"""

from .exceptions import InvalidRoleException

DEFAULT_ROLE = "user"

ALLOWED_ROLES = frozenset({"user", "admin", "estudiante", "egresado", "maestro"})

ROLE_ALIASES = {
    "usuario": "user",
    "administrador": "admin",
    "student": "estudiante",
    "alumno": "estudiante",
    "graduate": "egresado",
    "teacher": "maestro",
    "profesor": "maestro",
}


def normalize_role(rol: str) -> str:
    """
    Normaliza un rol recibido del cliente

    Raises:
        InvalidRoleException: el rol no está permitido
    """
    value = rol.strip().lower()
    value = ROLE_ALIASES.get(value, value)
    if value not in ALLOWED_ROLES:
        raise InvalidRoleException(rol)
    return value
