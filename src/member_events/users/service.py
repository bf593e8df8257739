from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, PersistenceFailure
from .repository import OperatorRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid Username or Password"

# Prefixes written by werkzeug.security.generate_password_hash.
_HASH_METHODS = ("scrypt:", "pbkdf2:")


def is_password_hash(value: str) -> bool:
    return value.startswith(_HASH_METHODS) and value.count("$") >= 2


@dataclass(frozen=True)
class SessionOperator:
    """What we store into the Flask session and echo back after login."""

    user_id: int
    name: str
    email: str
    mobile_number: Optional[str]


class AuthService:
    """Use case: authenticate an operator (login)."""

    def __init__(self, operators: OperatorRepository):
        self._operators = operators

    def authenticate(self, email: str, password: str) -> SessionOperator:
        email = require_non_empty(email, "Email")
        operator = self._operators.get_by_email(email)
        if not operator:
            logger.info("login rejected: unknown email %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        stored = operator.password
        if not stored:
            raise PersistenceFailure(f"operator {operator.user_id} has no password stored")

        if not is_password_hash(stored):
            # Accounts created before hashing was introduced: upgrade in place.
            stored = generate_password_hash(stored)
            self._operators.update_password(operator.user_id, stored)
            logger.info("upgraded plaintext password for operator %s", operator.user_id)

        if not check_password_hash(stored, password or ""):
            logger.info("login rejected: bad password for %s", email)
            raise AuthenticationError(INVALID_CREDENTIALS)

        return SessionOperator(
            user_id=operator.user_id,
            name=operator.name,
            email=operator.email,
            mobile_number=operator.mobile_number,
        )
