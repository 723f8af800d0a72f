"""Credential store: user accounts and password handling."""

import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.errors import AuthError, ConflictError, StorageError, ValidationError
from src.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_BCRYPT_ROUNDS = 12


def build_password_context(rounds: int = DEFAULT_BCRYPT_ROUNDS) -> CryptContext:
    """Password hashing context; the bcrypt cost factor is configurable."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


class CredentialStore:
    """Registers users and checks their credentials."""

    def __init__(self, db: Session, pwd_context: CryptContext | None = None):
        self.db = db
        self.pwd_context = pwd_context or build_password_context()

    def hash_password(self, password: str) -> str:
        """Hash a password."""
        return self.pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return self.pwd_context.verify(plain_password, hashed_password)

    def register(self, email: str, password: str, name: str | None = None) -> User:
        """Create a new user.

        Raises:
            ValidationError: email or password is missing or empty
            ConflictError: the email is already registered
            StorageError: the insert failed for any other reason
        """
        if not email or not password:
            raise ValidationError("Email and password required")

        if self.find_by_email(email) is not None:
            raise ConflictError("Email already exists")

        user = User(email=email, password_hash=self.hash_password(password), name=name or None)
        try:
            self.db.add(user)
            self.db.commit()
        except IntegrityError:
            # Lost a race with a concurrent registration for the same email
            self.db.rollback()
            raise ConflictError("Email already exists") from None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to create user: {e}")
            raise StorageError() from e

        self.db.refresh(user)
        logger.info(f"Registered user {user.id}")
        return user

    def find_by_email(self, email: str) -> User | None:
        """Get a user (including the password hash) by exact email."""
        try:
            return self.db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error(f"User lookup by email failed: {e}")
            raise StorageError() from e

    def find_by_id(self, user_id: int) -> User | None:
        """Get a user by id."""
        try:
            return self.db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"User lookup by id failed: {e}")
            raise StorageError() from e

    def authenticate(self, email: str, password: str) -> User:
        """Authenticate a user by email and password.

        Unknown emails and wrong passwords fail with the same message.
        """
        if not email or not password:
            raise ValidationError("Email and password required")

        user = self.find_by_email(email)
        if user is None or not self.verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise AuthError("Invalid credentials")
        return user

    def delete_user(self, user_id: int) -> bool:
        """Delete a user along with their favorites and sessions.

        Administrative only; no API endpoint calls this.
        """
        user = self.find_by_id(user_id)
        if user is None:
            return False
        try:
            self.db.delete(user)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to delete user {user_id}: {e}")
            raise StorageError() from e
        logger.info(f"Deleted user {user_id}")
        return True
