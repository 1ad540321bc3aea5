"""
Auth Service
Back-office login and profile management
"""
import logging
from typing import Optional, Tuple

from storefront.core.auth import create_access_token, hash_password, verify_password
from storefront.core.exceptions import ConflictError, InvalidRequestError, NotFoundError
from storefront.domain.user import User, ProfileUpdate
from storefront.repositories.user_repository import UserRepository


logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Wrong email/password or a disabled account"""


class AuthService:

    def __init__(self, user_repo: UserRepository = None):
        self.user_repo = user_repo or UserRepository()

    def login(self, email: str, password: str) -> Tuple[str, User]:
        """
        Check credentials and issue an access token

        Raises:
            AuthenticationError: unknown email, wrong password, or inactive user
        """
        found = self.user_repo.find_with_password_by_email(email)
        if not found:
            logger.info(f"Login failed for unknown email {email}")
            raise AuthenticationError("Invalid email or password")

        user, password_hash = found
        if not verify_password(password, password_hash):
            logger.info(f"Login failed for {email}: wrong password")
            raise AuthenticationError("Invalid email or password")

        if not user.is_active:
            raise AuthenticationError("Account is disabled")

        token = create_access_token(user.id, user.email, user.name, user.role)
        logger.info(f"User {user.email} logged in")
        return token, user

    def get_user(self, user_id: int) -> User:
        user = self.user_repo.find_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: int, data: ProfileUpdate) -> User:
        email: Optional[str] = str(data.email) if data.email else None
        if email and self.user_repo.email_taken(email, exclude_user_id=user_id):
            raise ConflictError("Email already registered")

        user = self.user_repo.update_profile(user_id, email=email, name=data.name)
        if not user:
            raise NotFoundError("User not found")
        return user

    def change_password(self, user_id: int, current_password: str, new_password: str):
        password_hash = self.user_repo.get_password_hash(user_id)
        if password_hash is None:
            raise NotFoundError("User not found")

        if not verify_password(current_password, password_hash):
            raise InvalidRequestError("Current password is incorrect")

        self.user_repo.set_password_hash(user_id, hash_password(new_password))
        logger.info(f"Password changed for user {user_id}")
