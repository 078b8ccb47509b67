"""Repository for the User aggregate."""

from identity.shared.email import validate_email_address
from identity.user.user import User
from shared.domain import crm
from shared.exceptions import not_found


@crm.repository(part_of=User)
class UserRepository:
    """Email lookups are case-insensitive: addresses are stored lower-cased."""

    def find_user(self, user_id) -> User | None:
        users = self._dao.query.filter(id=str(user_id)).all().items
        return users[0] if users else None

    def get_user(self, user_id) -> User:
        user = self.find_user(user_id)
        if user is None:
            raise not_found(f"User with ID {user_id} not found")
        return user

    def find_by_email(self, email: str) -> User | None:
        users = self._dao.query.filter(email=email.strip().lower()).all().items
        return users[0] if users else None

    def get_by_email(self, email: str) -> User:
        user = self.find_by_email(email)
        if user is None:
            raise not_found(f"User with email {email} not found")
        return user

    def email_exists(self, email: str) -> bool:
        return self.find_by_email(validate_email_address(email)) is not None

    def remove_user(self, user: User) -> None:
        self._dao.delete(user)

    def list_users(self) -> list[User]:
        return sorted(self._dao.query.all().items, key=lambda user: user.created_at)
