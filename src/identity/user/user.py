"""User aggregate root.

A user owns at most one shopping cart and any number of orders; deleting the
user removes those too (see ``identity.user.management``).
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from identity.shared.email import validate_email_address
from shared.domain import crm

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100


class UserRole(Enum):
    """Enumeration of user roles."""

    REGULAR = "Regular"
    ADMIN = "Admin"


def role_value(role) -> str:
    """Coerce a ``UserRole`` or its string value, raising ``ValidationError`` for anything else."""
    try:
        return UserRole(role.value if isinstance(role, UserRole) else role).value
    except ValueError:
        raise ValidationError({"role": [f"Unknown role {role!r}"]}) from None


@crm.aggregate
class User:
    """A registered person who can log in, keep a cart and place orders.

    Every mutator refreshes ``updated_at``; re-assigning the current role is a no-op.
    """

    name: String(required=True, max_length=NAME_MAX_LENGTH)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.REGULAR.value)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def name_must_be_within_bounds(self):
        if not NAME_MIN_LENGTH <= len((self.name or "").strip()) <= NAME_MAX_LENGTH:
            raise ValidationError(
                {"name": [f"Name must not be empty and between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters"]}
            )

    @invariant.post
    def email_must_be_valid(self):
        validate_email_address(self.email)

    @invariant.post
    def password_hash_must_not_be_blank(self):
        if not (self.password_hash or "").strip():
            raise ValidationError({"password_hash": ["Password hash cannot be empty"]})

    @classmethod
    def register(cls, name, email, password_hash, role=UserRole.REGULAR):
        now = datetime.now(UTC)
        return cls(
            name=name.strip() if isinstance(name, str) else name,
            email=validate_email_address(email),
            password_hash=password_hash,
            role=role_value(role),
            created_at=now,
            updated_at=now,
        )

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    def _touch(self):
        self.updated_at = datetime.now(UTC)

    def update_name(self, name):
        self.name = name.strip() if isinstance(name, str) else name
        self._touch()

    def update_email(self, email):
        self.email = validate_email_address(email)
        self._touch()

    def set_password_hash(self, password_hash):
        self.password_hash = password_hash
        self._touch()

    def update_role(self, role):
        new_role = role_value(role)
        if self.role == new_role:
            return
        self.role = new_role
        self._touch()
