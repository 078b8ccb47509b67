"""User registration: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.shared.email import validate_email_address
from identity.user.user import User, UserRole
from shared.domain import crm
from shared.exceptions import ConflictError

logger = structlog.get_logger(__name__)


@crm.command(part_of="User")
class RegisterUser:
    """Create a new user account.

    The password arrives already hashed (see ``identity.auth.passwords``) so
    that plain-text secrets never travel inside commands.
    """

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.REGULAR.value)


@crm.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        email = validate_email_address(command.email)

        if repo.email_exists(email):
            logger.info("email_already_registered", email=email)
            raise ConflictError("User email was already registered")

        user = User.register(
            name=command.name,
            email=email,
            password_hash=command.password_hash,
            role=command.role or UserRole.REGULAR.value,
        )
        repo.add(user)

        logger.info("user_registered", user_id=str(user.id), email=user.email, role=user.role)
        return str(user.id)
