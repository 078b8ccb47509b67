"""Structural validation for email addresses."""

from protean.exceptions import ValidationError

MAX_EMAIL_LENGTH = 254

_FORBIDDEN_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def _invalid(email):
    return ValidationError({"email": [f"Invalid email address: {email!r}"]})


def validate_email_address(email):
    """Return ``email`` trimmed and lower-cased, or raise ``ValidationError``.

    Enforces structural validity: exactly one @, non-empty local and domain
    parts, a dotted domain whose labels do not start or end with a hyphen,
    no consecutive dots, no whitespace and no forbidden characters.
    """
    if not isinstance(email, str):
        raise _invalid(email)

    email = email.strip()

    if not email or len(email) > MAX_EMAIL_LENGTH:
        raise _invalid(email)

    if any(ch.isspace() for ch in email):
        raise _invalid(email)

    if email.count("@") != 1:
        raise _invalid(email)

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        raise _invalid(email)

    if not domain_part or domain_part.startswith(".") or domain_part.endswith("."):
        raise _invalid(email)

    if "." not in domain_part:
        raise _invalid(email)

    for label in domain_part.split("."):
        if label.startswith("-") or label.endswith("-"):
            raise _invalid(email)

    if ".." in local_part or ".." in domain_part:
        raise _invalid(email)

    if any(forbidden in email for forbidden in _FORBIDDEN_CHARACTERS):
        raise _invalid(email)

    return email.lower()
