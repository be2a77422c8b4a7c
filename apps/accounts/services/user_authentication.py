"""Administrator authentication service."""

from django.db import transaction
from django.contrib.auth import get_user_model
from django.utils import timezone

from .exceptions import InvalidCredentialsError, InactiveAccountError

User = get_user_model()


@transaction.atomic
def authenticate_admin(*, username: str, password: str) -> User:
    """
    Authenticate an administrator with username and password.

    Uses select_for_update() to prevent race conditions when updating last_login.

    Args:
        username: Administrator username (surrounding whitespace ignored)
        password: Plain-text password

    Returns:
        Authenticated User instance

    Raises:
        InvalidCredentialsError: If credentials are invalid
        InactiveAccountError: If account is deactivated
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(username=username.strip())
        )
    except User.DoesNotExist:
        raise InvalidCredentialsError("Invalid username or password")

    if not user.check_password(password):
        raise InvalidCredentialsError("Invalid username or password")

    if not user.is_active:
        raise InactiveAccountError("Account is deactivated")

    user.last_login = timezone.now()
    user.save(update_fields=['last_login'])

    return user


@transaction.atomic
def upsert_admin(*, username: str, password: str) -> tuple:
    """
    Create an administrator or reset the password of an existing one.

    Returns:
        (User, created) tuple
    """
    username = username.strip()
    try:
        user = User.objects.select_for_update().get(username=username)
    except User.DoesNotExist:
        user = User.objects.create_user(
            username=username,
            password=password,
            is_staff=True,
        )
        return user, True

    user.set_password(password)
    user.is_active = True
    user.save(update_fields=['password', 'is_active'])
    return user, False
