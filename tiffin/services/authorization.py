"""
Role Authorization Gate

Pure checks of a Session against a set of allowed roles. A missing session
is rejected before the role is looked at, so "no token" and "wrong role"
stay distinguishable.
"""

from typing import Iterable, Optional

from tiffin.core.errors import AccessTokenRequired, InsufficientPermissions
from tiffin.models import Role, Session


def has_role(session: Optional[Session], allowed_roles: Iterable[Role]) -> bool:
    return session is not None and session.role in set(allowed_roles)


def authorize(session: Optional[Session], allowed_roles: Iterable[Role]) -> Session:
    """
    Allow ``session`` through when its role is in ``allowed_roles``.

    Returns:
        Session: The same session, for use in dependency chains

    Raises:
        AccessTokenRequired: No session at all
        InsufficientPermissions: Session role not allowed
    """
    if session is None:
        raise AccessTokenRequired()
    if not has_role(session, allowed_roles):
        raise InsufficientPermissions()
    return session
