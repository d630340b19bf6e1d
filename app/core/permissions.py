"""
Authorization decisions.

Every check is a pure function of the current principal (None for anonymous
requests) and, for ownership checks, the username that owns the resource.
The FastAPI dependencies in app.core.deps turn a denial into a 401/403.
"""

import enum
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Principal:
    """The identity asserted by a verified access token."""
    username: str
    is_admin: bool = False


class Decision(str, enum.Enum):
    """
    Outcome of an authorization check.

    - ALLOW: proceed
    - UNAUTHENTICATED: no (usable) principal, maps to 401
    - UNAUTHORIZED: principal lacks admin rights or ownership, maps to 403
    """
    ALLOW = "ALLOW"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    UNAUTHORIZED = "UNAUTHORIZED"

    @property
    def allowed(self) -> bool:
        return self is Decision.ALLOW


Rule = Tuple[str, Callable[[Optional[Principal], Optional[str]], bool], Decision]

# Ordered, first match wins. The anonymous rule must stay first: the rules
# below it read principal fields.
ADMIN_OR_OWNER_RULES: Sequence[Rule] = (
    ("anonymous", lambda principal, owner: principal is None, Decision.UNAUTHENTICATED),
    ("admin", lambda principal, owner: principal.is_admin is True, Decision.ALLOW),
    ("owner", lambda principal, owner: owner is not None and principal.username == owner, Decision.ALLOW),
)


def evaluate(
    rules: Sequence[Rule],
    principal: Optional[Principal],
    resource_owner: Optional[str] = None,
    default: Decision = Decision.UNAUTHORIZED,
) -> Decision:
    """Return the decision of the first matching rule, or `default`."""
    for _name, matches, decision in rules:
        if matches(principal, resource_owner):
            return decision
    return default


def decide(principal: Optional[Principal], resource_owner: Optional[str] = None) -> Decision:
    """
    Admin-or-owner check.

    Admins are allowed regardless of `resource_owner`; other users only when
    they are the owner.
    """
    return evaluate(ADMIN_OR_OWNER_RULES, principal, resource_owner)


def decide_logged_in(principal: Optional[Principal]) -> Decision:
    """Allow any principal with a non-empty username."""
    if principal is None or not principal.username:
        return Decision.UNAUTHENTICATED
    return Decision.ALLOW


def decide_admin(principal: Optional[Principal]) -> Decision:
    """Allow admins only."""
    if principal is None:
        return Decision.UNAUTHENTICATED
    if principal.is_admin is not True:
        return Decision.UNAUTHORIZED
    return Decision.ALLOW
