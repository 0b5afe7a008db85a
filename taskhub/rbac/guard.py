from collections.abc import Iterable

from taskhub.auth.tokens import Actor
from taskhub.errors import Forbidden
from taskhub.models.enums import Role
from taskhub.rbac.perms import allowed_roles

def check_role(actor: Actor | None, allowed: Iterable[Role]) -> bool:
    if actor is None:
        return False
    return actor.role in set(allowed)

def require_role(actor: Actor | None, allowed: Iterable[Role]) -> None:
    if not check_role(actor, allowed):
        raise Forbidden()

def require_perm(actor: Actor | None, action: str) -> None:
    require_role(actor, allowed_roles(action))
