from taskhub.config import settings
from taskhub.models.enums import ALL_ROLES, Role

# by default only task creation and user listing are role-gated
PERMS: dict[str, frozenset[Role]] = {
    "orgs:list": ALL_ROLES,
    "orgs:read": ALL_ROLES,
    "orgs:create": ALL_ROLES,
    "orgs:update": ALL_ROLES,
    "orgs:delete": ALL_ROLES,

    "users:list": frozenset({Role.admin}),
    "users:read": ALL_ROLES,
    "users:update": ALL_ROLES,
    "users:delete": ALL_ROLES,

    "tasks:list": ALL_ROLES,
    "tasks:read": ALL_ROLES,
    "tasks:create": frozenset({Role.manager, Role.admin}),
    "tasks:update": ALL_ROLES,
    "tasks:delete": ALL_ROLES,
}

def allowed_roles(action: str) -> frozenset[Role]:
    allowed = PERMS.get(action)
    if allowed is None:
        raise RuntimeError(f"unknown permission action: {action}")

    override = settings.perm_overrides.get(action)
    if override is not None:
        return frozenset(Role(r) for r in override)

    if settings.delete_requires_admin and action.endswith(":delete"):
        return frozenset({Role.admin})

    return allowed
