from enum import Enum

class Role(str, Enum):
    admin = "Admin"
    manager = "Manager"
    user = "User"

ALL_ROLES: frozenset[Role] = frozenset(Role)
