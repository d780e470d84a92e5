# Role capabilities with inheritance support
ROLE_PERMISSIONS = {
    "user": [],
    "editor": [],
    "manager": ["manage_options"],
    "admin": ["install_plugins"],  # Admin extends manager capabilities
    "superadmin": ["*"],  # Superadmin has unrestricted access
}

# Each role inherits everything its parent grants
ROLE_PARENTS = {
    "admin": "manager",
    "manager": "editor",
    "editor": "user",
}


def get_role_permissions(role: str) -> list:
    """
    Returns the capabilities for a given role, including inherited ones.
    Unknown roles have no capabilities.
    """
    permissions: set[str] = set()
    while role in ROLE_PERMISSIONS:
        permissions.update(ROLE_PERMISSIONS[role])
        role = ROLE_PARENTS.get(role)
    return sorted(permissions)
