"""
Role and Capability Constants

Roles come from the host CMS; capabilities are the permission strings the
auditor checks before serving a page or running an action.
"""

from enum import Enum


class RoleName(str, Enum):
    """Enumeration of role names in the host system."""

    USER = "user"
    EDITOR = "editor"
    MANAGER = "manager"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


class Capability(str, Enum):
    """Capabilities checked by the auditor."""

    MANAGE_OPTIONS = "manage_options"
    INSTALL_PLUGINS = "install_plugins"


# Alias for backward compatibility
RoleEnum = RoleName

# Wildcard permission granting every capability
ALL_CAPABILITIES = "*"
