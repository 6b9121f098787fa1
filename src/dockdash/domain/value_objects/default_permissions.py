"""Built-in permission sets."""

from typing import Final

from dockdash.domain.value_objects.permission_tree import PermissionTree

FALLBACK_ROLE: Final = "supreadmin"

DASHBOARD_WIDGETS: Final = (
    "activeUsers",
    "totalServers",
    "containerStatus",
    "systemHealth",
    "recentActivity",
)


def full_access_permissions() -> PermissionTree:
    """Full-access tree used when the authoritative fetch yields nothing."""
    return PermissionTree.from_dict(
        {
            "dashboard": {
                "canView": True,
                "canViewWidgets": list(DASHBOARD_WIDGETS),
                "systemStatus": True,
                "realtimeMetrics": True,
            },
            "dockerMonitor": {
                "canView": True,
                "canCreateContainer": True,
                "containers": {
                    "canView": True,
                    "canStop": True,
                    "canRestart": True,
                    "canViewDetails": True,
                    "canViewActionHistory": True,
                    "canViewLogs": True,
                    "canRecreate": True,
                    "canOpenTerminal": True,
                    "canDelete": True,
                    "canLongPressSelect": True,
                },
                "images": {"canView": True, "canPrune": True},
            },
            "serversManagement": {
                "canView": True,
                "canAddNewServer": True,
                "servers": {
                    "canView": True,
                    "canViewDetails": True,
                    "canEdit": True,
                    "canDeactivate": True,
                },
            },
            "fileUpload": {
                "canView": True,
                "canUpload": True,
                "canDelete": True,
                "canDownload": True,
                "canShare": True,
            },
            "userManagement": {
                "canView": True,
                "canAddNewUser": True,
                "users": {
                    "canView": True,
                    "canEdit": True,
                    "canSetInactive": True,
                    "canSetActive": True,
                    "canResetPassword": True,
                },
            },
            "documents": {
                "canView": True,
                "canCreate": True,
                "canEdit": True,
                "canDelete": True,
            },
            "settings": {"canView": True, "canEdit": True},
            # empty allow-list = every model
            "aiChat": {"canView": True, "canUse": True, "allowedModels": []},
            "notifications": {"canReceiveNotif": True},
        }
    )
