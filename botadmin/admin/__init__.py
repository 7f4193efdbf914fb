"""Admin console: session gate, toast notifier, resource controllers and HTTP routes."""

from botadmin.admin.server import create_app

__all__ = [
    "create_app",
]
