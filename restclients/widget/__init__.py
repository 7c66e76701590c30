"""
restclients.widget — CRUD client for the widget service.

Module layout
-------------
config.py    — WidgetConfig, env loading, endpoint and field constants
handlers.py  — WidgetErrorHandler (Spring-style error bodies)
client.py    — WidgetClient, validate_widget, validate_new_widget
"""

from .client import WidgetClient, validate_new_widget, validate_widget
from .config import WidgetConfig, load_widget_config
from .handlers import WidgetErrorHandler

__all__ = [
    "WidgetClient",
    "WidgetConfig",
    "load_widget_config",
    "WidgetErrorHandler",
    "validate_widget",
    "validate_new_widget",
]
