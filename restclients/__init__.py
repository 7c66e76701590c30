"""
restclients — REST API clients built on one request layer.

Module layout
-------------
rest/        — RequestBuilder / Request, auth strategies, error handlers,
               transport construction, JSON encode/decode
checkpoint/  — Check Point management API client with a cached session id
widget/      — CRUD client for the widget service

Public interface
----------------
    from restclients.checkpoint import CheckpointClient, load_checkpoint_config
    from restclients.widget import WidgetClient, load_widget_config
    from restclients.rest import RequestBuilder, NoAuth, BasicAuth, BearerAuth

The library logs through ``logging.getLogger("restclients...")`` and never
configures handlers itself.
"""

__version__ = "0.1.0"
