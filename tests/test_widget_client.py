"""
Unit tests for restclients/widget (client, validation, config).
"""

from __future__ import annotations

import json

import pytest

from restclients.rest import ApplicationError, ConfigurationError, DecodeError, TransportError
from restclients.widget import (
    WidgetClient,
    WidgetConfig,
    load_widget_config,
    validate_new_widget,
    validate_widget,
)

from .conftest import FakeResponse, FakeTransport, json_response


BASE_URL = "http://localhost:8080/api"
WIDGET = {"id": "123", "uid": "f45fdkksj89g", "name": "testWidget", "size": "enormous"}


def _client(*responses, **config) -> tuple[WidgetClient, FakeTransport]:
    transport = FakeTransport(*responses)
    return WidgetClient(WidgetConfig(base_url=BASE_URL, **config), transport=transport), transport


# ---------------------------------------------------------------------------
# Class: validation helpers
# ---------------------------------------------------------------------------

class TestValidation:

    def test_valid_widget(self):
        assert validate_widget(dict(WIDGET)) == WIDGET

    def test_size_optional(self):
        widget = {k: v for k, v in WIDGET.items() if k != "size"}
        assert validate_widget(widget) == widget

    @pytest.mark.parametrize("missing", ["id", "uid", "name"])
    def test_missing_required_field(self, missing):
        widget = {k: v for k, v in WIDGET.items() if k != missing}
        with pytest.raises(DecodeError, match="missing parameters"):
            validate_widget(widget)

    def test_unknown_fields_dropped(self):
        widget = dict(WIDGET, created="2020-01-01T00:00:00Z")
        assert validate_widget(widget) == WIDGET

    def test_unknown_field_does_not_replace_required(self):
        widget = {"id": "123", "badName": "testWidget", "size": "enormous", "uid": "f45"}
        with pytest.raises(DecodeError, match="missing parameters"):
            validate_widget(widget)

    def test_non_object_rejected(self):
        with pytest.raises(DecodeError):
            validate_widget(["not", "a", "widget"])

    def test_new_widget_requires_name(self):
        with pytest.raises(ConfigurationError, match="Missing Name"):
            validate_new_widget({"size": "small"})
        assert validate_new_widget({"name": "w"}) == {"name": "w"}


# ---------------------------------------------------------------------------
# Class: WidgetClient
# ---------------------------------------------------------------------------

class TestWidgetClient:

    def test_invalid_base_url(self):
        with pytest.raises(ConfigurationError, match="base url"):
            WidgetClient(WidgetConfig(base_url=""), transport=FakeTransport())

    def test_create_widget(self):
        client, transport = _client(json_response(201, WIDGET))
        new = {"name": "testWidget", "size": "enormous"}

        assert client.create_widget(new) == WIDGET
        sent = transport.sent[0]
        assert sent.method == "POST"
        assert sent.url == f"{BASE_URL}/widget"
        assert json.loads(sent.body) == new
        assert "Authorization" not in sent.headers

    def test_create_without_name_sends_nothing(self):
        client, transport = _client()
        with pytest.raises(ConfigurationError):
            client.create_widget({"size": "small"})
        assert transport.sent == []

    def test_create_invalid_response(self):
        client, _ = _client(json_response(200, {"id": "1", "name": "w"}))
        with pytest.raises(DecodeError):
            client.create_widget({"name": "w"})

    def test_get_widget(self):
        client, transport = _client(json_response(200, WIDGET))
        assert client.get_widget("123")["id"] == "123"
        assert transport.sent[0].method == "GET"
        assert transport.sent[0].url == f"{BASE_URL}/widget/123"
        assert transport.sent[0].body is None

    def test_get_widget_ignores_extra_fields(self):
        client, _ = _client(json_response(200, dict(WIDGET, created="2020-01-01T00:00:00Z")))
        assert client.get_widget("123") == WIDGET

    def test_get_unknown_widget(self):
        not_found = json_response(404, {"status": 404, "error": "Not Found", "message": "Widget unknown"})
        client, _ = _client(not_found)
        with pytest.raises(ApplicationError, match="404 - Not Found : Widget unknown"):
            client.get_widget("unknown")

    def test_update_widget_posts_to_id(self):
        updated = dict(WIDGET, name="newWidget1", size="newSize")
        client, transport = _client(json_response(200, updated))
        assert client.update_widget("123", {"name": "newWidget1", "size": "newSize"}) == updated
        assert transport.sent[0].method == "POST"
        assert transport.sent[0].url == f"{BASE_URL}/widget/123"

    def test_delete_widget_accepts_no_content(self):
        client, transport = _client(FakeResponse(204, None))
        assert client.delete_widget("1") is None
        assert transport.sent[0].method == "DELETE"
        assert transport.sent[0].url == f"{BASE_URL}/widget/1"

    def test_delete_failure(self):
        client, _ = _client(json_response(500, {"error": "Internal Server Error", "message": "Not deleted"}))
        with pytest.raises(ApplicationError, match="Not deleted"):
            client.delete_widget("1")

    def test_id_required(self):
        client, transport = _client()
        with pytest.raises(ConfigurationError, match="widget id"):
            client.get_widget("")
        assert transport.sent == []

    def test_basic_auth_when_credentials_configured(self):
        client, transport = _client(json_response(200, WIDGET), username="bob", password="secret")
        client.get_widget("123")
        assert transport.sent[0].headers["Authorization"] == "Basic Ym9iOnNlY3JldA=="

    def test_transport_error_surfaces(self):
        transport = FakeTransport(error=ConnectionRefusedError("refused"))
        client = WidgetClient(WidgetConfig(base_url=BASE_URL), transport=transport)
        with pytest.raises(TransportError):
            client.get_widget("1")

    def test_default_transport_timeout(self):
        client = WidgetClient(WidgetConfig(base_url=BASE_URL))
        assert client._transport.get_adapter(BASE_URL).timeout == 2.0


# ---------------------------------------------------------------------------
# Class: load_widget_config
# ---------------------------------------------------------------------------

class TestLoadWidgetConfig:

    def test_reads_environment(self):
        conf = load_widget_config({
            "SERVICE_BASEURL": BASE_URL + "/",
            "WIDGET_USERNAME": "bob",
            "WIDGET_PASSWORD": "secret",
            "WIDGET_TIMEOUT": "3",
        })
        assert conf == WidgetConfig(base_url=BASE_URL, timeout=3.0, username="bob", password="secret")
        assert conf.uses_basic_auth

    def test_missing_base_url(self):
        with pytest.raises(ConfigurationError, match="SERVICE_BASEURL"):
            load_widget_config({})

    def test_partial_credentials_use_no_auth(self):
        conf = load_widget_config({"SERVICE_BASEURL": BASE_URL, "WIDGET_USERNAME": "bob"})
        assert not conf.uses_basic_auth
