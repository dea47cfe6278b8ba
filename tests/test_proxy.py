import json
from datetime import datetime, timezone

import pytest

from kumaclient.proxy import Proxy, ProxyConfig


PROXY_JSON = """{
    "id": 1,
    "userId": 100,
    "protocol": "http",
    "host": "proxy.example.com",
    "port": 8080,
    "auth": 1,
    "username": "user",
    "password": "password",
    "active": 1,
    "default": 0,
    "createdDate": "2024-01-01T00:00:00.000Z"
}"""


def test_proxy_from_json():
    proxy = Proxy.from_json(PROXY_JSON)
    assert proxy.id == 1
    assert proxy.user_id == 100
    assert proxy.protocol == "http"
    assert proxy.host == "proxy.example.com"
    assert proxy.port == 8080
    assert proxy.auth is True
    assert proxy.username == "user"
    assert proxy.password == "password"
    assert proxy.active is True
    assert proxy.default is False
    assert proxy.created_date == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_proxy_round_trip():
    password = "password"
    proxy = Proxy(
        id=1,
        user_id=100,
        protocol="socks5",
        host="socks.example.com",
        port=1080,
        auth=True,
        username="admin",
        password=password,
        active=True,
        default=True,
        created_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    restored = Proxy.from_json(proxy.to_json())
    assert restored.id == proxy.id
    assert restored.protocol == proxy.protocol
    assert restored.host == proxy.host
    assert restored.default == proxy.default
    assert restored == proxy


def test_proxy_to_dict_flags_and_date():
    data = Proxy(id=3, auth=True, active=False, default=True,
                 created_date=datetime(2024, 1, 1, tzinfo=timezone.utc)).to_dict()
    assert data["auth"] == 1
    assert data["active"] == 0
    assert data["default"] == 1
    assert data["createdDate"] == "2024-01-01T00:00:00Z"


def test_proxy_without_date_serialises_empty_string():
    assert Proxy(id=42).to_dict()["createdDate"] == ""
    assert Proxy(id=42).to_dict()["id"] == 42


@pytest.mark.parametrize(
    "text",
    ["2024-01-01 00:00:00", "2024-01-01T00:00:00", "2024-01-01T00:00:00Z"],
)
def test_proxy_date_formats(text):
    proxy = Proxy.from_dict({"id": 1, "createdDate": text})
    assert proxy.created_date == datetime(2024, 1, 1, tzinfo=timezone.utc)


def test_proxy_bad_date_raises():
    with pytest.raises(ValueError):
        Proxy.from_dict({"createdDate": "yesterday"})


def test_proxy_bool_flag_rejected():
    with pytest.raises(ValueError):
        Proxy.from_dict({"auth": True})


def test_proxy_str_masks_password():
    password = "password"
    proxy = Proxy(id=1, user_id=100, protocol="http", host="proxy.example.com",
                  port=8080, auth=True, username="user", password=password, active=True)
    assert str(proxy) == (
        'id: 1, userId: 100, protocol: "http", host: "proxy.example.com", port: 8080, '
        'auth: true, username: "user", password: "***", active: true, default: false, '
        "-: 0001-01-01 00:00:00 +0000 UTC"
    )


def test_proxy_str_empty_password_and_date():
    proxy = Proxy(created_date=datetime(2024, 1, 1, tzinfo=timezone.utc))
    text = str(proxy)
    assert 'password: ""' in text
    assert text.endswith("-: 2024-01-01 00:00:00 +0000 UTC")


def test_config_round_trip():
    config = ProxyConfig(protocol="https", host="proxy.test.com", port=3128,
                         auth=False, active=True, default=False, apply_existing=True)
    restored = ProxyConfig.from_json(config.to_json())
    assert restored.protocol == config.protocol
    assert restored.apply_existing == config.apply_existing
    assert restored == config


def test_config_with_auth():
    password = "password"
    config = ProxyConfig(protocol="socks5", host="localhost", port=1080, auth=True,
                         username="testuser", password=password, active=True)
    restored = ProxyConfig.from_json(config.to_json())
    assert restored.auth is True
    assert restored.username == config.username
    assert restored.password == config.password


def test_config_omits_empty_optional_fields():
    data = json.loads(ProxyConfig(protocol="http", host="h", port=1).to_json())
    assert "id" not in data
    assert "username" not in data
    assert "password" not in data
    assert data["applyExisting"] is False


def test_config_includes_id_when_set():
    assert ProxyConfig(id=7).to_dict()["id"] == 7