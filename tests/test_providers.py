import json

import pytest

from kumaclient.notification.core import NotificationBase, NotificationError
from kumaclient.notification.providers import (
    Ntfy,
    NtfyDetails,
    Slack,
    SlackDetails,
    Teams,
    TeamsDetails,
    Webhook,
    decode_headers,
    encode_headers,
)


def _document(name, config):
    return json.dumps(
        {
            "id": 1,
            "name": name,
            "active": True,
            "userId": 1,
            "isDefault": True,
            "config": json.dumps(config),
        }
    )


def _base(name):
    return NotificationBase(
        id=1, name=name, is_active=True, user_id=1, is_default=True, apply_existing=True
    )


NTFY_DOC = _document(
    "My Ntfy Alert",
    {
        "applyExisting": True,
        "isDefault": True,
        "name": "My Ntfy Alert",
        "ntfyAuthenticationMethod": "usernamePassword",
        "ntfyIcon": "http://icon.example.com",
        "ntfyPriority": 5,
        "ntfypassword": "password",
        "ntfyserverurl": "https://ntfy.example.com",
        "ntfytopic": "topic",
        "ntfyusername": "user",
        "type": "ntfy",
    },
)


def test_ntfy_unmarshal_and_marshal():
    notification = Ntfy.from_json(NTFY_DOC)
    password = "password"
    assert notification.base == _base("My Ntfy Alert")
    assert notification.details == NtfyDetails(
        authentication_method="usernamePassword",
        icon="http://icon.example.com",
        priority=5,
        password=password,
        server_url="https://ntfy.example.com",
        topic="topic",
        username="user",
    )
    assert json.loads(notification.to_json()) == {
        "active": True,
        "applyExisting": True,
        "id": 1,
        "isDefault": True,
        "name": "My Ntfy Alert",
        "ntfyAuthenticationMethod": "usernamePassword",
        "ntfyIcon": "http://icon.example.com",
        "ntfyPriority": 5,
        "ntfyaccesstoken": "",
        "ntfypassword": "password",
        "ntfyserverurl": "https://ntfy.example.com",
        "ntfytopic": "topic",
        "ntfyusername": "user",
        "type": "ntfy",
        "userId": 1,
    }
    assert notification.type() == "ntfy"


def test_ntfy_str():
    notification = Ntfy.from_json(NTFY_DOC)
    assert str(notification) == (
        'id: 1, name: "My Ntfy Alert", active: true, isDefault: true, '
        "applyExisting: true, userId: 1, type: ntfy, "
        'ntfyaccesstoken: "", ntfyAuthenticationMethod: "usernamePassword", '
        'ntfyIcon: "http://icon.example.com", ntfypassword: "password", '
        'ntfyPriority: 5, ntfyserverurl: "https://ntfy.example.com", '
        'ntfytopic: "topic", ntfyusername: "user"'
    )


def test_slack_unmarshal_and_marshal():
    doc = _document(
        "My Slack Alert",
        {
            "applyExisting": True,
            "isDefault": True,
            "name": "My Slack Alert",
            "slackwebhookURL": "https://hooks.example.com/services/xxx/yyy/zzz",
            "slackusername": "uptime-kuma",
            "slackiconemo": ":ghost:",
            "slackchannel": "#alerts",
            "slackrichmessage": True,
            "slackchannelnotify": False,
            "type": "slack",
        },
    )
    notification = Slack.from_json(doc)
    assert notification.base == _base("My Slack Alert")
    assert notification.details == SlackDetails(
        webhook_url="https://hooks.example.com/services/xxx/yyy/zzz",
        username="uptime-kuma",
        icon_emoji=":ghost:",
        channel="#alerts",
        rich_message=True,
        channel_notify=False,
    )
    assert json.loads(notification.to_json()) == {
        "active": True,
        "applyExisting": True,
        "id": 1,
        "isDefault": True,
        "name": "My Slack Alert",
        "slackchannel": "#alerts",
        "slackchannelnotify": False,
        "slackiconemo": ":ghost:",
        "slackrichmessage": True,
        "slackusername": "uptime-kuma",
        "slackwebhookURL": "https://hooks.example.com/services/xxx/yyy/zzz",
        "type": "slack",
        "userId": 1,
    }


def test_teams_unmarshal_and_marshal():
    doc = _document(
        "My Teams Alert",
        {
            "applyExisting": True,
            "isDefault": True,
            "name": "My Teams Alert",
            "webhookUrl": "https://teams.example.com/webhook/xxx",
            "type": "teams",
        },
    )
    notification = Teams.from_json(doc)
    assert notification.base == _base("My Teams Alert")
    assert notification.details == TeamsDetails(webhook_url="https://teams.example.com/webhook/xxx")
    assert json.loads(notification.to_json()) == {
        "active": True,
        "applyExisting": True,
        "id": 1,
        "isDefault": True,
        "name": "My Teams Alert",
        "type": "teams",
        "userId": 1,
        "webhookUrl": "https://teams.example.com/webhook/xxx",
    }


def test_webhook_round_trip_with_headers():
    config = {
        "type": "webhook",
        "webhookURL": "https://hooks.example.com/in",
        "webhookContentType": "json",
        "webhookAdditionalHeaders": json.dumps({"Authorization": "Bearer token"}),
    }
    notification = Webhook.from_json(_document("Hook", config))
    assert notification.details.webhook_additional_headers == {"Authorization": "Bearer token"}
    assert notification.details.webhook_custom_body == ""
    encoded = json.loads(notification.to_json())
    assert encoded["webhookAdditionalHeaders"] == '{"Authorization":"Bearer token"}'
    assert "webhookCustomBody" not in encoded
    assert encoded["type"] == "webhook"
    again = Webhook.from_json(_document("Hook", encoded))
    assert again.details == notification.details


def test_webhook_omits_empty_headers():
    config = {"type": "webhook", "webhookURL": "https://hooks.example.com/in",
              "webhookContentType": "custom", "webhookCustomBody": "{}",
              "webhookAdditionalHeaders": ""}
    notification = Webhook.from_json(_document("Hook", config))
    encoded = json.loads(notification.to_json())
    assert "webhookAdditionalHeaders" not in encoded
    assert encoded["webhookCustomBody"] == "{}"


def test_decode_headers():
    assert decode_headers(None) == {}
    assert decode_headers("") == {}
    assert decode_headers("null") == {}
    assert decode_headers('{"X-A":"1"}') == {"X-A": "1"}
    with pytest.raises(NotificationError):
        decode_headers("{not json")
    with pytest.raises(NotificationError):
        decode_headers({"X-A": "1"})


def test_encode_headers():
    assert encode_headers(None) is None
    assert encode_headers({"b": "2", "a": "1"}) == '{"a":"1","b":"2"}'
    assert decode_headers(encode_headers({"a": "1"})) == {"a": "1"}


def test_wrong_attribute_kind_raises():
    doc = _document("Bad", {"type": "ntfy", "ntfyPriority": "high"})
    with pytest.raises(NotificationError):
        Ntfy.from_json(doc)


def test_missing_type_raises():
    doc = _document("Bad", {"slackchannel": "#alerts"})
    with pytest.raises(NotificationError):
        Slack.from_json(doc)