import json

import pytest

from kumaclient.notification.core import NotificationBase, NotificationError
from kumaclient.notification.generic import GenericNotification

WANT_STRING = (
    'id: 1, name: "My Ntfy Alert", active: true, isDefault: true, applyExisting: true, '
    'userId: 1, type: "ntfy", ntfyAuthenticationMethod: "usernamePassword", '
    'ntfyIcon: "http://symbol.url", ntfyPriority: 5, ntfypassword: "password", '
    'ntfyserverurl: "https://ntfy.sh", ntfytopic: "topic", ntfyusername: "user"'
)

WANT_JSON = (
    '{"active":true,"applyExisting":true,"id":1,"isDefault":true,"name":"My Ntfy Alert",'
    '"ntfyAuthenticationMethod":"usernamePassword","ntfyIcon":"http://symbol.url",'
    '"ntfyPriority":5,"ntfypassword":"password","ntfyserverurl":"https://ntfy.sh",'
    '"ntfytopic":"topic","ntfyusername":"user","type":"ntfy","userId":1}'
)

DETAILS = {
    "ntfyAuthenticationMethod": "usernamePassword",
    "ntfyIcon": "http://symbol.url",
    "ntfyPriority": 5,
    "ntfypassword": "password",
    "ntfyserverurl": "https://ntfy.sh",
    "ntfytopic": "topic",
    "ntfyusername": "user",
}


def _notification() -> GenericNotification:
    return GenericNotification(
        base=NotificationBase(
            id=1, name="My Ntfy Alert", is_active=True, user_id=1,
            is_default=True, apply_existing=True,
        ),
        type_name="ntfy",
        details=dict(DETAILS),
    )


def test_generic_string():
    assert str(_notification()) == WANT_STRING


def test_generic_json():
    assert _notification().to_json() == WANT_JSON


def test_generic_type():
    assert _notification().type() == "ntfy"


def test_generic_from_json_strips_base_keys():
    document = json.dumps({
        "id": 1, "name": "My Ntfy Alert", "active": True, "userId": 1, "isDefault": True,
        "config": json.dumps({**DETAILS, "name": "My Ntfy Alert", "isDefault": True,
                              "applyExisting": True, "type": "ntfy"}),
    })
    notification = GenericNotification.from_json(document)
    assert notification.type_name == "ntfy"
    assert notification.details == DETAILS
    assert notification.base == _notification().base
    assert json.loads(notification.to_json()) == json.loads(WANT_JSON)


def test_generic_from_json_without_type_raises():
    document = json.dumps({"id": 1, "config": json.dumps({"name": "x"})})
    with pytest.raises(NotificationError):
        GenericNotification.from_json(document)


def test_generic_to_json_does_not_mutate_details():
    notification = _notification()
    notification.to_json()
    assert "type" not in notification.details


def test_generic_string_skips_type_in_details():
    notification = GenericNotification(type_name="webhook", details={"type": "other", "flag": True})
    assert str(notification).endswith('type: "webhook", flag: true')