import pytest

from core.config import TempoSettings
from core.exceptions import InvalidInput
from core.request_types import RequestDescriptor
from core.router import RouteDecider, TargetKind, normalize_base_url


def _descriptor(**kwargs) -> RequestDescriptor:
    kwargs.setdefault("endpoint", "/rest/api/3/myself")
    return RequestDescriptor(**kwargs)


def test_descriptor_accepts_camel_case_keys():
    descriptor = RequestDescriptor.model_validate(
        {
            "baseUrl": "my.atlassian.net",
            "apiToken": "tok",
            "endpoint": "/x",
            "isTempo": True,
            "authType": "basic",
        }
    )
    assert descriptor.base_url == "my.atlassian.net"
    assert descriptor.api_token == "tok"
    assert descriptor.is_tempo is True
    assert descriptor.auth_type == "basic"
    assert descriptor.method == "GET"
    assert descriptor.body is None


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("my.atlassian.net", "https://my.atlassian.net"),
        ("my.atlassian.net///", "https://my.atlassian.net"),
        ("http://jira.local/", "http://jira.local"),
        ("https://jira.internal.corp", "https://jira.internal.corp"),
    ],
)
def test_normalize_base_url(raw, expected):
    assert normalize_base_url(raw) == expected


def test_normalize_base_url_is_idempotent():
    once = normalize_base_url("jira.internal.corp/")
    assert normalize_base_url(once) == once


def test_cloud_and_server_are_distinguished():
    decider = RouteDecider()
    cloud = decider.decide(_descriptor(base_url="my.atlassian.net"))
    server = decider.decide(_descriptor(base_url="https://jira.internal.corp/"))

    assert cloud.kind is TargetKind.JIRA_CLOUD
    assert cloud.is_cloud
    assert server.kind is TargetKind.JIRA_SERVER
    assert server.base_url == "https://jira.internal.corp"


def test_empty_base_url_is_rejected_for_jira():
    with pytest.raises(InvalidInput):
        RouteDecider().decide(_descriptor(base_url=""))


def test_tempo_host_follows_jira_site():
    decider = RouteDecider()
    eu = decider.decide(_descriptor(base_url="my.atlassian.net", is_tempo=True))
    world = decider.decide(_descriptor(base_url="", is_tempo=True))

    assert eu.kind is TargetKind.TEMPO
    assert eu.base_url == "https://api.eu.tempo.io"
    assert world.base_url == "https://api.tempo.io"


def test_tempo_hosts_come_from_settings():
    decider = RouteDecider(TempoSettings(cloud_host="eu.example", default_host="us.example"))
    assert decider.tempo_host("x.atlassian.net") == "eu.example"
    assert decider.tempo_host("jira.corp") == "us.example"
