"""Caller address resolution shared by access checks and rate limiting."""

import pytest
from starlette.requests import Request

from campaign_calendar.core.config import settings
from campaign_calendar.core.limiter import limiter
from campaign_calendar.core.network import client_address


def make_request(forwarded=None, peer="172.16.0.1"):
    headers = []
    if forwarded is not None:
        headers.append((b"x-forwarded-for", forwarded.encode()))
    return Request({"type": "http", "headers": headers, "client": (peer, 5000)})


def test_peer_address_is_used_by_default(monkeypatch):
    monkeypatch.setattr(settings, "TRUST_FORWARDED_FOR", False)

    assert client_address(make_request(forwarded="10.0.0.5")) == "172.16.0.1"


def test_first_forwarded_entry_is_used_behind_trusted_proxy(monkeypatch):
    monkeypatch.setattr(settings, "TRUST_FORWARDED_FOR", True)

    assert client_address(make_request(forwarded="10.0.0.5, 172.16.0.1")) == "10.0.0.5"


def test_empty_forwarded_header_falls_back_to_peer(monkeypatch):
    monkeypatch.setattr(settings, "TRUST_FORWARDED_FOR", True)

    assert client_address(make_request(forwarded="")) == "172.16.0.1"


@pytest.mark.parametrize("forwarded", ["10.0.0.5", "10.0.0.6"])
def test_rate_limit_buckets_follow_forwarded_address(monkeypatch, forwarded):
    monkeypatch.setattr(settings, "TRUST_FORWARDED_FOR", True)

    assert limiter._key_func(make_request(forwarded=forwarded)) == forwarded
