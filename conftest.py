#!/usr/bin/env python
# -*- coding: utf-8 -*-

from unittest.mock import Mock
from urllib.parse import parse_qs

import pytest
from flickrapi.auth import FlickrAccessToken

from flickr_client import Credentials, FlickrClient

OK_RSP = b'<?xml version="1.0" encoding="utf-8" ?>\n<rsp stat="ok"></rsp>'


@pytest.fixture
def credentials():
    token = FlickrAccessToken("access-token", "access-secret", "delete")
    return Credentials("consumer-key", "consumer-secret", token)


@pytest.fixture
def make_client(credentials):
    """Returns a factory for FlickrClients whose session replies with `body`."""
    def factory(body=OK_RSP):
        response = Mock()
        response.content = body
        session = Mock()
        session.send.return_value = response
        return FlickrClient(credentials, session=session)
    return factory


def sent_request(client):
    """The PreparedRequest handed to the mocked session."""
    args, _ = client.session.send.call_args
    return args[0]


def sent_params(client):
    """Body arguments of the request handed to the mocked session."""
    body = sent_body(sent_request(client))
    return {k: v[0] for k, v in parse_qs(body, keep_blank_values=True).items()}


def sent_body(prepared):
    body = prepared.body
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return body


def auth_header(prepared):
    value = prepared.headers.get("Authorization", "")
    if isinstance(value, bytes):
        value = value.decode("utf-8")
    return value
