#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Request building, signing and transport for the Flickr REST API.

Every call starts from a fresh, frozen `FlickrRequest`; signing turns it into
a `requests.PreparedRequest` and `FlickrClient.post` sends that and parses the
XML reply. Nothing here holds per-request state, so one `FlickrClient` can be
shared between calls.
"""

import dataclasses
import hashlib
import logging
import os
import xml.etree.ElementTree as ET

import requests
from flickrapi.auth import FlickrAccessToken
from flickrapi.tokencache import OAuthTokenCache
from requests_oauthlib import OAuth1

import utils

### LOGGING ####################################################################
logger = logging.getLogger(__name__)
utils.configure_logger(logger)
### GLOBALS ####################################################################
API_ENDPOINT = "https://api.flickr.com/services/rest/"
HTTP_VERB = "POST"
DEFAULT_TIMEOUT = 30
################################################################################


@dataclasses.dataclass(frozen=True)
class Credentials:
    """Consumer key/secret plus an optional OAuth access token."""

    api_key: str
    api_secret: str
    token: FlickrAccessToken = None

    def __repr__(self):
        # Keep secrets out of logs and tracebacks.
        return f"Credentials(api_key={self.api_key!r}, token={'set' if self.token else None})"


@dataclasses.dataclass(frozen=True)
class FlickrRequest:
    """An unsigned Flickr API call.

    `args` holds (name, value) pairs other than `method`; values are strings
    and unset optional arguments are never stored.
    """

    method: str
    args: tuple = ()
    endpoint: str = API_ENDPOINT
    verb: str = HTTP_VERB

    @property
    def params(self):
        """Returns a new dict of every argument, `method` included."""
        params = {"method": self.method}
        params.update(self.args)
        return params

    def set_args(self, **args):
        """Returns a copy with `args` added as given, empty values included."""
        merged = dict(self.args)
        merged.update((name, _arg(value)) for name, value in args.items())
        return dataclasses.replace(self, args=tuple(merged.items()))

    def with_args(self, **args):
        """Returns a copy with the optional `args` added. Unset values (see
        `utils.is_unset`) are dropped rather than sent empty."""
        return self.set_args(**{name: value for name, value in args.items()
                                if not utils.is_unset(value)})


def _arg(value):
    # Flickr flags are 1/0.
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def new_request(method, required=None, endpoint=API_ENDPOINT, **optional):
    """Builds a fresh FlickrRequest for the API method `method`.

    Arguments in the `required` mapping are always sent; keyword arguments
    are optional and left out when unset.
    """
    request = FlickrRequest(method=method, endpoint=endpoint)
    return request.set_args(**(required or {})).with_args(**optional)


### SIGNING ####################################################################
def api_signature(secret, params):
    """Legacy Flickr api_sig: md5 of the shared secret followed by every
    argument name and value, sorted by name.

    https://www.flickr.com/services/api/auth.spec.html#signing
    """
    s = secret + "".join(k + str(v) for k, v in sorted(params.items()))
    return hashlib.md5(s.encode("utf-8")).hexdigest()


def api_sign(request, credentials):
    """Signs `request` with the API key scheme.

    Args:
        request (FlickrRequest)
        credentials (Credentials)

    Returns:
        requests.PreparedRequest with `api_key` and `api_sig` in the body.
    """
    params = request.params
    params["api_key"] = credentials.api_key
    params["api_sig"] = api_signature(credentials.api_secret, params)
    return requests.Request(request.verb, request.endpoint, data=params).prepare()


def oauth_sign(request, credentials):
    """Signs `request` with OAuth 1.0a (HMAC-SHA1, Authorization header).

    Without an access token the request is signed with the consumer key
    alone, which Flickr treats as an unauthenticated call.

    Args:
        request (FlickrRequest)
        credentials (Credentials)

    Returns:
        requests.PreparedRequest
    """
    token = credentials.token
    if token is None:
        logger.debug(f"No access token; signing {request.method} with consumer key only.")
    auth = OAuth1(credentials.api_key,
                  client_secret=credentials.api_secret,
                  resource_owner_key=token.token if token else None,
                  resource_owner_secret=token.token_secret if token else None,
                  signature_type="auth_header")
    return requests.Request(request.verb, request.endpoint, data=request.params, auth=auth).prepare()


### CLIENT #####################################################################
class FlickrClient:
    """Credentials, endpoint and HTTP session shared by the photo operations."""

    def __init__(self, credentials, session=None, endpoint=API_ENDPOINT, timeout=DEFAULT_TIMEOUT):
        self.credentials = credentials
        self.session = session if session is not None else requests.Session()
        self.endpoint = endpoint
        self.timeout = timeout

    def new_request(self, method, required=None, **optional):
        return new_request(method, required, endpoint=self.endpoint, **optional)

    def oauth_sign(self, request):
        return oauth_sign(request, self.credentials)

    def api_sign(self, request):
        return api_sign(request, self.credentials)

    def post(self, prepared, parse):
        """Sends a signed request and parses the XML reply.

        Args:
            prepared (requests.PreparedRequest): from `oauth_sign` or
            `api_sign`.
            parse (callable): turns the root `<rsp>` Element into a response
            record.

        Returns:
            Whatever `parse` returns.

        Raises:
            requests.RequestException: transport failure or non-2xx status.
            xml.etree.ElementTree.ParseError: the body is not XML.
        """
        r = self.session.send(prepared, timeout=self.timeout)
        r.raise_for_status()
        root = ET.fromstring(r.content)
        logger.debug(f"{prepared.url} replied stat={root.get('stat')}")
        return parse(root)


### CONFIG #####################################################################
def load_credentials():
    """Reads credentials from the environment.

    FLICKR_KEY and FLICKR_SECRET are required. FLICKR_OAUTH_TOKEN and
    FLICKR_OAUTH_TOKEN_SECRET, when both set, supply the access token, whose
    permission level comes from FLICKR_OAUTH_PERMS (default 'delete').
    """
    try:
        api_key = os.environ['FLICKR_KEY']
        api_secret = os.environ['FLICKR_SECRET']
    except KeyError as e:
        logger.exception(e)
        raise
    token = None
    oauth_token = os.environ.get('FLICKR_OAUTH_TOKEN')
    oauth_token_secret = os.environ.get('FLICKR_OAUTH_TOKEN_SECRET')
    if oauth_token and oauth_token_secret:
        perms = os.environ.get('FLICKR_OAUTH_PERMS', 'delete')
        token = FlickrAccessToken(oauth_token, oauth_token_secret, perms)
    return Credentials(api_key, api_secret, token)


def credentials_from_token_cache(api_key, api_secret, username=""):
    """Builds Credentials around a token previously stored by flickrapi's
    OAuth token cache (~/.flickr/oauth-tokens.sqlite)."""
    token = OAuthTokenCache(api_key, username).token
    if token is None:
        logger.warning(f"No cached OAuth token for {api_key!r}; calls will be unauthenticated.")
    return Credentials(api_key, api_secret, token)
