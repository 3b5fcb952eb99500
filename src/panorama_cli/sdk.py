"""Thin wrapper around the pan-python XML API client."""

import ssl
from typing import cast

import pan.xapi

from panorama_cli.connection import ConnectionParams
from panorama_cli.xapi_client import XapiClientProtocol


def _ssl_context(verify_ssl: bool) -> ssl.SSLContext | None:
    if verify_ssl:
        return None
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def create_client(connection: ConnectionParams) -> XapiClientProtocol:
    """Create a configured PAN-OS XML API client.

    When only a username and password are given, ``pan.xapi`` requests an
    API key with the first call.
    """

    client = pan.xapi.PanXapi(
        api_key=connection.api_key,
        api_username=connection.username,
        api_password=connection.password,
        hostname=connection.host,
        port=connection.port,
        timeout=connection.timeout,
        ssl_context=_ssl_context(connection.verify_ssl),
    )
    return cast(XapiClientProtocol, client)
