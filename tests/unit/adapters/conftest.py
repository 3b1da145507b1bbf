#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

import httpx
import pytest
from requests import PreparedRequest
from requests.structures import CaseInsensitiveDict

from neptune_sigv4_signer import (
    Field,
    Fields,
    HTTPRequest,
    HTTPRequestAdapter,
    HttpxRequestAdapter,
    RequestMetadata,
    RequestMetadataAdapter,
    RequestsRequestAdapter,
)
from neptune_sigv4_signer._http import parse_uri
from neptune_sigv4_signer.interfaces import RequestAdapter


@dataclass(kw_only=True)
class AdapterCase:
    adapter: RequestAdapter[Any]
    build: Callable[[str, str, dict[str, str], bytes | None], Any]
    """Build a native request from method, URI, headers and body."""

    headers_of: Callable[[Any], dict[str, str]]
    """Get the headers of a native request with lowercased names."""

    header_names: Callable[[Any], list[str]]
    """Get every header name of a native request, once per value."""

    clear: Callable[[Any, str], Any]
    """Get a request with its ``uri`` or ``method`` set to None."""


def _build_httpx(
    method: str, uri: str, headers: dict[str, str], body: bytes | None
) -> httpx.Request:
    return httpx.Request(method, uri, headers=headers, content=body)


def _httpx_headers(request: httpx.Request) -> dict[str, str]:
    return {name.lower(): value for name, value in request.headers.items()}


def _httpx_header_names(request: httpx.Request) -> list[str]:
    return [name for name, _ in request.headers.multi_items()]


def _build_http_request(
    method: str, uri: str, headers: dict[str, str], body: bytes | None
) -> HTTPRequest:
    fields = Fields()
    for name, value in headers.items():
        if name in fields:
            fields[name].add(value)
        else:
            fields.set_field(Field(name=name, values=[value]))
    return HTTPRequest(
        destination=parse_uri(uri), method=method, fields=fields, body=body
    )


def _http_request_headers(request: HTTPRequest) -> dict[str, str]:
    return {fld.name.lower(): ",".join(fld.values) for fld in request.fields}


def _http_request_header_names(request: HTTPRequest) -> list[str]:
    return [name for fld in request.fields for name, _ in fld.as_tuples()]


def _clear_http_request(request: HTTPRequest, field: str) -> HTTPRequest:
    return replace(request, **{"destination" if field == "uri" else field: None})


def _build_requests(
    method: str, uri: str, headers: dict[str, str], body: bytes | None
) -> PreparedRequest:
    # Built by hand so origin-form URIs are accepted.
    request = PreparedRequest()
    request.method = method
    request.url = uri
    request.headers = CaseInsensitiveDict(headers)
    request.body = body
    return request


def _requests_headers(request: PreparedRequest) -> dict[str, str]:
    return {name.lower(): value for name, value in request.headers.items()}


def _requests_header_names(request: PreparedRequest) -> list[str]:
    return list(request.headers)


def _build_metadata(
    method: str, uri: str, headers: dict[str, str], body: bytes | None
) -> RequestMetadata:
    return RequestMetadata(
        full_uri=uri, method=method, headers=dict(headers), content=body
    )


def _metadata_headers(request: RequestMetadata) -> dict[str, str]:
    return {name.lower(): value for name, value in request.headers.items()}


def _metadata_header_names(request: RequestMetadata) -> list[str]:
    return list(request.headers)


def _set_none(uri_attribute: str) -> Callable[[Any, str], Any]:
    def clear(request: Any, field: str) -> Any:
        setattr(request, uri_attribute if field == "uri" else field, None)
        return request

    return clear


ADAPTER_CASES: dict[str, Callable[[], AdapterCase]] = {
    "httpx": lambda: AdapterCase(
        adapter=HttpxRequestAdapter(),
        build=_build_httpx,
        headers_of=_httpx_headers,
        header_names=_httpx_header_names,
        clear=_set_none("url"),
    ),
    "http_request": lambda: AdapterCase(
        adapter=HTTPRequestAdapter(),
        build=_build_http_request,
        headers_of=_http_request_headers,
        header_names=_http_request_header_names,
        clear=_clear_http_request,
    ),
    "requests": lambda: AdapterCase(
        adapter=RequestsRequestAdapter(),
        build=_build_requests,
        headers_of=_requests_headers,
        header_names=_requests_header_names,
        clear=_set_none("url"),
    ),
    "metadata": lambda: AdapterCase(
        adapter=RequestMetadataAdapter(),
        build=_build_metadata,
        headers_of=_metadata_headers,
        header_names=_metadata_header_names,
        clear=_set_none("full_uri"),
    ),
}


@pytest.fixture(params=list(ADAPTER_CASES))
def case(request: pytest.FixtureRequest) -> AdapterCase:
    return ADAPTER_CASES[request.param]()
