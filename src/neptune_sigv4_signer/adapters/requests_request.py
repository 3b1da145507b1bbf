#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterator
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from requests import PreparedRequest
from requests.auth import AuthBase
from requests.structures import CaseInsensitiveDict

from .._io import DEFAULT_MAX_BODY_SIZE, drain_body, is_replayable, read_body
from ..canonical import CanonicalRequest, Signature
from ._common import (
    build_canonical_request,
    check_not_none,
    find_host_header,
    signature_headers,
)

if TYPE_CHECKING:
    from ..signer import SigV4Signer


class RequestsRequestAdapter:
    """Request adapter for :py:class:`requests.PreparedRequest`.

    Requests are modified in place. The body is buffered as bytes: ``str`` bodies are
    encoded as UTF-8 and one-shot iterables or streams are replaced with the bytes
    they produced, so the payload sent is exactly the payload signed. Seekable
    streams are read and then rewound. If a one-shot body cannot be read, for
    example because it is too large, it is replaced with an iterator that replays
    it unchanged.
    """

    def __init__(self, *, max_body_size: int = DEFAULT_MAX_BODY_SIZE) -> None:
        self._max_body_size = max_body_size

    def extract_canonical(self, request: PreparedRequest) -> CanonicalRequest:
        check_not_none(request, "The request must not be None")
        check_not_none(request.url, "The request URI must not be None")
        check_not_none(request.method, "The request method must not be None")

        parts = urlsplit(request.url)
        # Userinfo is never part of the signed host.
        authority = parts.netloc.rpartition("@")[2]
        headers = request.headers if request.headers is not None else {}
        return build_canonical_request(
            method=request.method,  # type: ignore[reportArgumentType]
            scheme=parts.scheme,
            authority=authority,
            path=parts.path,
            query=parts.query or None,
            header_pairs=list(headers.items()),
            body=self._buffer_body(request),
        )

    def _buffer_body(self, request: PreparedRequest) -> bytes:
        body = request.body
        if is_replayable(body):
            data = read_body(body, max_size=self._max_body_size)
            if isinstance(body, str):
                request.body = data
            return data

        def restore(chunks: Iterator[bytes | str]) -> None:
            request.body = chunks

        data = drain_body(body, max_size=self._max_body_size, restore=restore)
        request.body = data
        return data

    def attach_signature(
        self, request: PreparedRequest, signature: Signature
    ) -> PreparedRequest:
        headers = signature_headers(signature)
        if request.headers is None:
            request.headers = CaseInsensitiveDict()
        host_name = find_host_header(request.headers)
        if host_name is not None:
            del request.headers[host_name]
        for name, value in headers:
            request.headers[name] = value
        return request


class RequestsSigV4Auth(AuthBase):
    """Signs requests sent with :py:mod:`requests`.

    .. code-block:: python

        signer = SigV4Signer(
            region="us-east-1",
            credentials_resolver=EnvironmentCredentialsResolver(),
            adapter=RequestsRequestAdapter(),
        )
        requests.get(url, params={"query": query}, auth=RequestsSigV4Auth(signer))
    """

    def __init__(self, signer: "SigV4Signer[PreparedRequest]") -> None:
        self._signer = signer

    def __call__(self, r: PreparedRequest) -> PreparedRequest:
        return self._signer.sign_request(r)
