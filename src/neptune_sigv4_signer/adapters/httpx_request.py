#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Generator, Iterator
from typing import TYPE_CHECKING

import httpx

from .._io import DEFAULT_MAX_BODY_SIZE, drain_body, read_body
from ..canonical import HOST, CanonicalRequest, Signature
from ..exceptions import UnsupportedBodyError
from ._common import build_canonical_request, check_not_none, signature_headers

if TYPE_CHECKING:
    from ..signer import SigV4Signer


class HttpxRequestAdapter:
    """Request adapter for :py:class:`httpx.Request`.

    Requests are modified in place. A streaming body is drained synchronously and
    replaced with an in-memory stream holding the same bytes, so the request can
    still be sent afterwards. A stream that cannot be read, for example because it
    is too large, is replaced with one that replays it unchanged.
    """

    def __init__(self, *, max_body_size: int = DEFAULT_MAX_BODY_SIZE) -> None:
        self._max_body_size = max_body_size

    def extract_canonical(self, request: httpx.Request) -> CanonicalRequest:
        check_not_none(request, "The request must not be None")
        check_not_none(request.url, "The request URI must not be None")
        check_not_none(request.method, "The request method must not be None")

        url = request.url
        raw_path, _, _ = url.raw_path.partition(b"?")
        encoding = request.headers.encoding
        return build_canonical_request(
            method=request.method,
            scheme=url.scheme,
            authority=url.netloc.decode("ascii"),
            path=raw_path.decode("ascii"),
            query=url.query.decode("ascii") or None,
            header_pairs=[
                (name.decode(encoding), value.decode(encoding))
                for name, value in request.headers.raw
            ],
            body=self._read_content(request),
        )

    def _read_content(self, request: httpx.Request) -> bytes:
        try:
            content = request.content
        except httpx.RequestNotRead:
            if not isinstance(request.stream, httpx.SyncByteStream):
                raise UnsupportedBodyError(
                    "Async request streams must be read with `await request.aread()` "
                    "before signing."
                ) from None

            def restore(chunks: Iterator[bytes | str]) -> None:
                request.stream = _ReplayStream(chunks)

            body = drain_body(
                iter(request.stream), max_size=self._max_body_size, restore=restore
            )
            request.stream = httpx.ByteStream(body)
            return body
        return read_body(content, max_size=self._max_body_size)

    def attach_signature(
        self, request: httpx.Request, signature: Signature
    ) -> httpx.Request:
        headers = signature_headers(signature)
        if HOST in request.headers:
            del request.headers[HOST]
        for name, value in headers:
            request.headers[name] = value
        return request


class _ReplayStream(httpx.SyncByteStream):
    """Replays a partially read request stream."""

    def __init__(self, chunks: Iterator[bytes | str]) -> None:
        self._chunks = chunks

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            yield chunk.encode("utf-8") if isinstance(chunk, str) else chunk


class HttpxSigV4Auth(httpx.Auth):
    """Signs every request sent by an :py:class:`httpx.Client` or
    :py:class:`httpx.AsyncClient`.

    .. code-block:: python

        signer = SigV4Signer(
            region="us-east-1",
            credentials_resolver=EnvironmentCredentialsResolver(),
            adapter=HttpxRequestAdapter(),
        )
        with httpx.Client(auth=HttpxSigV4Auth(signer)) as client:
            client.post("https://my-cluster:8182/sparql", data={"query": query})
    """

    requires_request_body = True

    def __init__(self, signer: "SigV4Signer[httpx.Request]") -> None:
        self._signer = signer

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        yield self._signer.sign_request(request)
