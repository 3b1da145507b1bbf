#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from urllib.parse import urlsplit

from .._io import DEFAULT_MAX_BODY_SIZE, read_body
from ..canonical import HOST, CanonicalRequest, Signature
from ..metadata import RequestMetadata
from ._common import (
    build_canonical_request,
    check_not_none,
    is_host_header,
    signature_headers,
)


class RequestMetadataAdapter:
    """Request adapter for :py:class:`RequestMetadata`, whose ``headers`` dict is
    updated in place."""

    def __init__(self, *, max_body_size: int = DEFAULT_MAX_BODY_SIZE) -> None:
        self._max_body_size = max_body_size

    def extract_canonical(self, request: RequestMetadata) -> CanonicalRequest:
        check_not_none(request, "The request must not be None")
        check_not_none(request.full_uri, "The request URI must not be None")
        check_not_none(request.method, "The request method must not be None")

        parts = urlsplit(request.full_uri)
        headers = request.headers if request.headers is not None else {}
        return build_canonical_request(
            method=request.method,
            scheme=parts.scheme,
            authority=parts.netloc.rpartition("@")[2],
            path=parts.path,
            query=parts.query or None,
            header_pairs=list(headers.items()),
            body=read_body(request.content, max_size=self._max_body_size),
        )

    def attach_signature(
        self, request: RequestMetadata, signature: Signature
    ) -> RequestMetadata:
        headers = signature_headers(signature)
        if request.headers is None:
            request.headers = {}
        host_names = [name for name in request.headers if is_host_header(name)]
        # The signed host takes the place of the first host entry; later ones are
        # stale duplicates of the same header.
        for name in host_names[1:]:
            del request.headers[name]
        for name, value in headers:
            if name == HOST and host_names:
                name = host_names[0]
            request.headers[name] = value
        return request
