#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from .._http import Field, HTTPRequest
from .._io import DEFAULT_MAX_BODY_SIZE, is_replayable, read_body
from ..canonical import HOST, CanonicalRequest, Signature
from ..exceptions import UnsupportedBodyError
from ._common import build_canonical_request, check_not_none, signature_headers


class HTTPRequestAdapter:
    """Request adapter for the immutable :py:class:`HTTPRequest`.

    Signing never modifies the request; :py:meth:`attach_signature` returns a copy
    with the signature fields applied. When the destination has no host and no Host
    field is present, the request's bound ``target`` supplies the host.
    """

    def __init__(self, *, max_body_size: int = DEFAULT_MAX_BODY_SIZE) -> None:
        self._max_body_size = max_body_size

    def extract_canonical(self, request: HTTPRequest) -> CanonicalRequest:
        check_not_none(request, "The request must not be None")
        check_not_none(request.destination, "The request URI must not be None")
        check_not_none(request.method, "The request method must not be None")

        # Reading a one-shot stream would leave the immutable request unsendable.
        if not is_replayable(request.body):
            raise UnsupportedBodyError(
                "HTTPRequest bodies must be bytes or a seekable stream, got "
                f"{type(request.body)}."
            )

        destination = request.destination
        target = request.target
        return build_canonical_request(
            method=request.method,
            scheme=destination.scheme,
            authority=destination.netloc,
            path=destination.path,
            query=destination.query,
            header_pairs=[pair for fld in request.fields for pair in fld.as_tuples()],
            body=read_body(request.body, max_size=self._max_body_size),
            bound_target=(target.scheme, target.netloc) if target else None,
        )

    def attach_signature(
        self, request: HTTPRequest, signature: Signature
    ) -> HTTPRequest:
        headers = signature_headers(signature)
        fields = request.copy_fields()
        if HOST in fields:
            del fields[HOST]
        for name, value in headers:
            fields.set_field(Field(name=name, values=[value]))
        return request.with_fields(fields)
