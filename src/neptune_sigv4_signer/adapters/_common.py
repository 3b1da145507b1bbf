#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterable

from ..canonical import (
    AUTHORIZATION,
    HOST,
    X_AMZ_DATE,
    X_AMZ_SECURITY_TOKEN,
    CanonicalRequest,
    Signature,
)
from ..exceptions import MissingFieldError, MissingHostError
from ..querystring import parse_query_string

DEFAULT_SCHEME = "http"


def check_not_none(value: object, message: str) -> None:
    if value is None:
        raise MissingFieldError(message)


def is_host_header(name: str) -> bool:
    return name.lower() == "host"


def find_host_header(names: Iterable[str]) -> str | None:
    """Get the first name that case-insensitively matches ``host``."""
    return next((name for name in names if is_host_header(name)), None)


def group_headers(
    pairs: Iterable[tuple[str, str]],
) -> tuple[dict[str, list[str]], str | None]:
    """Split raw header pairs into signable headers and a Host value.

    Names are grouped case-insensitively under the first spelling seen. The value of
    the first Host header wins; any later Host headers are ignored.
    """
    headers: dict[str, list[str]] = {}
    spellings: dict[str, str] = {}
    host: str | None = None
    for name, value in pairs:
        if is_host_header(name):
            if host is None:
                host = value
            continue
        spelling = spellings.setdefault(name.lower(), name)
        headers.setdefault(spelling, []).append(value)
    return headers, host


def build_canonical_request(
    *,
    method: str,
    scheme: str | None,
    authority: str | None,
    path: str | None,
    query: str | None,
    header_pairs: Iterable[tuple[str, str]],
    body: bytes,
    bound_target: tuple[str, str] | None = None,
) -> CanonicalRequest:
    """Assemble a :py:class:`CanonicalRequest` from the parts of a native request.

    The host is taken from the first Host header, then ``authority``, then the
    ``(scheme, authority)`` of ``bound_target``.

    :param query: The raw, still percent-encoded, query component.
    """
    headers, host = group_headers(header_pairs)

    if host:
        endpoint = f"{scheme or DEFAULT_SCHEME}://{host}"
    elif authority:
        endpoint = f"{scheme or DEFAULT_SCHEME}://{authority}"
    elif bound_target is not None and bound_target[1]:
        target_scheme, target_authority = bound_target
        endpoint = f"{target_scheme or DEFAULT_SCHEME}://{target_authority}"
    else:
        raise MissingHostError(
            "Unable to identify host information; either the request URI must "
            "contain an authority or a Host header must be set."
        )

    resource_path = path or "/"
    if not resource_path.startswith("/"):
        resource_path = f"/{resource_path}"

    return CanonicalRequest(
        method=method,
        endpoint=endpoint,
        resource_path=resource_path,
        headers=headers,
        query_parameters=parse_query_string(query),
        body=body,
    )


def signature_headers(signature: Signature) -> list[tuple[str, str]]:
    """Get the headers to attach for ``signature``, in the order they are set.

    :raises MissingFieldError: If the signature lacks a required value.
    """
    check_not_none(signature, "The signature must not be None")
    if not signature.host_header:
        raise MissingFieldError("The signed Host header must not be empty")
    if not signature.date_header:
        raise MissingFieldError("The signed X-Amz-Date header must not be empty")
    if not signature.authorization_header:
        raise MissingFieldError("The signed Authorization header must not be empty")

    headers = [
        (HOST, signature.host_header),
        (X_AMZ_DATE, signature.date_header),
        (AUTHORIZATION, signature.authorization_header),
    ]
    # Temporary credentials require the session token alongside the signature.
    if signature.session_token:
        headers.append((X_AMZ_SECURITY_TOKEN, signature.session_token))
    return headers
