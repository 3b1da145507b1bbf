#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass, field


@dataclass(kw_only=True)
class RequestMetadata:
    """Client-neutral description of a request, for HTTP libraries without a
    dedicated adapter.

    Build one from whatever your client uses, sign it, then copy ``headers`` back
    onto the real request before sending.
    """

    full_uri: str
    """The full URI including the query string, for example
    ``http://example.com:8182/sparql?query=...``."""

    method: str
    """The HTTP method, for example ``GET`` or ``POST``."""

    content: bytes | None = None
    """The request payload, usually only set for ``PUT`` or ``POST``."""

    headers: dict[str, str] = field(default_factory=dict[str, str])
    """Request headers. Signing adds to and replaces entries in this dict."""

    query_parameters: dict[str, str] | None = None
    """Query parameters as a convenience for the caller. Signing always uses the query
    component of ``full_uri``."""
