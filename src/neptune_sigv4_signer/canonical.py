#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

HOST = "Host"
X_AMZ_DATE = "X-Amz-Date"
AUTHORIZATION = "Authorization"
X_AMZ_SECURITY_TOKEN = "X-Amz-Security-Token"


def _freeze(
    values: Mapping[str, Iterable[str]],
) -> Mapping[str, tuple[str, ...]]:
    return MappingProxyType({key: tuple(vals) for key, vals in values.items()})


@dataclass(kw_only=True, frozen=True)
class CanonicalRequest:
    """Client-agnostic description of an HTTP request, used as signing input.

    Instances are created by a request adapter for a single signing attempt and
    discarded afterwards.
    """

    method: str
    """The HTTP method, for example ``GET``."""

    endpoint: str
    """Scheme and authority only, for example ``https://example.com:8182``."""

    resource_path: str
    """The exact path component. Trailing slashes are preserved."""

    headers: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    """Header names mapped to their values. Never contains a Host header."""

    query_parameters: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    """Decoded query parameter names mapped to their decoded values."""

    body: bytes = b""
    """The full request body. Bodiless requests use the empty byte string."""

    def __post_init__(self) -> None:
        if not self.resource_path.startswith("/"):
            raise ValueError(
                f"Resource path must begin with '/', got {self.resource_path!r}."
            )
        if any(name.lower() == "host" for name in self.headers):
            raise ValueError("Canonical request headers must not contain a Host header.")
        if not isinstance(self.body, bytes):
            raise TypeError(
                f"Canonical request body must be bytes, got {type(self.body)}."
            )
        # Frozen dataclasses only allow this through object.__setattr__.
        object.__setattr__(self, "headers", _freeze(self.headers))
        object.__setattr__(self, "query_parameters", _freeze(self.query_parameters))

    @property
    def authority(self) -> str:
        """The endpoint without its scheme, for example ``example.com:8182``."""
        _, _, authority = self.endpoint.partition("://")
        return authority


@dataclass(kw_only=True, frozen=True)
class Signature:
    """The SigV4 header values produced by a single signing attempt."""

    host_header: str
    """Value for the ``Host`` header."""

    date_header: str
    """Value for the ``X-Amz-Date`` header."""

    authorization_header: str
    """Value for the ``Authorization`` header."""

    session_token: str = ""
    """Value for ``X-Amz-Security-Token``. The empty string means no session token."""
