#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""A small immutable HTTP message model.

Useful for clients that assemble requests themselves (for example websocket
handshakes against a Gremlin endpoint) and hand the signed result to their own
transport.
"""

from __future__ import annotations

from collections import Counter, OrderedDict
from collections.abc import Iterable, Iterator
from copy import deepcopy
from dataclasses import dataclass, field
from functools import cached_property
from urllib.parse import urlsplit

from ._io import ByteStream


class Field:
    """A header name with one or more values.

    Names are case insensitive, but the spelling given here is what gets sent.
    """

    def __init__(self, *, name: str, values: Iterable[str] | None = None):
        self.name = name
        self.values: list[str] = list(values) if values is not None else []

    def add(self, value: str) -> None:
        """Append a value to a field."""
        self.values.append(value)

    def set(self, values: list[str]) -> None:
        """Overwrite existing field values."""
        self.values = values

    def as_tuples(self) -> list[tuple[str, str]]:
        """Get list of ``name``, ``value`` tuples, one per value."""
        return [(self.name, val) for val in self.values]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Field):
            return False
        return self.name == other.name and self.values == other.values

    def __repr__(self) -> str:
        return f"Field(name={self.name!r}, values={self.values!r})"


class Fields:
    def __init__(self, initial: Iterable[Field] | None = None):
        """Insertion-ordered collection of header fields keyed by normalized name.

        :param initial: Initial ``Field`` objects. Normalized names must be unique.
        """
        init_fields = list(initial) if initial is not None else []
        init_names = [self._normalize_field_name(fld.name) for fld in init_fields]
        repeated = [name for name, num in Counter(init_names).items() if num > 1]
        if repeated:
            raise ValueError(
                "Field names of the initial list of fields must be unique. The "
                "following normalized field names appear more than once: "
                f"{', '.join(repeated)}."
            )
        self.entries: OrderedDict[str, Field] = OrderedDict(zip(init_names, init_fields))

    def set_field(self, field: Field) -> None:
        """Alias for __setitem__ to utilize the field.name for the entry key."""
        self[field.name] = field

    def __setitem__(self, name: str, field: Field) -> None:
        normalized_name = self._normalize_field_name(name)
        if normalized_name != self._normalize_field_name(field.name):
            raise ValueError(
                f"Supplied key {name} does not match Field.name provided: {field.name}"
            )
        self.entries[normalized_name] = field

    def get(self, key: str, default: Field | None = None) -> Field | None:
        return self[key] if key in self else default

    def __getitem__(self, name: str) -> Field:
        return self.entries[self._normalize_field_name(name)]

    def __delitem__(self, name: str) -> None:
        del self.entries[self._normalize_field_name(name)]

    def __contains__(self, key: str) -> bool:
        return self._normalize_field_name(key) in self.entries

    def _normalize_field_name(self, name: str) -> str:
        return name.lower()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fields):
            return False
        return self.entries == other.entries

    def __iter__(self) -> Iterator[Field]:
        yield from self.entries.values()

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Fields({self.entries})"


@dataclass(kw_only=True, frozen=True)
class URI:
    """Target location of an :py:class:`HTTPRequest`.

    ``host`` is the empty string for origin-form targets such as ``/gremlin``, where
    the host is carried by a Host field or a bound target instead.
    """

    scheme: str = "https"
    host: str = ""
    port: int | None = None
    path: str | None = None
    query: str | None = None
    fragment: str | None = None

    @property
    def netloc(self) -> str:
        """Construct netloc string in format ``{host}:{port}``."""
        return self._netloc

    # cached_property does NOT behave like property, it actually allows for setting.
    # Therefore we need a layer of indirection.
    @cached_property
    def _netloc(self) -> str:
        port = f":{self.port}" if self.port is not None else ""
        return f"{self.host}{port}" if self.host else ""


def parse_uri(value: str) -> URI:
    """Build a :py:class:`URI` from a string, keeping path and query undecoded.

    The host is kept as written, including the brackets of an IPv6 literal.
    """
    parts = urlsplit(value)
    host = parts.netloc.rpartition("@")[2]
    if parts.port is not None or host.endswith(":"):
        host = host[: host.rindex(":")]
    return URI(
        scheme=parts.scheme or "https",
        host=host,
        port=parts.port,
        path=parts.path or None,
        query=parts.query or None,
        fragment=parts.fragment or None,
    )


@dataclass(kw_only=True, frozen=True)
class HTTPRequest:
    """An immutable HTTP request.

    Signing returns a new instance; the original is never modified.
    """

    destination: URI
    method: str
    fields: Fields = field(default_factory=Fields)
    body: bytes | ByteStream | None = None
    """The request body. Streams must be seekable so they can be read for signing
    and then sent."""

    target: URI | None = None
    """Host the request is bound to, used when ``destination`` is origin-form and no
    Host field is set."""

    def with_fields(self, fields: Fields) -> HTTPRequest:
        """Get a copy of this request carrying ``fields``."""
        return HTTPRequest(
            destination=self.destination,
            method=self.method,
            fields=fields,
            body=self.body,
            target=self.target,
        )

    def copy_fields(self) -> Fields:
        """Get a deep copy of this request's fields, safe to modify."""
        return deepcopy(self.fields)
