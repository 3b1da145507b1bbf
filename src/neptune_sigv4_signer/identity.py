#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol, runtime_checkable


def ensure_utc(value: datetime) -> datetime:
    """Ensures that the given datetime is a UTC timezone-aware datetime.

    If the datetime isn't timezone-aware, its timezone is set to UTC. If it is aware,
    it's replaced with the equivalent datetime under UTC.

    :param value: A datetime object that may or may not be timezone-aware.
    :returns: A UTC timezone-aware equivalent datetime.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@runtime_checkable
class Identity(Protocol):
    """An entity available to the signer representing who the user is."""

    expiration: datetime | None = None
    """The expiration time of the identity.

    If time zone is provided, it is updated to UTC. The value must always be in UTC.
    """

    def __post_init__(self) -> None:
        if self.expiration is not None:
            self.expiration = ensure_utc(self.expiration)

    @property
    def is_expired(self) -> bool:
        """Whether the identity is expired."""
        if self.expiration is None:
            return False
        return datetime.now(tz=UTC) >= self.expiration


@dataclass(kw_only=True)
class AWSCredentialsIdentity(Identity):
    access_key_id: str
    """A unique identifier for an AWS user or role."""

    secret_access_key: str
    """A secret key used in conjunction with the access key ID to authenticate
    programmatic access to AWS services."""

    session_token: str | None = None
    """A temporary token used to specify the current session for the supplied
    credentials."""

    expiration: datetime | None = None
    """The expiration time of the identity.

    If time zone is provided, it is updated to UTC. The value must always be in UTC.
    """


@dataclass(kw_only=True)
class AnonymousCredentialsIdentity(Identity):
    """Credentials that carry no keys. Requests cannot be signed with them."""

    access_key_id: None = None
    secret_access_key: None = None
    session_token: None = None
    expiration: datetime | None = None


type AWSCredentials = AWSCredentialsIdentity | AnonymousCredentialsIdentity


def is_anonymous(identity: AWSCredentials) -> bool:
    """Whether ``identity`` lacks the keys needed to sign."""
    return identity.access_key_id is None or identity.secret_access_key is None


@runtime_checkable
class CredentialsResolver(Protocol):
    """Supplies the credentials used to sign a single request.

    Resolvers are consulted once per signing call, so a resolver that returns fresh
    values on each call makes credential rotation visible without rebuilding the
    signer. Implementations must be safe to call from several threads at once.
    """

    def resolve(self) -> AWSCredentials:
        """Get the current credentials.

        :raises CredentialsError: If credentials cannot be resolved.
        """
        ...
