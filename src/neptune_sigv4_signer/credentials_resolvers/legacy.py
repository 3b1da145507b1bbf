#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""Bridge from provider objects exposing ``get()`` to :py:class:`CredentialsResolver`.

Legacy credentials carry ``access_key``, ``secret_key`` and, for temporary
credentials, ``token``. These are the attribute names used by botocore's frozen
credentials, so ``session.get_credentials().get_frozen_credentials`` style objects
can be wrapped without conversion.
"""

import logging
from dataclasses import dataclass
from typing import Any, Final, Protocol, runtime_checkable

from ..identity import (
    AnonymousCredentialsIdentity,
    AWSCredentials,
    AWSCredentialsIdentity,
)

logger: Final = logging.getLogger(__name__)


@dataclass(frozen=True)
class BasicCredentials:
    access_key: str
    secret_key: str


@dataclass(frozen=True)
class SessionCredentials:
    access_key: str
    secret_key: str
    token: str


@dataclass(frozen=True)
class AnonymousCredentials:
    """Marker for requests that should not carry credentials."""

    access_key: None = None
    secret_key: None = None


@runtime_checkable
class LegacyCredentialsProvider(Protocol):
    def get(self) -> Any: ...


class StaticCredentialsProvider:
    """A :py:class:`LegacyCredentialsProvider` that always returns the same
    credentials."""

    def __init__(self, credentials: Any) -> None:
        self._credentials = credentials

    def get(self) -> Any:
        return self._credentials


class LegacyCredentialsResolver:
    """Resolves credentials by delegating to a legacy provider on every call."""

    def __init__(self, provider: LegacyCredentialsProvider) -> None:
        if provider is None:
            raise ValueError("A legacy credentials provider is required.")
        self._provider = provider

    @classmethod
    def create(
        cls, provider: LegacyCredentialsProvider
    ) -> "LegacyCredentialsResolver":
        return cls(provider)

    def resolve(self) -> AWSCredentials:
        credentials = self._provider.get()

        if isinstance(credentials, AnonymousCredentials):
            logger.debug("Legacy provider returned anonymous credentials")
            return AnonymousCredentialsIdentity()

        token = getattr(credentials, "token", None)
        if token is not None:
            logger.debug("Legacy provider returned session credentials")
            return AWSCredentialsIdentity(
                access_key_id=credentials.access_key,
                secret_access_key=credentials.secret_key,
                session_token=token,
            )

        logger.debug("Legacy provider returned basic credentials")
        return AWSCredentialsIdentity(
            access_key_id=credentials.access_key,
            secret_access_key=credentials.secret_key,
        )
