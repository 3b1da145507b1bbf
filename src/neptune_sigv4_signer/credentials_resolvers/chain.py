#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Sequence
from typing import Final

from ..exceptions import CredentialsError
from ..identity import AWSCredentials, CredentialsResolver
from .environment import EnvironmentCredentialsResolver

logger: Final = logging.getLogger(__name__)


class CredentialsResolverChain:
    """Resolves credentials from the first resolver that can supply them.

    Every resolver is retried on every call; nothing is cached between calls.
    """

    def __init__(self, resolvers: Sequence[CredentialsResolver] | None = None) -> None:
        if resolvers is None:
            resolvers = (EnvironmentCredentialsResolver(),)
        if not resolvers:
            raise ValueError("At least one credentials resolver is required.")
        self._resolvers = tuple(resolvers)

    def resolve(self) -> AWSCredentials:
        for resolver in self._resolvers:
            try:
                credentials = resolver.resolve()
            except CredentialsError as e:
                logger.debug(
                    "Credentials resolver %s failed to resolve credentials: %s",
                    type(resolver).__name__,
                    e,
                )
                continue
            logger.debug("Resolved credentials with %s", type(resolver).__name__)
            return credentials

        raise CredentialsError(
            "None of the configured credentials resolvers were able to resolve "
            "credentials."
        )
