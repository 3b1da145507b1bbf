#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from .chain import CredentialsResolverChain
from .environment import EnvironmentCredentialsResolver
from .legacy import (
    AnonymousCredentials,
    BasicCredentials,
    LegacyCredentialsProvider,
    LegacyCredentialsResolver,
    SessionCredentials,
    StaticCredentialsProvider,
)
from .static import StaticCredentialsResolver

__all__ = (
    "AnonymousCredentials",
    "BasicCredentials",
    "CredentialsResolverChain",
    "EnvironmentCredentialsResolver",
    "LegacyCredentialsProvider",
    "LegacyCredentialsResolver",
    "SessionCredentials",
    "StaticCredentialsProvider",
    "StaticCredentialsResolver",
)
