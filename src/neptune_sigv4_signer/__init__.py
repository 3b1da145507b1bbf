#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
"""SigV4 request signing for Amazon Neptune, usable with httpx, Requests, or any
other HTTP client through a small adapter interface."""

from ._http import URI, Field, Fields, HTTPRequest
from .adapters import (
    HTTPRequestAdapter,
    HttpxRequestAdapter,
    HttpxSigV4Auth,
    RequestMetadataAdapter,
    RequestsRequestAdapter,
    RequestsSigV4Auth,
)
from .canonical import CanonicalRequest, Signature
from .config import SignerConfig
from .credentials_resolvers import (
    CredentialsResolverChain,
    EnvironmentCredentialsResolver,
    LegacyCredentialsResolver,
    StaticCredentialsResolver,
)
from .exceptions import SigningError, SigV4SignerError
from .identity import AnonymousCredentialsIdentity, AWSCredentialsIdentity
from .interfaces import RequestAdapter
from .metadata import RequestMetadata
from .signer import SigV4Signer
from .signing import NEPTUNE_SERVICE_NAME, CRTSigningService

__license__ = "Apache-2.0"
__version__ = "0.1.0"

__all__ = (
    "NEPTUNE_SERVICE_NAME",
    "URI",
    "AWSCredentialsIdentity",
    "AnonymousCredentialsIdentity",
    "CRTSigningService",
    "CanonicalRequest",
    "CredentialsResolverChain",
    "EnvironmentCredentialsResolver",
    "Field",
    "Fields",
    "HTTPRequest",
    "HTTPRequestAdapter",
    "HttpxRequestAdapter",
    "HttpxSigV4Auth",
    "LegacyCredentialsResolver",
    "RequestAdapter",
    "RequestMetadata",
    "RequestMetadataAdapter",
    "RequestsRequestAdapter",
    "RequestsSigV4Auth",
    "SigV4Signer",
    "SigV4SignerError",
    "Signature",
    "SignerConfig",
    "SigningError",
    "StaticCredentialsResolver",
)
