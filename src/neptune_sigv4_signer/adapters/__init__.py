#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from ..interfaces import RequestAdapter
from .http_request import HTTPRequestAdapter
from .httpx_request import HttpxRequestAdapter, HttpxSigV4Auth
from .request_metadata import RequestMetadataAdapter
from .requests_request import RequestsRequestAdapter, RequestsSigV4Auth

__all__ = (
    "HTTPRequestAdapter",
    "HttpxRequestAdapter",
    "HttpxSigV4Auth",
    "RequestAdapter",
    "RequestMetadataAdapter",
    "RequestsRequestAdapter",
    "RequestsSigV4Auth",
)
