#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from typing import Protocol

from .canonical import CanonicalRequest, Signature


class RequestAdapter[T](Protocol):
    """Translates between one native request type and the signing pipeline.

    Implementations must be stateless with respect to individual requests so a
    single adapter can serve many threads at once.
    """

    def extract_canonical(self, request: T) -> CanonicalRequest:
        """Describe ``request`` in client-agnostic form.

        :raises MissingFieldError: If the request, its URI, or its method is missing.
        :raises MissingHostError: If no host can be determined for the request.
        """
        ...

    def attach_signature(self, request: T, signature: Signature) -> T:
        """Apply the SigV4 headers in ``signature`` to ``request``.

        Any existing Host header is replaced. Mutable request types are modified in
        place and returned; immutable ones are returned as an enriched copy.
        """
        ...
