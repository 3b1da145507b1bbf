#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Final, Protocol, runtime_checkable
from urllib.parse import quote, urlencode

from awscrt import auth as crt_auth
from awscrt import http as crt_http
from awscrt.exceptions import AwsCrtError

from .canonical import AUTHORIZATION, HOST, X_AMZ_DATE, CanonicalRequest
from .exceptions import SigningServiceError
from .identity import AWSCredentials, is_anonymous

logger: Final = logging.getLogger(__name__)

NEPTUNE_SERVICE_NAME: Final = "neptune-db"
"""The service name Neptune expects in the SigV4 credential scope."""

_SIGNING_TIMEOUT_SECONDS = 10.0


@dataclass(kw_only=True, frozen=True)
class SigningResult:
    """The header values produced by the signing engine."""

    host: str
    date: str
    authorization: str


@runtime_checkable
class SigningService(Protocol):
    """Computes SigV4 header values for a canonical request."""

    def sign(
        self,
        request: CanonicalRequest,
        *,
        identity: AWSCredentials,
        region: str,
        service: str,
    ) -> SigningResult:
        """Sign ``request`` with ``identity`` for ``service`` in ``region``.

        :raises SigningServiceError: If the request cannot be signed.
        """
        ...


class CRTSigningService:
    """:py:class:`SigningService` backed by the AWS Common Runtime signer.

    :param clock: Returns the signing time. Defaults to the current time.
    """

    def __init__(self, *, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock

    def sign(
        self,
        request: CanonicalRequest,
        *,
        identity: AWSCredentials,
        region: str,
        service: str,
    ) -> SigningResult:
        if is_anonymous(identity):
            raise SigningServiceError("Anonymous credentials cannot sign requests.")

        host = request.authority
        crt_request = self._build_crt_request(request, host)
        config = crt_auth.AwsSigningConfig(
            algorithm=crt_auth.AwsSigningAlgorithm.V4,
            signature_type=crt_auth.AwsSignatureType.HTTP_REQUEST_HEADERS,
            credentials_provider=crt_auth.AwsCredentialsProvider.new_static(
                identity.access_key_id,
                identity.secret_access_key,
                identity.session_token,
            ),
            region=region,
            service=service,
            date=self._clock() if self._clock is not None else None,
        )

        try:
            signed = crt_auth.aws_sign_request(crt_request, config).result(
                _SIGNING_TIMEOUT_SECONDS
            )
        except AwsCrtError as e:
            raise SigningServiceError(f"Failed to sign request: {e.name}") from e

        date = signed.headers.get(X_AMZ_DATE)
        authorization = signed.headers.get(AUTHORIZATION)
        if not date or not authorization:
            raise SigningServiceError(
                "The signing engine did not produce the expected headers."
            )
        logger.debug("Signed %s request for %s", request.method, host)
        return SigningResult(host=host, date=date, authorization=authorization)

    def _build_crt_request(
        self, request: CanonicalRequest, host: str
    ) -> crt_http.HttpRequest:
        headers = crt_http.HttpHeaders([(HOST, host)])
        for name, values in request.headers.items():
            for value in values:
                headers.add(name, value)

        path = request.resource_path
        if request.query_parameters:
            pairs = [
                (name, value)
                for name, values in request.query_parameters.items()
                for value in values
            ]
            path = f"{path}?{urlencode(pairs, quote_via=quote)}"

        return crt_http.HttpRequest(
            method=request.method,
            path=path,
            headers=headers,
            body_stream=BytesIO(request.body) if request.body else None,
        )
