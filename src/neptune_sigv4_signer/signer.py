#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import logging
from collections.abc import Callable
from typing import Final

from .canonical import Signature
from .config import SignerConfig
from .exceptions import CredentialsError, MissingFieldError, SigningError
from .identity import CredentialsResolver
from .interfaces import RequestAdapter
from .signing import NEPTUNE_SERVICE_NAME, CRTSigningService, SigningService

logger: Final = logging.getLogger(__name__)


class SigV4Signer[T]:
    """Signs native HTTP requests for Amazon Neptune with AWS Signature Version 4.

    A signer is bound to one native request type through its ``adapter``. It holds
    no per-request state, so a single instance can sign requests from many threads
    at once. Credentials are resolved again for every request.

    .. code-block:: python

        signer = SigV4Signer(
            region="us-east-1",
            credentials_resolver=EnvironmentCredentialsResolver(),
            adapter=RequestsRequestAdapter(),
        )
        signed = signer.sign_request(prepared_request)

    :param region: The region of the Neptune cluster, for example ``us-east-1``.
    :param credentials_resolver: Supplies the credentials for each request.
    :param adapter: Translates the native request type to and from the signing
        pipeline.
    :param signing_service: Computes the signature. Defaults to
        :py:class:`CRTSigningService`.
    :raises MissingFieldError: If the region is empty or the credentials resolver
        is missing.
    """

    def __init__(
        self,
        *,
        region: str,
        credentials_resolver: CredentialsResolver,
        adapter: RequestAdapter[T],
        signing_service: SigningService | None = None,
    ) -> None:
        if not region or not region.strip():
            raise MissingFieldError("The region must not be empty")
        if credentials_resolver is None:
            raise MissingFieldError("The credentials resolver must not be None")
        if adapter is None:
            raise MissingFieldError("The request adapter must not be None")

        self._region = region
        self._credentials_resolver = credentials_resolver
        self._adapter = adapter
        self._signing_service = signing_service or CRTSigningService()

    @classmethod
    def from_config(
        cls,
        config: SignerConfig,
        adapter_factory: Callable[..., RequestAdapter[T]],
        *,
        signing_service: SigningService | None = None,
    ) -> "SigV4Signer[T]":
        """Create a signer from a resolved :py:class:`SignerConfig`.

        :param adapter_factory: Called with ``max_body_size`` to build the adapter,
            for example :py:class:`HttpxRequestAdapter`.
        """
        if config.region is None:
            raise MissingFieldError(
                "No region configured. Set AWS_REGION or pass region explicitly."
            )
        return cls(
            region=config.region,
            credentials_resolver=config.credentials_resolver,
            adapter=adapter_factory(max_body_size=config.max_body_size),
            signing_service=signing_service,
        )

    @property
    def region(self) -> str:
        return self._region

    @property
    def service_name(self) -> str:
        return NEPTUNE_SERVICE_NAME

    def sign_request(self, request: T) -> T:
        """Sign ``request`` and return it with the SigV4 headers applied.

        Mutable request types are modified in place and returned. Immutable request
        types are left untouched and a signed copy is returned. When signing fails
        no signature headers are attached.

        :raises SigningError: If the request could not be signed. The underlying
            failure is available as ``__cause__``.
        """
        request_type = type(request).__name__
        logger.debug("Signing %s for %s", request_type, self._region)
        try:
            canonical = self._adapter.extract_canonical(request)
            credentials = self._credentials_resolver.resolve()
            if credentials.is_expired:
                raise CredentialsError(
                    f"Resolved credentials expired at {credentials.expiration}. "
                    "Refresh the credentials or update the expiration."
                )
            result = self._signing_service.sign(
                canonical,
                identity=credentials,
                region=self._region,
                service=NEPTUNE_SERVICE_NAME,
            )
            signature = Signature(
                host_header=result.host,
                date_header=result.date,
                authorization_header=result.authorization,
                session_token=credentials.session_token or "",
            )
            signed = self._adapter.attach_signature(request, signature)
        except Exception as e:
            logger.debug("Failed to sign %s: %s", request_type, e)
            raise SigningError(f"Unable to sign {request_type}: {e}") from e

        logger.debug("Signed %s", request_type)
        return signed
