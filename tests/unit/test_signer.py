#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from unittest.mock import Mock

import httpx
import pytest
from freezegun import freeze_time

from neptune_sigv4_signer import (
    CanonicalRequest,
    CRTSigningService,
    HttpxRequestAdapter,
    RequestMetadata,
    RequestMetadataAdapter,
    SignerConfig,
    SigningError,
    SigV4Signer,
    StaticCredentialsResolver,
)
from neptune_sigv4_signer.credentials_resolvers import (
    AnonymousCredentials,
    LegacyCredentialsResolver,
    StaticCredentialsProvider,
)
from neptune_sigv4_signer.exceptions import (
    CredentialsError,
    MissingFieldError,
    MissingHostError,
    SigningServiceError,
)
from neptune_sigv4_signer.identity import AWSCredentials, AWSCredentialsIdentity
from neptune_sigv4_signer.signing import SigningResult

CREDENTIALS = AWSCredentialsIdentity(access_key_id="akid", secret_access_key="secret")
SESSION_CREDENTIALS = AWSCredentialsIdentity(
    access_key_id="akid", secret_access_key="secret", session_token="token"
)


class FakeSigningService:
    def __init__(self) -> None:
        self.calls: list[tuple[CanonicalRequest, AWSCredentials, str, str]] = []

    def sign(
        self,
        request: CanonicalRequest,
        *,
        identity: AWSCredentials,
        region: str,
        service: str,
    ) -> SigningResult:
        self.calls.append((request, identity, region, service))
        return SigningResult(
            host=request.authority,
            date="20201004T000000Z",
            authorization=f"auth:{identity.access_key_id}",
        )


def _metadata(**kwargs) -> RequestMetadata:
    values = {
        "full_uri": "http://example.com:8182/sparql?query=a%20b",
        "method": "GET",
        "headers": {"Accept": "application/json"},
    } | kwargs
    return RequestMetadata(**values)


def _signer(
    credentials: AWSCredentials = CREDENTIALS,
    signing_service: FakeSigningService | None = None,
) -> SigV4Signer[RequestMetadata]:
    return SigV4Signer(
        region="us-east-1",
        credentials_resolver=StaticCredentialsResolver(credentials=credentials),
        adapter=RequestMetadataAdapter(),
        signing_service=signing_service or FakeSigningService(),
    )


def test_sign_request_attaches_headers() -> None:
    service = FakeSigningService()
    request = _metadata()

    signed = _signer(signing_service=service).sign_request(request)

    assert signed is request
    assert request.headers == {
        "Accept": "application/json",
        "Host": "example.com:8182",
        "X-Amz-Date": "20201004T000000Z",
        "Authorization": "auth:akid",
    }
    canonical, identity, region, service_name = service.calls[0]
    assert canonical.endpoint == "http://example.com:8182"
    assert dict(canonical.query_parameters) == {"query": ("a b",)}
    assert identity is CREDENTIALS
    assert region == "us-east-1"
    assert service_name == "neptune-db"


def test_session_token_is_attached() -> None:
    request = _signer(credentials=SESSION_CREDENTIALS).sign_request(_metadata())

    assert request.headers["X-Amz-Security-Token"] == "token"


def test_credentials_are_resolved_per_call() -> None:
    resolver = Mock()
    resolver.resolve.side_effect = [
        CREDENTIALS,
        AWSCredentialsIdentity(access_key_id="rotated", secret_access_key="secret"),
    ]
    signer = SigV4Signer(
        region="us-east-1",
        credentials_resolver=resolver,
        adapter=RequestMetadataAdapter(),
        signing_service=FakeSigningService(),
    )

    first = signer.sign_request(_metadata())
    second = signer.sign_request(_metadata())

    assert first.headers["Authorization"] == "auth:akid"
    assert second.headers["Authorization"] == "auth:rotated"


def test_missing_host_is_wrapped() -> None:
    request = _metadata(full_uri="/sparql")

    with pytest.raises(SigningError) as exc_info:
        _signer().sign_request(request)

    assert isinstance(exc_info.value.__cause__, MissingHostError)
    assert request.headers == {"Accept": "application/json"}


def test_none_request_is_wrapped() -> None:
    with pytest.raises(SigningError) as exc_info:
        _signer().sign_request(None)  # type: ignore[arg-type]

    assert isinstance(exc_info.value.__cause__, MissingFieldError)


def test_credentials_failure_leaves_request_unchanged() -> None:
    resolver = Mock()
    resolver.resolve.side_effect = CredentialsError("no credentials")
    signer = SigV4Signer(
        region="us-east-1",
        credentials_resolver=resolver,
        adapter=RequestMetadataAdapter(),
        signing_service=FakeSigningService(),
    )
    request = _metadata()

    with pytest.raises(SigningError) as exc_info:
        signer.sign_request(request)

    assert isinstance(exc_info.value.__cause__, CredentialsError)
    assert request.headers == {"Accept": "application/json"}


@freeze_time("2024-06-01")
def test_expired_credentials_are_rejected() -> None:
    service = FakeSigningService()
    expired = AWSCredentialsIdentity(
        access_key_id="akid",
        secret_access_key="secret",
        expiration=datetime(2024, 5, 31, tzinfo=UTC),
    )
    signer = _signer(credentials=expired, signing_service=service)
    request = _metadata()

    with pytest.raises(SigningError) as exc_info:
        signer.sign_request(request)

    assert isinstance(exc_info.value.__cause__, CredentialsError)
    assert service.calls == []
    assert request.headers == {"Accept": "application/json"}


@freeze_time("2024-06-01")
def test_unexpired_credentials_are_used() -> None:
    valid = AWSCredentialsIdentity(
        access_key_id="akid",
        secret_access_key="secret",
        expiration=datetime(2024, 6, 2, tzinfo=UTC),
    )

    signed = _signer(credentials=valid).sign_request(_metadata())

    assert signed.headers["Authorization"] == "auth:akid"


def test_signing_service_failure_is_wrapped() -> None:
    service = Mock()
    service.sign.side_effect = SigningServiceError("engine failure")
    signer = SigV4Signer(
        region="us-east-1",
        credentials_resolver=StaticCredentialsResolver(credentials=CREDENTIALS),
        adapter=RequestMetadataAdapter(),
        signing_service=service,
    )
    request = _metadata()

    with pytest.raises(SigningError) as exc_info:
        signer.sign_request(request)

    assert isinstance(exc_info.value.__cause__, SigningServiceError)
    assert request.headers == {"Accept": "application/json"}


def test_anonymous_legacy_credentials_fail_to_sign() -> None:
    signer = SigV4Signer(
        region="us-east-1",
        credentials_resolver=LegacyCredentialsResolver.create(
            StaticCredentialsProvider(AnonymousCredentials())
        ),
        adapter=RequestMetadataAdapter(),
    )

    with pytest.raises(SigningError) as exc_info:
        signer.sign_request(_metadata())

    assert isinstance(exc_info.value.__cause__, SigningServiceError)


@pytest.mark.parametrize("region", ["", "   "])
def test_region_is_required(region: str) -> None:
    with pytest.raises(MissingFieldError):
        SigV4Signer(
            region=region,
            credentials_resolver=StaticCredentialsResolver(credentials=CREDENTIALS),
            adapter=RequestMetadataAdapter(),
        )


def test_credentials_resolver_is_required() -> None:
    with pytest.raises(MissingFieldError):
        SigV4Signer(
            region="us-east-1",
            credentials_resolver=None,  # type: ignore[arg-type]
            adapter=RequestMetadataAdapter(),
        )


def test_service_name() -> None:
    signer = _signer()
    assert signer.service_name == "neptune-db"
    assert signer.region == "us-east-1"


def test_concurrent_signing() -> None:
    signer = _signer()
    requests = [
        _metadata(full_uri=f"http://host{i}.example.com:8182/status") for i in range(32)
    ]

    with ThreadPoolExecutor(max_workers=8) as executor:
        signed = list(executor.map(signer.sign_request, requests))

    for i, request in enumerate(signed):
        assert request.headers["Host"] == f"host{i}.example.com:8182"


def test_from_config() -> None:
    config = SignerConfig(
        region="eu-west-1",
        max_body_size=4,
        credentials_resolver=StaticCredentialsResolver(credentials=CREDENTIALS),
    )
    config.resolve(environment_loader=dict, config_file_loader=dict)
    service = FakeSigningService()

    signer = SigV4Signer.from_config(
        config, HttpxRequestAdapter, signing_service=service
    )
    request = httpx.Request("POST", "http://example.com:8182/sparql", content=b"x")
    signer.sign_request(request)

    assert signer.region == "eu-west-1"
    assert service.calls[0][2] == "eu-west-1"
    with pytest.raises(SigningError):
        signer.sign_request(
            httpx.Request("POST", "http://example.com:8182/sparql", content=b"large")
        )


def test_from_config_requires_region() -> None:
    config = SignerConfig()
    config.resolve(environment_loader=dict, config_file_loader=dict)

    with pytest.raises(MissingFieldError):
        SigV4Signer.from_config(config, HttpxRequestAdapter)


def test_end_to_end_with_crt() -> None:
    signer = SigV4Signer(
        region="us-east-1",
        credentials_resolver=StaticCredentialsResolver(credentials=SESSION_CREDENTIALS),
        adapter=HttpxRequestAdapter(),
        signing_service=CRTSigningService(
            clock=lambda: datetime(2020, 10, 4, tzinfo=UTC)
        ),
    )
    request = httpx.Request(
        "GET", "https://example.com:8182/sparql", params={"query": "select ?s"}
    )

    signer.sign_request(request)

    assert request.headers["host"] == "example.com:8182"
    assert request.headers["x-amz-date"] == "20201004T000000Z"
    assert request.headers["x-amz-security-token"] == "token"
    assert re.match(
        r"AWS4-HMAC-SHA256 Credential=akid/20201004/us-east-1/neptune-db/aws4_request, "
        r"SignedHeaders=host;x-amz-date;x-amz-security-token, Signature=[0-9a-f]{64}$",
        request.headers["authorization"],
    )
