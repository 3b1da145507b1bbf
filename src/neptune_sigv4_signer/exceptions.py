#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0


class SigV4SignerError(Exception):
    """Base exception type for all exceptions raised by neptune-sigv4-signer."""


class SigningError(SigV4SignerError):
    """Raised when a request could not be signed.

    This is the only exception type raised by :py:meth:`SigV4Signer.sign_request`.
    The underlying failure is always available as ``__cause__``.
    """


class MissingFieldError(SigV4SignerError, ValueError):
    """A field required to build a signable request or attach a signature is
    missing."""


class MissingHostError(MissingFieldError):
    """Neither a Host header, a URI authority, nor a bound target host could be
    found on the request."""


class BodyTooLargeError(SigV4SignerError, ValueError):
    """The request body exceeds the maximum size the adapter will buffer."""


class UnsupportedBodyError(SigV4SignerError, TypeError):
    """The request body cannot be read synchronously into memory."""


class CredentialsError(SigV4SignerError):
    """Base exception type for all exceptions raised in credentials resolution."""


class SigningServiceError(SigV4SignerError):
    """The signing engine failed or returned an incomplete set of headers."""
