#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
import os

from ..exceptions import CredentialsError
from ..identity import AWSCredentialsIdentity

ACCESS_KEY_ID_ENV = "AWS_ACCESS_KEY_ID"
SECRET_ACCESS_KEY_ENV = "AWS_SECRET_ACCESS_KEY"
SESSION_TOKEN_ENV = "AWS_SESSION_TOKEN"


class EnvironmentCredentialsResolver:
    """Resolves AWS Credentials from system environment variables.

    The environment is read on every call, so rotated values are picked up by the
    next request that is signed.
    """

    def resolve(self) -> AWSCredentialsIdentity:
        access_key_id = os.getenv(ACCESS_KEY_ID_ENV)
        secret_access_key = os.getenv(SECRET_ACCESS_KEY_ENV)
        session_token = os.getenv(SESSION_TOKEN_ENV)

        if not access_key_id or not secret_access_key:
            raise CredentialsError(
                f"{ACCESS_KEY_ID_ENV} and {SECRET_ACCESS_KEY_ENV} are required"
            )

        return AWSCredentialsIdentity(
            access_key_id=access_key_id,
            secret_access_key=secret_access_key,
            session_token=session_token or None,
        )
