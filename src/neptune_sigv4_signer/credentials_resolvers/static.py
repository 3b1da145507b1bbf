#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from ..identity import AWSCredentials


class StaticCredentialsResolver:
    """Resolve Static AWS Credentials."""

    def __init__(self, *, credentials: AWSCredentials) -> None:
        self._credentials = credentials

    def resolve(self) -> AWSCredentials:
        return self._credentials
