#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from urllib.parse import unquote


def parse_query_string(query: str | None) -> dict[str, list[str]]:
    """Parse a raw query string into a mapping of decoded keys to decoded values.

    Segments are separated by ``&`` and empty segments are skipped. Each segment is
    split on the first ``=`` only; a segment without ``=`` maps to the empty string.
    Keys and values are percent-decoded per RFC 3986, so ``+`` is kept literally
    rather than being treated as a space.

    Repeated keys accumulate their values. Both the order in which keys are first
    seen and the order of values for each key are preserved.

    :param query: The raw (still percent-encoded) query component, without the
        leading ``?``. ``None`` is treated as an absent query.
    """
    parameters: dict[str, list[str]] = {}
    if query is None:
        return parameters

    for segment in query.split("&"):
        if not segment:
            continue
        key, sep, value = segment.partition("=")
        decoded_value = unquote(value) if sep else ""
        parameters.setdefault(unquote(key), []).append(decoded_value)

    return parameters
