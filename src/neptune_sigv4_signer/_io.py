#  Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
#  SPDX-License-Identifier: Apache-2.0
from collections.abc import AsyncIterable, Callable, Iterable, Iterator
from inspect import iscoroutinefunction
from itertools import chain
from typing import Protocol, runtime_checkable

from .exceptions import BodyTooLargeError, UnsupportedBodyError

DEFAULT_MAX_BODY_SIZE = 100 * 1024 * 1024
"""Largest body, in bytes, that an adapter will buffer for signing."""

_READ_CHUNK_SIZE = 64 * 1024


@runtime_checkable
class ByteStream(Protocol):
    """A file-like object with a read method that returns bytes."""

    def read(self, size: int = -1, /) -> bytes: ...


@runtime_checkable
class Seekable(Protocol):
    """A file-like object with seek and tell implemented."""

    def seek(self, offset: int, whence: int = 0, /) -> int: ...

    def tell(self) -> int: ...


def is_replayable(body: object) -> bool:
    """Whether reading ``body`` leaves it readable again for sending."""
    if body is None or isinstance(body, bytes | bytearray | memoryview | str):
        return True
    return isinstance(body, ByteStream) and isinstance(body, Seekable)


def read_body(body: object, *, max_size: int = DEFAULT_MAX_BODY_SIZE) -> bytes:
    """Synchronously read a request body into memory.

    Seekable streams are returned to their original position afterwards. Any other
    stream or iterable is consumed, so callers that need to send the request must
    put the returned bytes back in its place.

    :param body: ``None``, a bytes-like object, a ``str`` (encoded as UTF-8), a
        readable stream, or an iterable of byte chunks.
    :param max_size: The largest number of bytes that will be read. Bodies that are
        larger raise :py:class:`BodyTooLargeError` as soon as the limit is crossed.
    """
    if body is None:
        return b""

    if isinstance(body, str):
        return _check_size(body.encode("utf-8"), max_size)

    if isinstance(body, bytes | bytearray | memoryview):
        return _check_size(bytes(body), max_size)

    if isinstance(body, ByteStream):
        if iscoroutinefunction(body.read):
            raise UnsupportedBodyError(
                "An async stream was attached to a request signed synchronously. "
                "Read the body before signing or use a synchronous stream."
            )
        if isinstance(body, Seekable):
            position = body.tell()
            try:
                return _read_stream(body, max_size)
            finally:
                body.seek(position)
        return _read_stream(body, max_size)

    if isinstance(body, AsyncIterable):
        raise UnsupportedBodyError(
            "An async iterable was attached to a request signed synchronously. "
            "Read the body before signing or use a synchronous iterable."
        )

    if isinstance(body, Iterable):
        return _read_chunks(body, max_size)  # type: ignore[reportUnknownArgumentType]

    raise UnsupportedBodyError(f"Unable to read a request body of type {type(body)}.")


def drain_body(
    body: object,
    *,
    max_size: int = DEFAULT_MAX_BODY_SIZE,
    restore: Callable[[Iterator[bytes | str]], None],
) -> bytes:
    """Read a body that can only be read once.

    If reading fails part way through, ``restore`` is called with an iterator that
    yields the chunks already consumed followed by the unread remainder, so the
    caller can put an equivalent body back on the request before the error
    propagates.
    """
    if isinstance(body, ByteStream) and not iscoroutinefunction(body.read):
        chunks: Iterator[bytes | str] = _stream_chunks(body)
    elif isinstance(body, Iterable) and not isinstance(body, str | bytes | bytearray):
        chunks = iter(body)  # type: ignore[reportUnknownArgumentType]
    else:
        return read_body(body, max_size=max_size)

    consumed: list[bytes | str] = []

    def record() -> Iterator[bytes | str]:
        for chunk in chunks:
            consumed.append(chunk)
            yield chunk

    try:
        return _read_chunks(record(), max_size)
    except Exception:
        restore(chain(consumed, chunks))
        raise


def _stream_chunks(stream: ByteStream) -> Iterator[bytes]:
    while chunk := stream.read(_READ_CHUNK_SIZE):
        yield chunk


def _read_stream(stream: ByteStream, max_size: int) -> bytes:
    buffer = bytearray()
    while chunk := stream.read(_READ_CHUNK_SIZE):
        buffer += _to_bytes(chunk)
        _check_size(buffer, max_size)
    return bytes(buffer)


def _read_chunks(chunks: Iterable[bytes | str], max_size: int) -> bytes:
    buffer = bytearray()
    for chunk in chunks:
        buffer += _to_bytes(chunk)
        _check_size(buffer, max_size)
    return bytes(buffer)


def _to_bytes(chunk: object) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    if isinstance(chunk, bytes | bytearray | memoryview):
        return bytes(chunk)
    raise UnsupportedBodyError(f"Request body yielded a chunk of type {type(chunk)}.")


def _check_size[B: (bytes, bytearray)](body: B, max_size: int) -> B:
    if len(body) > max_size:
        raise BodyTooLargeError(
            f"Request body exceeds the maximum of {max_size} bytes that can be "
            "buffered for signing."
        )
    return body
