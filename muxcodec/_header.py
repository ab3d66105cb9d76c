# muxcodec: self-describing, multiplexed serialization codecs.
# Copyright 2018-eternity Tyler Goodlet.

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.

# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

'''
Header framing: the self-describing prefix written ahead of every
encoded payload.

A header is framed on the wire as a single length byte followed by
that many bytes of UTF-8 text, the last of which is always a newline,

    b'\\x0c/text/UTF-8\\n'

The length counts the trailing newline. Payload bytes follow the
newline immediately, with no separator.

'''
from __future__ import annotations
from typing import (
    BinaryIO,
)

from ._exceptions import HeaderError
from .log import get_logger

log = get_logger(__name__)


# the length prefix is one byte (a single-byte varint)
MAX_HEADER_LENGTH: int = 127

_NL: bytes = b'\n'


def encode_header(
    header: str,
) -> bytes:
    '''
    Frame a header path string into its wire form: the length byte
    then the header text plus a terminating newline.

    '''
    if not header:
        raise HeaderError(
            f'Cannot frame an empty header: {header!r}\n',
            header=header,
            reason='empty',
        )

    body: bytes = header.encode('utf-8') + _NL
    length: int = len(body)
    if length > MAX_HEADER_LENGTH:
        raise HeaderError(
            f'Header is too long to frame: {length} > {MAX_HEADER_LENGTH}\n'
            f'|_header: {header!r}\n',
            header=header,
            length=length,
            reason='too-long',
        )

    return bytes((length,)) + body


def write_header(
    output: BinaryIO,
    header: str,
) -> int:
    '''
    Write a framed header to `output`, returning the number of bytes
    written (including the length prefix).

    '''
    frame: bytes = encode_header(header)
    output.write(frame)
    log.transport(f'Wrote header {header!r} ({len(frame)} bytes)\n')
    return len(frame)


def _read_exactly(
    input: BinaryIO,
    n: int,
) -> bytes:
    buf: bytes = b''
    while len(buf) < n:
        chunk: bytes = input.read(n - len(buf))
        if not chunk:
            break
        buf += chunk

    return buf


def read_header(
    input: BinaryIO,
) -> str:
    '''
    Read exactly one framed header from the front of `input` and
    return its text (without the trailing newline).

    The stream is left positioned at the first payload byte.

    '''
    prefix: bytes = _read_exactly(input, 1)
    if not prefix:
        raise HeaderError(
            'Stream ended before any header length byte was read\n',
            reason='eof',
        )

    length: int = prefix[0]
    if not (
        0 < length <= MAX_HEADER_LENGTH
    ):
        raise HeaderError(
            f'Invalid header length byte: {length}\n',
            length=length,
            reason='bad-length',
        )

    body: bytes = _read_exactly(input, length)
    if len(body) < length:
        raise HeaderError(
            f'Stream ended inside header, read {len(body)} of {length} bytes\n'
            f'|_partial: {body!r}\n',
            length=length,
            reason='eof',
        )

    if not body.endswith(_NL):
        raise HeaderError(
            f'Header is not newline terminated: {body!r}\n',
            length=length,
            reason='no-newline',
        )

    try:
        header: str = body[:-1].decode('utf-8')
    except UnicodeDecodeError as uderr:
        raise HeaderError(
            f'Header is not valid UTF-8: {body!r}\n',
            length=length,
            reason='bad-encoding',
        ) from uderr

    log.transport(f'Read header {header!r}\n')
    return header
