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
Codec capability interfaces.

Every codec (including the multiplexer itself) implements the
`Encoder` and `Decoder` halves:

- `.encodable(value) -> bool` / `.encode(output, value) -> None`
- `.decodable(header) -> bool` / `.decode(input) -> Any`

and carries a `.header: str` identifying its payload encoding.
A bare codec NEVER reads or writes its own header; framing is decided
by whoever drives it (see `encode_with_header()`, the header-wrap
adapter and the multiplexer).

'''
from __future__ import annotations
import io
from typing import (
    Any,
    BinaryIO,
    Protocol,
    runtime_checkable,
)

from ._header import (
    encode_header,
    write_header,
)


@runtime_checkable
class Encoder(Protocol):

    def encodable(self, value: Any) -> bool:
        '''
        Predicate for whether this codec can encode `value`.

        '''
        ...

    def encode(self, output: BinaryIO, value: Any) -> None:
        '''
        Write the encoded form of `value` to `output`.

        '''
        ...


@runtime_checkable
class Decoder(Protocol):

    def decodable(self, header: str) -> bool:
        '''
        Predicate for whether this codec can decode a payload
        prefixed by `header`.

        '''
        ...

    def decode(self, input: BinaryIO) -> Any:
        '''
        Read and return one value from `input`.

        '''
        ...


@runtime_checkable
class Codec(
    Encoder,
    Decoder,
    Protocol,
):
    header: str|None


def write_framed(
    output: BinaryIO,
    header: str,
    codec: Encoder,
    value: Any,
) -> None:
    '''
    Write the framed `header` followed immediately by `codec`'s
    encoding of `value`.

    The payload is encoded in full before anything is written so
    a failing encode never leaves a partial frame on `output`.

    '''
    encode_header(header)
    payload: bytes = encode_to_bytes(codec, value)
    write_header(output, header)
    output.write(payload)


def encode_with_header(
    codec: Codec,
    output: BinaryIO,
    value: Any,
) -> None:
    '''
    Write `codec`'s own header followed immediately by its encoding
    of `value`.

    '''
    write_framed(
        output,
        codec.header,
        codec,
        value,
    )


def encode_to_bytes(
    codec: Encoder,
    value: Any,
) -> bytes:
    '''
    Encode `value` with `codec` into a `bytes` buffer.

    '''
    buf = io.BytesIO()
    codec.encode(buf, value)
    return buf.getvalue()


def decode_from_bytes(
    codec: Decoder,
    data: bytes|bytearray|memoryview,
) -> Any:
    return codec.decode(io.BytesIO(data))
