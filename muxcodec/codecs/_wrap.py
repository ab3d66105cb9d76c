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
Header-wrap adapter: turn a bare codec (one which never touches
headers) into a stand-alone codec which writes its header ahead of
every payload and checks it when reading back.

'''
from __future__ import annotations
from typing import (
    Any,
    BinaryIO,
)

from .._core import (
    Codec,
    write_framed,
)
from .._exceptions import (
    HeaderMismatch,
    InvalidConfiguration,
)
from .._header import read_header
from ..pretty_struct import Struct


class HeaderCodec(
    Struct,
    frozen=True,
):
    header: str
    codec: Any

    def encodable(
        self,
        value: Any,
    ) -> bool:
        return self.codec.encodable(value)

    def encode(
        self,
        output: BinaryIO,
        value: Any,
    ) -> None:
        write_framed(
            output,
            self.header,
            self.codec,
            value,
        )

    def decodable(
        self,
        header: str,
    ) -> bool:
        return header == self.header

    def decode(
        self,
        input: BinaryIO,
    ) -> Any:
        header: str = read_header(input)
        if header != self.header:
            raise HeaderMismatch(
                expected=self.header,
                actual=header,
            )

        return self.codec.decode(input)


def wrap_header(
    codec: Codec,
    header: str|None = None,
) -> HeaderCodec:
    '''
    Wrap `codec` such that its header (or the explicitly passed
    `header`) is written before, and read back and verified ahead of,
    each payload.

    '''
    header = header or getattr(codec, 'header', None)
    if not header:
        raise InvalidConfiguration(
            f'Cannot header-wrap a codec without a header: {codec!r}\n',
            codec=codec,
        )

    return HeaderCodec(
        header=header,
        codec=codec,
    )
