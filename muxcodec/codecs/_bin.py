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
Raw binary codec, payload bytes are written and read back verbatim.

'''
from __future__ import annotations
from typing import (
    BinaryIO,
)

from ..pretty_struct import Struct


class BinCodec(
    Struct,
    frozen=True,
):
    header: str = '/bin'

    def encodable(
        self,
        value: object,
    ) -> bool:
        return isinstance(
            value,
            (bytes, bytearray, memoryview),
        )

    def encode(
        self,
        output: BinaryIO,
        value: bytes|bytearray|memoryview,
    ) -> None:
        output.write(value)

    def decodable(
        self,
        header: str,
    ) -> bool:
        return header == self.header

    def decode(
        self,
        input: BinaryIO,
    ) -> bytes:
        return input.read()
