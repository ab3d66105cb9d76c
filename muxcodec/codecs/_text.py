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
Character text codec; payloads are the text encoded in the charset
named by the header, `/text/<charset>`.

'''
from __future__ import annotations
import codecs
from typing import (
    BinaryIO,
)

from .._exceptions import InvalidConfiguration
from ..pretty_struct import Struct


class TextCodec(
    Struct,
    frozen=True,
):
    encoding: str = 'UTF-8'

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except LookupError as lerr:
            raise InvalidConfiguration(
                f'Unknown text encoding: {self.encoding!r}\n',
                encoding=self.encoding,
            ) from lerr

    @property
    def header(self) -> str:
        return f'/text/{self.encoding}'

    def encodable(
        self,
        value: object,
    ) -> bool:
        return isinstance(value, str)

    def encode(
        self,
        output: BinaryIO,
        value: str,
    ) -> None:
        output.write(value.encode(self.encoding))

    def decodable(
        self,
        header: str,
    ) -> bool:
        return header == self.header

    def decode(
        self,
        input: BinaryIO,
    ) -> str:
        return input.read().decode(self.encoding)
