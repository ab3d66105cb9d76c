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
Our classy exception set.

Every error carries its diagnostic context both as attributes and as
a `.msgdata: dict` so callers can match on the failure kind and its
fields instead of string-matching messages.

'''
from __future__ import annotations
from typing import (
    Any,
    Hashable,
)


class CodecError(Exception):
    '''
    Base for all codec dispatch, framing and config errors.

    '''
    def __init__(
        self,
        message: str,
        **msgdata,

    ) -> None:
        super().__init__(message)
        self.msgdata: dict[str, Any] = msgdata


def _pformat_keys(keys: list[Hashable]) -> str:
    return '[' + ', '.join(repr(key) for key in keys) + ']'


class NoCodecAvailable(CodecError, LookupError):
    '''
    None of a multiplexer's registered codecs can encode a value or
    decode a header.

    '''
    def __init__(
        self,
        codecs: list[Hashable],
        *,
        value: Any = None,
        header: str|None = None,
        op: str = 'encode',

    ) -> None:
        if op == 'encode':
            message: str = (
                f'No codecs can encode value: {value!r}\n'
                f'|_type: {type(value)}\n'
                f'|_codecs: {_pformat_keys(codecs)}\n'
            )
            super().__init__(message, codecs=codecs, value=value)
        else:
            message: str = (
                f'No codecs can decode header: {header!r}\n'
                f'|_codecs: {_pformat_keys(codecs)}\n'
            )
            super().__init__(message, codecs=codecs, header=header)

        self.codecs: list[Hashable] = codecs
        self.value: Any = value
        self.header: str|None = header
        self.op: str = op


class CodecNotFound(CodecError, LookupError):
    '''
    A requested codec key is not registered with a multiplexer.

    '''
    def __init__(
        self,
        key: Hashable,
        codecs: list[Hashable],
    ) -> None:
        super().__init__(
            f'Multiplexer does not contain codec for key {key!r}\n'
            f'|_codecs: {_pformat_keys(codecs)}\n',
            key=key,
            codecs=codecs,
        )
        self.key: Hashable = key
        self.codecs: list[Hashable] = codecs


class InvalidConfiguration(CodecError, ValueError):
    '''
    A codec or multiplexer was constructed with an empty or malformed
    set of arguments.

    '''
    def __init__(
        self,
        reason: str,
        **msgdata,
    ) -> None:
        super().__init__(reason, reason=reason, **msgdata)
        self.reason: str = reason


class HeaderError(CodecError, ValueError):
    '''
    A header could not be framed for, or read back from, the wire.

    '''


class HeaderMismatch(HeaderError):
    '''
    A header-wrapped codec read back a header which is not its own.

    '''
    def __init__(
        self,
        expected: str,
        actual: str,
    ) -> None:
        super().__init__(
            f'Header mismatch, got {actual!r} but expected {expected!r}\n',
            expected=expected,
            actual=actual,
        )
        self.expected: str = expected
        self.actual: str = actual
