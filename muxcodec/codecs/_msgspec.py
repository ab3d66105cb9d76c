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
Structured data codecs backed by `msgspec`.

Supported interchange formats:
- `msgspec.msgpack` as `/msgpack`
- `msgspec.json` as `/json`

Both decode the remainder of the input stream as a single value.

Extension types (anything not natively supported by `msgspec`) can be
added with an `enc_hook`/`dec_hook` pair plus the `ext_types` the hooks
handle, see,
https://jcristharif.com/msgspec/extending.html#mapping-to-from-native-types

'''
from __future__ import annotations
from types import (
    ModuleType,
    UnionType,
)
from typing import (
    Any,
    BinaryIO,
    Callable,
    Type,
    Union,
    get_args,
    get_origin,
)

from msgspec import (
    json,
    msgpack,
)

from .._exceptions import InvalidConfiguration
from ..log import get_logger
from ..pretty_struct import Struct

log = get_logger(__name__)


# builtins which untyped (`spec=Any`) decoding hands back as the very
# same type, these codecs report them as `.encodable()` by default.
#
# NOTE, `tuple`s and `msgspec.Struct`s are NOT included since they
# decode to a `list` and `dict` respectively unless typed via `spec`.
default_builtins: tuple[Type, ...] = (
    type(None),
    bool,
    int,
    float,
    str,
    list,
    dict,
)


def unpack_spec_types(
    spec: Union[Type]|Type,
) -> tuple[Type, ...]:
    '''
    Given an input type-`spec`, either a lone type or a `Union` of
    types (like `Point|None`), return the classes which values
    decoded with that spec are instances of.

    Generic aliases resolve to their origin (`list[int]` -> `list`)
    and non-class members (like `Literal`s) are dropped.

    '''
    members: tuple = (spec,)
    if get_origin(spec) in (Union, UnionType):
        members = get_args(spec)

    classes: list[Type] = []
    for member in members:
        cls = get_origin(member) or member
        if isinstance(cls, type):
            classes.append(cls)

    return tuple(classes)


class MsgspecCodec(
    Struct,
    frozen=True,
):
    '''
    A `msgspec` interchange lib's encoder + decoder pair tagged with
    a header.

    Pretty much nothing more then delegation to the underlying
    `msgspec.<interchange-protocol>.Encoder/Decoder`s.

    '''
    header: str
    types: tuple[Type, ...]
    _enc: Any
    _dec: Any

    @property
    def enc(self) -> msgpack.Encoder|json.Encoder:
        return self._enc

    @property
    def dec(self) -> msgpack.Decoder|json.Decoder:
        return self._dec

    def encodable(
        self,
        value: Any,
    ) -> bool:
        return isinstance(value, self.types)

    def encode(
        self,
        output: BinaryIO,
        value: Any,
    ) -> None:
        try:
            output.write(self._enc.encode(value))

        except TypeError as typerr:
            typerr.add_note(
                f'|_src error from `msgspec` for {self.header!r}'
            )
            raise typerr

    def decodable(
        self,
        header: str,
    ) -> bool:
        return header == self.header

    def decode(
        self,
        input: BinaryIO,
    ) -> Any:
        # https://jcristharif.com/msgspec/usage.html#typed-decoding
        return self._dec.decode(input.read())


def mk_msgspec_codec(
    lib: ModuleType = msgpack,
    header: str|None = None,

    # the decoded type-spec, like `MyStruct|dict`
    spec: Type|Any = Any,

    # extension-type hooks,
    # https://jcristharif.com/msgspec/extending.html#mapping-to-from-native-types
    enc_hook: Callable|None = None,
    dec_hook: Callable|None = None,
    ext_types: list[Type]|None = None,

    builtins: tuple[Type, ...] = default_builtins,

) -> MsgspecCodec:
    '''
    Convenience factory for creating `msgspec` backed codecs for
    either of the `msgpack` or `json` protocol (sub-)modules.

    '''
    if lib not in (msgpack, json):
        raise InvalidConfiguration(
            f'Unsupported `msgspec` protocol module: {lib!r}\n',
            lib=lib,
        )

    if (
        (enc_hook or dec_hook)
        and
        not ext_types
    ):
        raise InvalidConfiguration(
            'If extending the serializable types with custom hooks '
            '(`enc_hook()`/`dec_hook()`), you must also provide the '
            'expected type set that the hooks will handle via '
            'an `ext_types: list[Type]` argument!\n'
            f'\n'
            f'enc_hook = {enc_hook!r}\n'
            f'dec_hook = {dec_hook!r}\n'
            f'ext_types = {ext_types!r}\n',
            ext_types=ext_types,
        )

    # only report as encodable what decodes back unchanged
    types: tuple[Type, ...] = (
        tuple(builtins)
        if spec is Any
        else unpack_spec_types(spec)
    ) + tuple(ext_types or ())

    protoname: str = lib.__name__.rpartition('.')[-1]
    codec = MsgspecCodec(
        header=header or f'/{protoname}',
        types=types,
        _enc=lib.Encoder(
            enc_hook=enc_hook,
        ),
        _dec=lib.Decoder(
            type=spec,
            dec_hook=dec_hook,
        ),
    )
    log.runtime(
        f'Created `msgspec.{protoname}` codec\n'
        f'|_header: {codec.header!r}\n'
        f'|_spec: {spec!r}\n'
    )
    return codec


def mk_msgpack_codec(**kwargs) -> MsgspecCodec:
    return mk_msgspec_codec(
        lib=msgpack,
        **kwargs,
    )


def mk_json_codec(**kwargs) -> MsgspecCodec:
    return mk_msgspec_codec(
        lib=json,
        **kwargs,
    )
