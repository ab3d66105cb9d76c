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
Prettified version of `msgspec.Struct` for easier console grokin
of codec records (registry entries, dispatch reports, codecs).

'''
from __future__ import annotations
import textwrap
from typing import (
    Any,
    Iterator,
)

from msgspec import (
    Struct as _Struct,
    structs,
)

from .log import get_logger

log = get_logger(__name__)


def iter_fields(struct: Struct) -> Iterator[
    tuple[
        structs.FieldInfo,
        str,
        Any,
    ]
]:
    '''
    Iterate over all non-@property fields of this struct.

    '''
    fi: structs.FieldInfo
    for fi in structs.fields(struct):
        key: str = fi.name
        val: Any = getattr(struct, key)
        yield (
            fi,
            key,
            val,
        )


def iter_struct_ppfmt_lines(
    struct: Struct,
    field_indent: int = 0,
) -> Iterator[tuple[str, str]]:

    fi: structs.FieldInfo
    k: str
    v: Any
    for fi, k, v in iter_fields(struct):

        ft: type = fi.type
        typ_name: str = getattr(
            ft,
            '__name__',
            str(ft)
        ).replace(' ', '')

        # nested structs get their own indented block
        if isinstance(v, Struct):
            val_str: str = v.pformat(
                field_indent=field_indent,
                indent=field_indent,
            ).lstrip()
        else:
            val_str: str = repr(v)

        yield (
            ' '*field_indent,
            f'{k}: {typ_name} = {val_str},',
        )


def pformat(
    struct: Struct,
    field_indent: int = 2,
    indent: int = 0,
) -> str:
    '''
    `pprint.pformat()` style formatting of a `msgspec.Struct` for sane
    reading by a human using a REPL or console log.

    '''
    obj_str: str = ''
    for prefix, field_repr, in iter_struct_ppfmt_lines(
        struct,
        field_indent=field_indent,
    ):
        obj_str += f'{prefix}{field_repr}\n'

    # global whitespace indent
    ws: str = ' '*indent
    if indent:
        obj_str: str = textwrap.indent(
            text=obj_str,
            prefix=ws,
        )

    qtn: str = struct.__class__.__qualname__
    return (
        f'{qtn}(\n'
        f'{obj_str}'
        f'{ws})'
    )


class Struct(_Struct):
    '''
    A "human friendlier" (aka repl buddy) struct subtype.

    '''
    def to_dict(self) -> dict:
        '''
        Like it sounds.. direct delegation to:
        https://jcristharif.com/msgspec/api.html#msgspec.structs.asdict

        '''
        return structs.asdict(self)

    pformat = pformat

    def __repr__(self) -> str:
        try:
            return pformat(self)
        except Exception:
            log.exception(
                f'Failed to `pformat({type(self)})` !?\n'
            )
            return _Struct.__repr__(self)
