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
Multiplexing codec: dispatch each encode or decode to exactly one of
a set of registered sub-codecs.

When encoding, the first registered codec (with a header) which
reports `.encodable(value)` is selected; its header is written
followed by its encoding of the value.

When decoding, one header is read from the stream and the first
registered codec which reports `.decodable(header)` is selected to
read the value from the remaining input.

As a consequence the registered sub-codecs _must_ implement the codec
predicates and _must not_ write or expect to consume their own
headers!

Registration order IS the dispatch priority; a catch-all codec must
be registered last.

Which codec a mux actually delegated to can be discovered by either
passing an explicit `report=DispatchReport()` cell to an operation or
by opening a task-scoped report,

    with open_dispatch_report() as report:
        mux.encode(output, 'abc 123!')

    assert report.key == 'text'

'''
from __future__ import annotations
from collections.abc import Mapping
from contextlib import (
    contextmanager as cm,
)
from contextvars import Token
from typing import (
    Any,
    BinaryIO,
    ClassVar,
    Hashable,
    Iterable,
    Iterator,
)

from .._core import (
    Codec,
    encode_with_header,
)
from .._exceptions import (
    CodecNotFound,
    InvalidConfiguration,
    NoCodecAvailable,
)
from .._header import read_header
from .._state import (
    _ctxvar_DispatchReport,
    current_dispatch_report,
)
from ..log import get_logger
from ..pretty_struct import Struct
from ._wrap import (
    HeaderCodec,
    wrap_header,
)

log = get_logger(__name__)


# the codec ops every registered sub-codec must provide
_codec_methods: tuple[str, ...] = (
    'encodable',
    'encode',
    'decodable',
    'decode',
)


class CodecEntry(
    Struct,
    frozen=True,
):
    '''
    A single (key, sub-codec) registration in a `MuxCodec`.

    '''
    key: Any
    codec: Any

    @property
    def header(self) -> str|None:
        return getattr(self.codec, 'header', None)


class DispatchReport(Struct):
    '''
    A mutable cell recording which sub-codec a `MuxCodec` selected
    for the most recent encode or decode it was handed.

    Purely observational; it never influences dispatch.

    '''
    key: Any = None
    codec: Any = None
    op: str|None = None

    def record(
        self,
        op: str,
        entry: CodecEntry,
    ) -> None:
        self.key = entry.key
        self.codec = entry.codec
        self.op = op


def _report_dispatch(
    op: str,
    entry: CodecEntry,
    report: DispatchReport|None,
) -> None:
    scoped: DispatchReport|None = current_dispatch_report()
    for cell in (report, scoped):
        if cell is not None:
            cell.record(op, entry)


@cm
def open_dispatch_report(
    report: DispatchReport|None = None,

) -> Iterator[DispatchReport]:
    '''
    Open a dispatch report scope for the current task: every
    `MuxCodec` operation made (by this task) inside the block records
    its selected codec key into the yielded cell.

    On exit the prior scope (by default none) is restored.

    '''
    if report is None:
        report = DispatchReport()

    orig: DispatchReport|None = _ctxvar_DispatchReport.get()
    token: Token = _ctxvar_DispatchReport.set(report)
    try:
        yield report
    finally:
        _ctxvar_DispatchReport.reset(token)
        assert _ctxvar_DispatchReport.get() is orig


class MuxCodec(
    Struct,
    frozen=True,
):
    '''
    A multiplexing codec which delegates to an ordered set of keyed
    sub-codecs by reading and writing headers.

    Never construct directly, use `mk_mux_codec()` or
    `MuxCodec.from_pairs()` which validate the registry.

    '''
    entries: tuple[CodecEntry, ...]

    # a mux has no header of its own, the selected sub-codec's
    # header is written instead.
    header: ClassVar[None] = None

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[Hashable, Codec]]|Mapping[Hashable, Codec],

    ) -> MuxCodec:
        '''
        Build a mux from an ordered iterable of `(key, codec)` pairs
        or an (insertion ordered) mapping of keys to codecs.

        '''
        if isinstance(pairs, Mapping):
            pairs = pairs.items()

        entries: list[CodecEntry] = []
        seen: set[Hashable] = set()
        for pair in pairs:
            try:
                key, codec = pair
            except (TypeError, ValueError) as err:
                raise InvalidConfiguration(
                    f'Codec registrations must be `(key, codec)` pairs, '
                    f'got {pair!r}\n',
                    pair=pair,
                ) from err

            try:
                dup: bool = key in seen
                seen.add(key)
            except TypeError as err:
                raise InvalidConfiguration(
                    f'Codec key is not hashable: {key!r}\n',
                    key=key,
                ) from err

            if dup:
                raise InvalidConfiguration(
                    f'Codec key registered more then once: {key!r}\n',
                    key=key,
                )

            missing: list[str] = [
                meth for meth in _codec_methods
                if not callable(getattr(codec, meth, None))
            ]
            if missing:
                raise InvalidConfiguration(
                    f'Codec for key {key!r} does not implement {missing}\n'
                    f'|_codec: {codec!r}\n',
                    key=key,
                    missing=missing,
                )

            entries.append(
                CodecEntry(
                    key=key,
                    codec=codec,
                )
            )

        if not entries:
            raise InvalidConfiguration(
                'A mux codec requires at least one codec\n',
            )

        mux = cls(entries=tuple(entries))
        log.runtime(
            'Created mux codec\n'
            f'|_keys: {list(mux.keys)}\n'
        )
        return mux

    @property
    def keys(self) -> tuple[Hashable, ...]:
        return tuple(
            entry.key for entry in self.entries
        )

    @property
    def codecs(self) -> dict[Hashable, Codec]:
        '''
        An (ordered) copy of the key -> sub-codec table.

        '''
        return {
            entry.key: entry.codec
            for entry in self.entries
        }

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: Hashable) -> bool:
        return any(
            entry.key == key
            for entry in self.entries
        )

    def __getitem__(self, key: Hashable) -> Codec:
        for entry in self.entries:
            if entry.key == key:
                return entry.codec

        raise KeyError(key)

    def find_encodable(
        self,
        value: Any,
    ) -> CodecEntry|None:
        '''
        Return the first entry whose codec has a header and can
        encode `value`, or `None`.

        '''
        for entry in self.entries:
            if (
                entry.header
                and
                entry.codec.encodable(value)
            ):
                return entry

        return None

    def find_decodable(
        self,
        header: str,
    ) -> CodecEntry|None:
        '''
        Return the first entry whose codec can decode payloads
        prefixed by `header`, or `None`.

        '''
        # NOTE, no header-presence check here (unlike encoding) since
        # the header has already been read from the wire.
        for entry in self.entries:
            if entry.codec.decodable(header):
                return entry

        return None

    def encodable(
        self,
        value: Any,
    ) -> bool:
        return self.find_encodable(value) is not None

    def encode(
        self,
        output: BinaryIO,
        value: Any,

        report: DispatchReport|None = None,

    ) -> None:
        '''
        Write the header of the first codec able to encode `value`
        followed by that codec's encoding of it.

        Raises `NoCodecAvailable` (with nothing written) when no
        registered codec accepts the value.

        '''
        entry: CodecEntry|None = self.find_encodable(value)
        if entry is None:
            raise NoCodecAvailable(
                list(self.keys),
                value=value,
            )

        log.runtime(
            f'Dispatching encode to codec {entry.key!r}\n'
            f'|_header: {entry.header!r}\n'
            f'|_type: {type(value)}\n'
        )
        _report_dispatch('encode', entry, report)
        encode_with_header(
            entry.codec,
            output,
            value,
        )

    def decodable(
        self,
        header: str,
    ) -> bool:
        return self.find_decodable(header) is not None

    def decode(
        self,
        input: BinaryIO,

        report: DispatchReport|None = None,

    ) -> Any:
        '''
        Read one header from `input` and decode the remaining payload
        with the first codec which accepts that header.

        Raises `NoCodecAvailable` when no registered codec does.

        '''
        header: str = read_header(input)
        entry: CodecEntry|None = self.find_decodable(header)
        if entry is None:
            raise NoCodecAvailable(
                list(self.keys),
                header=header,
                op='decode',
            )

        log.runtime(
            f'Dispatching decode to codec {entry.key!r}\n'
            f'|_header: {header!r}\n'
        )
        _report_dispatch('decode', entry, report)
        return entry.codec.decode(input)


def mk_mux_codec(
    *codecs: Hashable|Codec,
) -> MuxCodec:
    '''
    Create a new multiplexing codec from a flat, alternating sequence
    of keys and codecs,

        mk_mux_codec(
            'text', TextCodec(),
            'bin', BinCodec(),
        )

    Argument order is kept as the dispatch priority.

    '''
    if not codecs:
        raise InvalidConfiguration(
            '`mk_mux_codec()` requires at least one codec\n',
        )

    if len(codecs) % 2:
        raise InvalidConfiguration(
            '`mk_mux_codec()` must be given an even number of arguments\n'
            f'|_got {len(codecs)}: {codecs!r}\n',
            count=len(codecs),
        )

    return MuxCodec.from_pairs(
        zip(
            codecs[::2],
            codecs[1::2],
        )
    )


def select_codec(
    mux: MuxCodec,
    key: Hashable,
) -> HeaderCodec:
    '''
    Pull one sub-codec out of a mux as a stand-alone codec which
    writes and expects its own header; it encodes and decodes exactly
    as the mux would, but only for that sub-codec.

    '''
    try:
        codec: Codec = mux[key]
    except KeyError:
        raise CodecNotFound(
            key=key,
            codecs=list(mux.keys),
        ) from None

    return wrap_header(codec)


def mk_default_mux() -> MuxCodec:
    '''
    A mux over the built-in codecs in priority order: UTF-8 text,
    raw binary, then `msgpack` for (most) remaining builtin types.

    '''
    from ._bin import BinCodec
    from ._msgspec import mk_msgpack_codec
    from ._text import TextCodec

    return mk_mux_codec(
        'text', TextCodec(),
        'bin', BinCodec(),
        'msgpack', mk_msgpack_codec(),
    )
