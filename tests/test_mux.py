'''
Multiplexing codec dispatch: ordered first-match selection, error
policy and the text/bin round trip scenarios.

'''
import io
from typing import Any

import pytest

from conftest import AnyCodec
from muxcodec import (
    BinCodec,
    DispatchReport,
    InvalidConfiguration,
    MuxCodec,
    NoCodecAvailable,
    TextCodec,
    decode_from_bytes,
    encode_to_bytes,
    mk_mux_codec,
    open_dispatch_report,
)


def test_text_scenario(
    mux: MuxCodec,
    buf: io.BytesIO,
):
    '''
    Encoding a `str` selects the text codec and frames its header
    ahead of the UTF-8 payload; decoding reads it back.

    '''
    with open_dispatch_report() as report:
        mux.encode(buf, 'abc 123!')
        assert report.key == 'text'
        assert report.op == 'encode'

        wire: bytes = buf.getvalue()
        assert wire == (
            bytes([len('/text/UTF-8\n')])
            + b'/text/UTF-8\n'
            + 'abc 123!'.encode('utf-8')
        )

        report.key = None
        assert mux.decode(io.BytesIO(wire)) == 'abc 123!'
        assert report.key == 'text'
        assert report.op == 'decode'


def test_bin_scenario(
    mux: MuxCodec,
    buf: io.BytesIO,
):
    data = bytes(range(256))
    with open_dispatch_report() as report:
        mux.encode(buf, data)
        assert report.key == 'bin'
        assert buf.getvalue().startswith(b'\x05/bin\n')

        buf.seek(0)
        report.key = None
        assert mux.decode(buf) == data
        assert report.key == 'bin'


def test_no_codec_for_value(
    mux: MuxCodec,
    buf: io.BytesIO,
):
    value = {'neither': 'text nor bin'}
    assert not mux.encodable(value)

    with pytest.raises(NoCodecAvailable) as excinfo:
        mux.encode(buf, value)

    err = excinfo.value
    assert err.codecs == ['text', 'bin']
    assert err.value is value
    assert err.msgdata == {
        'codecs': ['text', 'bin'],
        'value': value,
    }
    assert repr(value) in str(err)

    # nothing was written
    assert buf.getvalue() == b''


def test_no_codec_for_header(
    mux: MuxCodec,
    buf: io.BytesIO,
):
    buf.write(b'\x09/msgpack\n\x90')
    buf.seek(0)
    assert not mux.decodable('/msgpack')

    with pytest.raises(NoCodecAvailable) as excinfo:
        mux.decode(buf)

    err = excinfo.value
    assert err.header == '/msgpack'
    assert err.codecs == ['text', 'bin']
    assert err.op == 'decode'
    assert isinstance(err, LookupError)


def test_first_registered_match_wins(
    buf: io.BytesIO,
):
    '''
    When several codecs accept a value, only the first registered is
    ever used; a catch-all must come last to act as a fallback.

    '''
    first = AnyCodec(header='/first', payload=b'1')
    second = AnyCodec(header='/second', payload=b'2')
    mux = mk_mux_codec(
        'first', first,
        'second', second,
    )
    for value in ('text', b'bin', 1, None, object()):
        report = DispatchReport()
        mux.encode(buf, value, report=report)
        assert report.key == 'first'

    assert len(first.encoded) == 5
    assert not second.encoded

    # catch-all registered last only gets what the others reject
    fallback = AnyCodec(header='/fallback')
    mux = mk_mux_codec(
        'text', TextCodec(),
        'fallback', fallback,
    )
    report = DispatchReport()
    mux.encode(io.BytesIO(), 'txt', report=report)
    assert report.key == 'text'
    mux.encode(io.BytesIO(), 42, report=report)
    assert report.key == 'fallback'
    assert fallback.encoded == [42]


def test_headerless_codecs_never_encode():
    headerless = AnyCodec(header=None)
    mux = mk_mux_codec(
        'headerless', headerless,
        'bin', BinCodec(),
    )
    assert not mux.encodable('text')
    assert mux.encodable(b'bytes')

    report = DispatchReport()
    mux.encode(io.BytesIO(), b'bytes', report=report)
    assert report.key == 'bin'
    assert not headerless.encoded

    with pytest.raises(NoCodecAvailable):
        mux.encode(io.BytesIO(), 'text')


def test_decode_has_no_header_guard():
    '''
    Decoding only consults `.decodable()`, a codec with an empty
    header is still selectable for a header read off the wire.

    '''
    headerless = AnyCodec(header='')
    mux = mk_mux_codec('headerless', headerless)
    assert mux.decodable('/whatever')

    report = DispatchReport()
    data: bytes = b'\x0a/whatever\npayload'
    assert mux.decode(io.BytesIO(data), report=report) == b'payload'
    assert report.key == 'headerless'
    assert headerless.decoded == 1


def test_decode_delegates_without_rereading_header(
    mux: MuxCodec,
):
    wire: bytes = encode_to_bytes(mux, 'hello')
    assert decode_from_bytes(mux, wire) == 'hello'

    # a sub-codec reading the stream directly sees only payload
    buf = io.BytesIO(wire)
    mux.decode(buf)
    assert buf.read() == b''


@pytest.mark.parametrize(
    'value',
    [
        '',
        'abc 123!',
        'ünïcødé ✓',
        b'',
        b'\x00\xff\n',
        bytearray(b'mutable'),
    ],
    ids=[
        'empty_str',
        'ascii',
        'unicode',
        'empty_bytes',
        'binary',
        'bytearray',
    ],
)
def test_round_trip_reports_same_key(
    mux: MuxCodec,
    value: Any,
):
    with open_dispatch_report() as report:
        wire: bytes = encode_to_bytes(mux, value)
        enc_key = report.key

        report.key = None
        assert decode_from_bytes(mux, wire) == value
        assert report.key == enc_key

    assert enc_key == (
        'text' if isinstance(value, str) else 'bin'
    )


def test_predicates_are_pure(
    mux: MuxCodec,
):
    with open_dispatch_report() as report:
        assert mux.encodable('txt')
        assert mux.encodable(b'bin')
        assert mux.decodable('/text/UTF-8')
        assert mux.decodable('/bin')
        assert not mux.decodable('/text/latin-1')

    assert report.key is None


@pytest.mark.parametrize(
    'args',
    [
        (),
        ('text',),
        ('text', TextCodec(), 'bin'),
    ],
    ids=['empty', 'lone_key', 'odd_count'],
)
def test_flat_construction_errors(args: tuple):
    with pytest.raises(InvalidConfiguration):
        mk_mux_codec(*args)


def test_paired_construction():
    text, bn = TextCodec(), BinCodec()
    mux = MuxCodec.from_pairs([
        ('bin', bn),
        ('text', text),
    ])
    assert mux.keys == ('bin', 'text')
    assert list(mux.codecs.items()) == [
        ('bin', bn),
        ('text', text),
    ]

    # mappings keep insertion order
    mux = MuxCodec.from_pairs({'text': text, 'bin': bn})
    assert mux.keys == ('text', 'bin')

    with pytest.raises(InvalidConfiguration):
        MuxCodec.from_pairs([])

    with pytest.raises(InvalidConfiguration):
        MuxCodec.from_pairs({})


@pytest.mark.parametrize(
    'pairs, err_field',
    [
        ([('text', TextCodec()), ('text', BinCodec())], 'key'),
        ([(['unhashable'], TextCodec())], 'key'),
        ([('text', TextCodec(), 'extra')], 'pair'),
        ([('nope', object())], 'missing'),
    ],
    ids=[
        'duplicate_key',
        'unhashable_key',
        'malformed_pair',
        'not_a_codec',
    ],
)
def test_invalid_registries(
    pairs: list,
    err_field: str,
):
    with pytest.raises(InvalidConfiguration) as excinfo:
        MuxCodec.from_pairs(pairs)

    assert err_field in excinfo.value.msgdata


def test_single_codec_mux():
    mux = mk_mux_codec('text', TextCodec())
    assert len(mux) == 1
    assert 'text' in mux
    assert 'bin' not in mux

    for value in ('a', 'bb', 'ccc'):
        assert decode_from_bytes(
            mux,
            encode_to_bytes(mux, value),
        ) == value

    with pytest.raises(NoCodecAvailable) as excinfo:
        encode_to_bytes(mux, b'bytes')

    assert excinfo.value.codecs == ['text']


def test_mux_is_immutable(
    mux: MuxCodec,
):
    with pytest.raises(AttributeError):
        mux.entries = ()

    assert mux.header is None
    assert mux['text'] == TextCodec()
    with pytest.raises(KeyError):
        mux['nope']


def test_mux_logs_dispatch(
    mux: MuxCodec,
    caplog: pytest.LogCaptureFixture,
):
    caplog.set_level('RUNTIME', logger='muxcodec.codecs')
    encode_to_bytes(mux, 'logged')
    assert any(
        "Dispatching encode to codec 'text'" in rec.getMessage()
        for rec in caplog.records
    )
