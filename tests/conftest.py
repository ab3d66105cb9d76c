"""
Top level of the testing suites!

"""
from __future__ import annotations
import io
from typing import (
    Any,
    BinaryIO,
)

import pytest
import muxcodec
from muxcodec import (
    BinCodec,
    MuxCodec,
    TextCodec,
    mk_mux_codec,
)


def pytest_addoption(
    parser: pytest.Parser,
):
    parser.addoption(
        "--ll",
        action="store",
        dest='loglevel',
        default='ERROR', help="logging level to set when testing"
    )


@pytest.fixture(scope='session', autouse=True)
def loglevel(request):
    level: str = request.config.option.loglevel
    log = muxcodec.log.get_logger()
    orig: int = log.logger.level
    muxcodec.log.get_console_log(level, logger=log)
    yield level
    log.logger.setLevel(orig)


class AnyCodec:
    '''
    A (catch-all) test codec which accepts every value and header
    and records what it was handed.

    '''
    def __init__(
        self,
        header: str|None = '/any',
        payload: bytes = b'any',
    ):
        self.header = header
        self.payload = payload
        self.encoded: list[Any] = []
        self.decoded: int = 0

    def encodable(self, value: Any) -> bool:
        return True

    def encode(self, output: BinaryIO, value: Any) -> None:
        self.encoded.append(value)
        output.write(self.payload)

    def decodable(self, header: str) -> bool:
        return True

    def decode(self, input: BinaryIO) -> Any:
        self.decoded += 1
        return input.read()


@pytest.fixture
def text_codec() -> TextCodec:
    return TextCodec()


@pytest.fixture
def bin_codec() -> BinCodec:
    return BinCodec()


@pytest.fixture
def mux(
    text_codec: TextCodec,
    bin_codec: BinCodec,
) -> MuxCodec:
    return mk_mux_codec(
        'text', text_codec,
        'bin', bin_codec,
    )


@pytest.fixture
def buf() -> io.BytesIO:
    return io.BytesIO()
