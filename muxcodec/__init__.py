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

"""
muxcodec: self-describing, header prefixed serialization with
automatic codec multiplexing.

"""
from ._exceptions import (
    CodecError as CodecError,
    NoCodecAvailable as NoCodecAvailable,
    CodecNotFound as CodecNotFound,
    InvalidConfiguration as InvalidConfiguration,
    HeaderError as HeaderError,
    HeaderMismatch as HeaderMismatch,
)
from ._header import (
    MAX_HEADER_LENGTH as MAX_HEADER_LENGTH,
    encode_header as encode_header,
    read_header as read_header,
    write_header as write_header,
)
from ._core import (
    Codec as Codec,
    Decoder as Decoder,
    Encoder as Encoder,
    decode_from_bytes as decode_from_bytes,
    encode_to_bytes as encode_to_bytes,
    encode_with_header as encode_with_header,
    write_framed as write_framed,
)
from ._state import (
    current_dispatch_report as current_dispatch_report,
)
from .codecs import (
    BinCodec as BinCodec,
    CodecEntry as CodecEntry,
    DispatchReport as DispatchReport,
    HeaderCodec as HeaderCodec,
    MsgspecCodec as MsgspecCodec,
    MuxCodec as MuxCodec,
    TextCodec as TextCodec,
    mk_default_mux as mk_default_mux,
    mk_json_codec as mk_json_codec,
    mk_msgpack_codec as mk_msgpack_codec,
    mk_msgspec_codec as mk_msgspec_codec,
    mk_mux_codec as mk_mux_codec,
    open_dispatch_report as open_dispatch_report,
    select_codec as select_codec,
    wrap_header as wrap_header,
)
from . import log as log
