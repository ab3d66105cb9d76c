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
Built-in codecs and the multiplexing dispatcher.

'''
from ._mux import (
    CodecEntry as CodecEntry,
    DispatchReport as DispatchReport,
    MuxCodec as MuxCodec,
    mk_default_mux as mk_default_mux,
    mk_mux_codec as mk_mux_codec,
    open_dispatch_report as open_dispatch_report,
    select_codec as select_codec,
)
from ._wrap import (
    HeaderCodec as HeaderCodec,
    wrap_header as wrap_header,
)
from ._text import (
    TextCodec as TextCodec,
)
from ._bin import (
    BinCodec as BinCodec,
)
from ._msgspec import (
    MsgspecCodec as MsgspecCodec,
    mk_msgspec_codec as mk_msgspec_codec,
    mk_msgpack_codec as mk_msgpack_codec,
    mk_json_codec as mk_json_codec,
)
