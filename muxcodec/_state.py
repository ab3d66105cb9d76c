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
Per process (and per task) state

"""
from __future__ import annotations
from contextvars import (
    ContextVar,
)
from typing import (
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from .codecs._mux import DispatchReport


# NOTE, every `trio.Task` (and `asyncio.Task`) runs in a copy of its
# spawner's context taken at spawn time, so,
# - a report opened by a task is never seen by its siblings or by
#   tasks spawned before the report was opened,
# - tasks spawned *inside* an open report scope inherit a reference
#   to that same cell and their dispatches write to it too; such
#   a child must open its own scope to get an isolated report.
_ctxvar_DispatchReport: ContextVar[DispatchReport|None] = ContextVar(
    'mux_dispatch_report',
    default=None,
)


def current_dispatch_report() -> DispatchReport|None:
    '''
    Return the dispatch report cell opened by the current task (via
    `open_dispatch_report()`) or `None` when no scope is open.

    '''
    return _ctxvar_DispatchReport.get()
