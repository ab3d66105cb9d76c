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
Log like a multiplexer!

"""
from collections.abc import Mapping
import sys
import logging
from logging import (
    LoggerAdapter,
    Logger,
    StreamHandler,
)

import colorlog  # type: ignore
import trio


_proj_name: str = 'muxcodec'

# Super sexy formatting thanks to ``colorlog``.
# (NOTE: we use the '{' format style)
# Here, `thin_white` is just the layperson's gray.
LOG_FORMAT = (
    "{log_color}{asctime}{reset}"
    " {bold_white}{thin_white}({reset}"
    "{thin_white}{process}, {threadName}, {task}){reset}{bold_white}{thin_white})"
    " {reset}{log_color}[{reset}{bold_log_color}{levelname}{reset}{log_color}]"
    " {log_color}{name}"
    " {thin_white}{filename}{log_color}:{reset}{thin_white}{lineno}{log_color}"
    " {reset}{bold_white}{thin_white}{message}"
)

DATE_FORMAT = '%b %d %H:%M:%S'

# FYI, ERROR is 40
CUSTOM_LEVELS: dict[str, int] = {
    'TRANSPORT': 5,
    'RUNTIME': 15,
}
STD_PALETTE = {
    'CRITICAL': 'red',
    'ERROR': 'red',
    'WARNING': 'yellow',
    'INFO': 'green',
    'RUNTIME': 'white',
    'DEBUG': 'white',
    'TRANSPORT': 'cyan',
}

BOLD_PALETTE = {
    'bold': {
        level: f"bold_{color}" for level, color in STD_PALETTE.items()}
}


def at_least_level(
    log: Logger|LoggerAdapter,
    level: int|str,
) -> bool:
    '''
    Predicate to test if a given level is active.

    '''
    if isinstance(level, str):
        level: int = (
            CUSTOM_LEVELS.get(level.upper())
            or
            logging.getLevelName(level.upper())
        )

    return log.getEffectiveLevel() <= level


class StackLevelAdapter(LoggerAdapter):
    '''
    A (software) stack oriented logger "adapter".

    '''
    def at_least_level(
        self,
        level: str,
    ) -> bool:
        return at_least_level(
            log=self,
            level=level,
        )

    def transport(
        self,
        msg: str,
    ) -> None:
        '''
        Wire level IO; header framing reads and writes.

        '''
        return self.log(5, msg)

    def runtime(
        self,
        msg: str,
    ) -> None:
        '''
        Codec selection and dispatch decisions.

        '''
        return self.log(15, msg)

    def log(
        self,
        level,
        msg,
        *args,
        **kwargs,
    ):
        '''
        Delegate a log call to the underlying logger, after adding
        contextual information from this adapter instance.

        NOTE: all custom level methods (above) delegate to this!

        '''
        if self.isEnabledFor(level):
            stacklevel: int = 3
            if (
                level in CUSTOM_LEVELS.values()
            ):
                stacklevel: int = 4

            self._log(
                level=level,
                msg=msg,
                args=args,
                stacklevel=stacklevel,
                **kwargs,
            )

    # LOL, the stdlib doesn't allow passing through ``stacklevel``..
    def _log(
        self,
        level,
        msg,
        args,
        exc_info=None,
        extra=None,
        stack_info=False,

        # XXX: bit we added to show fileinfo from actual caller.
        # - this level
        # - then ``.log()``
        # - then finally the caller's level..
        stacklevel=4,
    ):
        '''
        Low-level log implementation, proxied to allow nested logger adapters.

        '''
        return self.logger._log(
            level,
            msg,
            args,
            exc_info=exc_info,
            extra=self.extra,
            stack_info=stack_info,
            stacklevel=stacklevel,
        )


def pformat_task_uid(
    id_part: str = 'tail'
) -> str:
    '''
    Return `str`-ified unique for the running `trio.Task` via a combo
    of its `.name: str` and `id()` truncated output.

    Raises `RuntimeError` when called outside `trio.run()`.

    '''
    task: trio.lowlevel.Task = trio.lowlevel.current_task()
    tid: str = str(id(task))
    if id_part == 'tail':
        tid_part: str = tid[-6:]
    else:
        tid_part: str = tid[:6]

    return f'{task.name}[{tid_part}]'


_conc_name_getters = {
    'task': pformat_task_uid,
    'task_name': lambda: trio.lowlevel.current_task().name,
}


class TaskContextInfo(Mapping):
    '''
    Dynamic lookup for the local (`trio`) task names.

    NOTE, thread and process names are already standard `LogRecord`
    fields.

    '''
    _context_keys = (
        'task',
        'task_name',
    )

    def __len__(self):
        return len(self._context_keys)

    def __iter__(self):
        return iter(self._context_keys)

    def __getitem__(self, key: str) -> str:
        try:
            return _conc_name_getters[key]()
        except RuntimeError:
            # not running inside `trio.run()`
            return f'no {key} context'


def get_logger(
    name: str|None = None,
    _root_name: str = _proj_name,
    logger: Logger|None = None,

) -> StackLevelAdapter:
    '''
    Return the `muxcodec`-library root logger or a sub-logger for
    `name` if provided.

    Passing `name=__name__` from a sub-module never duplicates the
    root package name nor includes the leaf module name (since the
    `{filename}` header field already shows it).

    '''
    log: Logger
    log = rlog = logger or logging.getLogger(_root_name)

    if (
        name != _root_name
        and
        name
    ):
        # ex. muxcodec.codecs._mux
        # -> rname='muxcodec', _, sub_name='codecs._mux'
        rname, _, sub_name = name.partition('.')

        # ex. codecs._mux
        # -> subpkg_path='codecs', _, leaf_mod='_mux'
        subpkg_path, _, leaf_mod = sub_name.rpartition('.')

        if rname == _root_name:
            sub_name = subpkg_path
        else:
            # foreign pkg, keep the full path under our root
            sub_name = name

        if not sub_name:
            log = rlog
        else:
            log = rlog.getChild(sub_name)

        log.level = rlog.level

    # add our task aware adapter which will dynamically look up
    # the thread and task names at each log emit
    logger = StackLevelAdapter(
        log,
        TaskContextInfo(),
    )

    # additional levels
    for name, val in CUSTOM_LEVELS.items():
        logging.addLevelName(val, name)

        # ensure customs levels exist as methods
        assert getattr(logger, name.lower()), f'Logger does not define {name}'

    return logger


def get_console_log(
    level: str|int|None = None,
    logger: Logger|StackLevelAdapter|None = None,
    **kwargs,

) -> StackLevelAdapter:
    '''
    Get a `muxcodec`-style logging instance: a `Logger` wrapped in
    a `StackLevelAdapter` which injects (thread, task) fields and
    enables a `StreamHandler` that writes on stderr using `colorlog`
    formatting.

    '''
    if (
        logger
        and
        isinstance(logger, StackLevelAdapter)
    ):
        log = logger

    else:
        log: StackLevelAdapter = get_logger(
            logger=logger,
            **kwargs
        )

    logger: Logger = log.logger
    if not level:
        return log

    log.setLevel(
        level.upper()
        if not isinstance(level, int)
        else level
    )

    if not any(
        handler.stream == sys.stderr  # type: ignore
        for handler in logger.handlers if getattr(
            handler,
            'stream',
            None,
        )
    ):
        handler = StreamHandler()
        formatter = colorlog.ColoredFormatter(
            fmt=LOG_FORMAT,
            datefmt=DATE_FORMAT,
            log_colors=STD_PALETTE,
            secondary_log_colors=BOLD_PALETTE,
            style='{',
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return log


# global module logger for muxcodec itself
log: StackLevelAdapter = get_logger(_proj_name)
