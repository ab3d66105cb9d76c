'''
Dispatch reporting: explicit report cells and task-scoped
`open_dispatch_report()` blocks.

'''
import io

import pytest
import trio

from muxcodec import (
    DispatchReport,
    MuxCodec,
    current_dispatch_report,
    encode_to_bytes,
    open_dispatch_report,
)


def test_unset_by_default(
    mux: MuxCodec,
):
    assert current_dispatch_report() is None

    # dispatching without any report open is fine
    encode_to_bytes(mux, 'no report')
    assert current_dispatch_report() is None


def test_scope_is_torn_down(
    mux: MuxCodec,
):
    with open_dispatch_report() as report:
        assert current_dispatch_report() is report
        encode_to_bytes(mux, 'in scope')

    assert current_dispatch_report() is None
    encode_to_bytes(mux, b'out of scope')

    # no further writes after the scope exits
    assert report.key == 'text'


def test_scope_torn_down_on_error(
    mux: MuxCodec,
):
    with pytest.raises(RuntimeError):
        with open_dispatch_report():
            raise RuntimeError('boom')

    assert current_dispatch_report() is None


def test_nested_scopes_restore_outer(
    mux: MuxCodec,
):
    with open_dispatch_report() as outer:
        encode_to_bytes(mux, 'outer')

        with open_dispatch_report() as inner:
            assert current_dispatch_report() is inner
            encode_to_bytes(mux, b'inner')

        assert current_dispatch_report() is outer
        assert inner.key == 'bin'

        # only the innermost scope is written
        assert outer.key == 'text'


def test_caller_supplied_cell(
    mux: MuxCodec,
):
    cell = DispatchReport()
    with open_dispatch_report(cell) as report:
        assert report is cell
        encode_to_bytes(mux, b'bytes')

    assert cell.to_dict() == {
        'key': 'bin',
        'codec': mux['bin'],
        'op': 'encode',
    }


def test_explicit_and_scoped_both_recorded(
    mux: MuxCodec,
):
    explicit = DispatchReport()
    with open_dispatch_report() as scoped:
        mux.encode(io.BytesIO(), 'both', report=explicit)

    assert explicit.key == scoped.key == 'text'


def test_failed_dispatch_leaves_report(
    mux: MuxCodec,
):
    with open_dispatch_report() as report:
        encode_to_bytes(mux, 'ok')
        with pytest.raises(LookupError):
            encode_to_bytes(mux, 1.5)

    assert report.key == 'text'


def test_reports_are_task_local(
    mux: MuxCodec,
):
    '''
    Concurrent tasks each opening their own report only ever see
    their own dispatches, even when interleaved.

    '''
    results: dict[str, list] = {}

    async def encode_many(
        name: str,
        values: list,
    ) -> None:
        keys: list = []
        with open_dispatch_report() as report:
            for value in values:
                encode_to_bytes(mux, value)
                # let the other task dispatch in between
                await trio.sleep(0)
                keys.append(report.key)

        results[name] = keys

    async def main():
        async with trio.open_nursery() as tn:
            tn.start_soon(encode_many, 'texter', ['a', 'b', 'c'])
            tn.start_soon(encode_many, 'binner', [b'a', b'b', b'c'])

        # the parent task never opened a report
        assert current_dispatch_report() is None

    trio.run(main)
    assert results == {
        'texter': ['text']*3,
        'binner': ['bin']*3,
    }


def test_child_tasks_share_parent_scope(
    mux: MuxCodec,
):
    '''
    Tasks spawned inside an open report scope write to the parent's
    cell unless they open a scope of their own.

    '''
    async def dispatch(value) -> None:
        encode_to_bytes(mux, value)

    async def dispatch_isolated(
        value,
        results: list,
    ) -> None:
        with open_dispatch_report() as own:
            encode_to_bytes(mux, value)

        results.append(own.key)

    async def main():
        with open_dispatch_report() as parent:
            async with trio.open_nursery() as tn:
                tn.start_soon(dispatch, b'from child')

            assert parent.key == 'bin'

            isolated: list = []
            async with trio.open_nursery() as tn:
                tn.start_soon(dispatch_isolated, 'own scope', isolated)

            assert isolated == ['text']
            # the isolated child never touched the parent's cell
            assert parent.key == 'bin'

        # spawned after the scope closed, no report is inherited
        seen: list = []

        async def check_unset() -> None:
            seen.append(current_dispatch_report())

        async with trio.open_nursery() as tn:
            tn.start_soon(check_unset)

        assert seen == [None]

    trio.run(main)
