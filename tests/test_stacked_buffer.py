import numpy as np
import pytest

from balsa.stacked_buffer import (
    StackedContiguousBuffer,
    container_of_containers_to_stacked_contiguous_buffer,
)

BUF = [[0, 1, 2, 3, 4], [5, 6, 7], [8, 9]]


def test_polygon_buffer_construction():
    ret = container_of_containers_to_stacked_contiguous_buffer(BUF)
    assert ret.offsets[0] == 0
    assert ret.offsets[1] == 5
    assert ret.offsets[2] == 8
    assert ret.offsets[3] == 10
    assert ret.span_count() == len(BUF)
    for j, expected in enumerate(BUF):
        span = ret.get_span(j)
        assert span.size == len(expected)
        assert span.tolist() == expected


def test_span_offsets():
    ret = container_of_containers_to_stacked_contiguous_buffer(BUF)
    assert ret.get_span_offsets(1).tolist() == [5, 8]


def test_iteration_matches_input():
    ret = container_of_containers_to_stacked_contiguous_buffer(BUF)
    assert [span.tolist() for span in ret] == BUF
    assert len(ret) == 3


def test_empty_container():
    ret = container_of_containers_to_stacked_contiguous_buffer([])
    assert ret.span_count() == 0
    assert ret.buffer.size == 0
    assert ret == StackedContiguousBuffer()


def test_empty_inner_spans():
    ret = container_of_containers_to_stacked_contiguous_buffer([[], [1], []])
    assert [span.tolist() for span in ret] == [[], [1], []]


def test_equality():
    a = container_of_containers_to_stacked_contiguous_buffer(BUF)
    b = container_of_containers_to_stacked_contiguous_buffer(iter([tuple(x) for x in BUF]))
    c = container_of_containers_to_stacked_contiguous_buffer([[0, 1], [2]])
    assert a == b
    assert not (a == c)


def test_index_out_of_range():
    ret = container_of_containers_to_stacked_contiguous_buffer(BUF)
    with pytest.raises(IndexError):
        ret.get_span(3)
    with pytest.raises(IndexError):
        ret.get_span(-1)


def test_empty_offsets_rejected():
    with pytest.raises(ValueError):
        StackedContiguousBuffer(buffer=np.zeros(0, dtype=int), offsets=np.zeros(0, dtype=int))