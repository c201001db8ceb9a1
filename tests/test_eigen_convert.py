import numpy as np
import pytest

from balsa.eigen_convert import (
    DYNAMIC,
    container_size,
    eigen2span,
    hstack,
    hstack_iter,
    stl2eigen,
    vstack,
    vstack_iter,
)


def test_stl2eigen_container_of_pairs():
    a = [[i, i] for i in range(10)]
    assert container_size(a) == DYNAMIC
    b = stl2eigen(a)
    assert b.shape[0] == 2
    assert b.shape[1] == len(a)
    for j in range(b.shape[0]):
        for k in range(b.shape[1]):
            assert a[k][j] == b[j, k]


def test_container_size_of_tuple():
    assert container_size((1, 2, 3)) == 3


def test_stl2eigen_scalars_make_vector():
    v = stl2eigen([1.5, 2.5, 3.5])
    assert v.shape == (3,)
    assert v.tolist() == [1.5, 2.5, 3.5]


def test_stl2eigen_array_passes_through():
    a = np.arange(6).reshape(2, 3)
    assert stl2eigen(a) is a


def test_stl2eigen_ragged_raises():
    with pytest.raises(ValueError):
        stl2eigen([[1, 2], [3]])


def test_stl2eigen_empty():
    assert stl2eigen([]).size == 0


def test_eigen2span():
    A = np.array([0.0, 1.0, 2.0, 3.0])
    B = np.array([4.0, 5.0, 6.0, 7.0])
    a = eigen2span(A)
    b = eigen2span(B)
    C = B.copy()
    C.setflags(write=False)
    c = eigen2span(C)

    assert a.size == 4
    assert b.size == 4
    for x, y, sa, sb, sc in zip(A, B, a, b, c):
        assert x == sa
        assert y == sb
        assert sb == sa + 4
        assert sc == sb
    assert not c.flags.writeable


def test_eigen2span_is_view_in_column_order():
    M = np.asfortranarray(np.array([[1, 2], [3, 4]]))
    s = eigen2span(M)
    assert s.tolist() == [1, 3, 2, 4]
    s[0] = 10
    assert M[0, 0] == 10


def test_eigen2span_non_contiguous_raises():
    M = np.arange(16).reshape(4, 4)[::2, ::2]
    with pytest.raises(ValueError):
        eigen2span(M)


def test_vstack_pads_with_zeros():
    a = np.array([[1, 2], [3, 4]])
    b = np.array([[5, 6, 7]])
    r = vstack(a, b)
    assert r.tolist() == [[1, 2, 0], [3, 4, 0], [5, 6, 7]]
    assert r.dtype == a.dtype


def test_hstack_pads_with_zeros():
    a = np.array([[1.0], [2.0]])
    b = np.array([[3.0, 4.0]])
    r = hstack(a, b)
    assert r.tolist() == [[1.0, 3.0, 4.0], [2.0, 0.0, 0.0]]


def test_vstack_vectors_are_columns():
    r = vstack(np.array([1, 2]), np.array([3]))
    assert r.tolist() == [[1], [2], [3]]


def test_vstack_requires_argument():
    with pytest.raises(ValueError):
        vstack()


def test_vstack_iter_skips_empty():
    parts = [np.zeros((0, 3)), np.array([[1, 2, 3]]), np.array([[4, 5, 6]])]
    r = vstack_iter(parts)
    assert r.tolist() == [[1, 2, 3], [4, 5, 6]]


def test_hstack_iter_skips_empty():
    parts = [np.array([[1], [2]]), np.zeros((2, 0), dtype=int), np.array([[3], [4]])]
    r = hstack_iter(iter(parts))
    assert r.tolist() == [[1, 3], [2, 4]]


def test_stack_iter_all_empty_gives_empty():
    assert vstack_iter([]).shape == (0, 0)
    assert hstack_iter([np.zeros((0, 2))]).shape == (0, 0)