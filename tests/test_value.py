import operator

import pytest

from inkstore.value import Flush, Value

BINARY = [
    (operator.add, 47),
    (operator.sub, 37),
    (operator.mul, 210),
    (operator.floordiv, 8),
    (operator.mod, 2),
    (operator.and_, 0),
    (operator.or_, 47),
    (operator.xor, 47),
]

ASSIGN = [
    (operator.iadd, 55),
    (operator.isub, 29),
    (operator.imul, 546),
    (operator.ifloordiv, 3),
    (operator.imod, 3),
    (operator.iand, 8),
    (operator.ior, 47),
    (operator.ixor, 39),
]


@pytest.mark.parametrize("op, expected", BINARY)
def test_binary_ops(op, expected):
    val1 = Value(42)
    val2 = Value(5)
    val3 = Value(op(val1, val2))
    assert val1.get() == 42
    assert val2.get() == 5
    assert val3.get() == expected
    assert op(val1, 5) == expected
    assert op(val1, val2) == expected


@pytest.mark.parametrize("op, expected", ASSIGN)
def test_assign_ops(op, expected):
    val1 = Value(42)
    copy = Value(42)
    val2 = Value(13)
    val3 = Value(expected)
    val1 = op(val1, 13)
    assert val1.get() == expected
    assert val1 == val3
    copy = op(copy, val2)
    assert copy.get() == expected
    assert copy == val3
    assert val2.get() == 13


def test_neg():
    val1 = Value(42)
    val2 = Value(-42)
    assert -val1 == -42
    assert val2.get() == -42


def test_not():
    val1 = Value(42)
    assert ~val1 == -43


def test_shift():
    value = Value(10)
    result = Value(320)
    assert value << 5 == 320
    value <<= 5
    assert value == result
    assert value >> 5 == 10
    value >>= 3
    assert value.get() == 40


def test_truediv():
    value = Value(7)
    assert value / 2 == 3.5
    value /= Value(2)
    assert value.get() == 3.5


def test_eq_ord():
    val1 = Value(42)
    val2 = Value(42)
    val3 = Value(1337)
    assert val1 == val2
    assert val2 != val3
    assert not (val1 < val2)
    assert val2 < val3
    assert val1 < val3
    assert val1 <= val2
    assert val2 <= val3
    assert val1 <= val3
    assert val3 > val1
    assert val3 >= 1337
    assert val1 == 42


def test_index():
    val1 = Value([2, 3, 5, 7, 11, 13])
    assert [val1[i] for i in range(6)] == [2, 3, 5, 7, 11, 13]


def test_hash_and_str():
    assert hash(Value(42)) == hash(42)
    assert str(Value(42)) == "42"
    assert len({Value(1), Value(1), Value(2)}) == 2


def test_set_and_get():
    value = Value(1)
    value.set(99)
    assert value.get() == 99


def test_unset_get_raises():
    value = Value()
    with pytest.raises(LookupError):
        value.get()


def test_mutate_with_return_value():
    value = Value("Bengal")
    assert value.mutate_with(lambda s: s + " Shorthair") == "Bengal Shorthair"
    assert value.get() == "Bengal Shorthair"


def test_mutate_with_in_place():
    value = Value([1, 2])
    assert value.mutate_with(lambda lst: lst.append(3)) == [1, 2, 3]
    assert value.get() == [1, 2, 3]


def test_flush_writes_dirty_value_once():
    written = []
    value = Value(5, on_flush=written.append)
    assert value.dirty is True
    value.flush()
    assert written == [5]
    assert value.dirty is False
    value.flush()
    assert written == [5]
    value += 1
    value.flush()
    assert written == [5, 6]


def test_unset_value_is_clean():
    written = []
    value = Value(on_flush=written.append)
    value.flush()
    assert written == []
    assert value.dirty is False


def test_flush_is_abstract():
    with pytest.raises(TypeError):
        Flush()
    assert isinstance(Value(1), Flush)