import pytest

from inkstore.bitpack import BitPack, InvalidBitPackIndex


def test_validate_index():
    assert BitPack.validate_index(0) == 0
    assert BitPack.validate_index(1) == 1
    assert BitPack.validate_index(BitPack.BITS - 1) == BitPack.BITS - 1
    with pytest.raises(InvalidBitPackIndex):
        BitPack.validate_index(BitPack.BITS)


def test_get():
    bp = BitPack(0x0001_0000)
    for n in range(BitPack.BITS):
        assert bp.get(n) == (n == 15)


def test_get_out_of_bounds():
    with pytest.raises(IndexError):
        BitPack(0x0).get(32)


def test_set():
    bp = BitPack(0x0)
    bp.set(15, True)
    assert bp == BitPack(0x0001_0000)
    bp.set(15, False)
    assert bp == BitPack(0x0)


def test_set_out_of_bounds():
    with pytest.raises(IndexError):
        BitPack(0x0).set(32, True)


def test_flip():
    bp = BitPack(0x0)
    bp.flip(15)
    assert bp == BitPack(0x0001_0000)
    bp.flip(15)
    assert bp == BitPack(0x0)


def test_flip_out_of_bounds():
    with pytest.raises(IndexError):
        BitPack(0x0).flip(32)


def test_first_set_position():
    assert BitPack(0x0).first_set_position() is None
    assert BitPack(0x0001_0000).first_set_position() == 15
    assert BitPack(0xFFFF_FFFF).first_set_position() == 0


def test_first_and_last_bits():
    bp = BitPack()
    bp.set(0, True)
    assert bp.bits == 0x8000_0000
    bp.set(31, True)
    assert bp.bits == 0x8000_0001
    assert bp.first_set_position() == 0


def test_value_out_of_range():
    with pytest.raises(ValueError):
        BitPack(1 << 32)