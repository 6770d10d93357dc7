import pytest
import torch

from ringfdtd import FieldStore


def test_allocation_zeroed_and_fixed_length():
    store = FieldStore(16)
    assert len(store) == 16
    assert store.E.shape == store.H.shape == (16,)
    assert torch.count_nonzero(store.E) == 0
    assert torch.count_nonzero(store.H) == 0


def test_neighbour_indices_wrap():
    store = FieldStore(4)
    assert store.next_index(3) == 0
    assert store.prev_index(0) == 3
    assert store.next_index(1) == 2
    assert store.prev_index(2) == 1


def test_get_and_update_wrap_modulo_n():
    store = FieldStore(5)
    store.update("E", 2, 1.5)
    store.update("E", 7, 0.5)     # 7 mod 5 == 2
    store.update("H", -1, -2.0)   # last cell
    assert store.get("E", 2) == pytest.approx(2.0)
    assert store.get("H", 4) == pytest.approx(-2.0)
    assert store.get("H", 9) == pytest.approx(-2.0)


def test_unknown_field():
    store = FieldStore(3)
    with pytest.raises(ValueError):
        store.get("B", 0)


def test_reset_keeps_buffers():
    store = FieldStore(8)
    e_ptr = store.E.data_ptr()
    store.update("E", 0, 3.0)
    store.update("H", 1, 4.0)
    assert store.energy() == pytest.approx(25.0)
    store.reset()
    assert store.energy() == 0.0
    assert store.E.data_ptr() == e_ptr


def test_means_and_finiteness():
    store = FieldStore(4)
    store.update("E", 0, 4.0)
    assert store.means() == pytest.approx((1.0, 0.0))
    assert store.is_finite()
    store.update("H", 2, float('nan'))
    assert not store.is_finite()
