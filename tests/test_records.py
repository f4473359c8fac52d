import pytest

from treasurehunt.records import RECORD_SIZE, Treasure, iter_treasures


def _sample(tid="t1", user="alice", val=10):
    return Treasure(tid, user, 45.5, -73.25, "under_the_bridge", val)


def test_record_size_matches_struct_layout():
    assert RECORD_SIZE == 136
    assert len(_sample().pack()) == RECORD_SIZE


def test_pack_unpack_round_trip():
    t = _sample()
    assert Treasure.unpack(t.pack()) == t


def test_id_field_is_nul_padded():
    data = _sample(tid="t1").pack()
    assert data[:16] == b"t1" + b"\0" * 14


def test_too_long_id_rejected():
    with pytest.raises(ValueError):
        _sample(tid="x" * 16).pack()


def test_value_out_of_range_rejected():
    with pytest.raises(ValueError):
        _sample(val=2**40).pack()


def test_unpack_wrong_length():
    with pytest.raises(ValueError):
        Treasure.unpack(b"\0" * (RECORD_SIZE - 1))


def test_iter_treasures_in_order_ignoring_partial(tmp_path):
    items = [_sample("a"), _sample("b", "bob", 3)]
    path = tmp_path / "hunt"
    path.write_bytes(b"".join(t.pack() for t in items) + b"\x01\x02")
    assert list(iter_treasures(path)) == items


def test_iter_treasures_missing_file(tmp_path):
    with pytest.raises(OSError):
        list(iter_treasures(tmp_path / "nope"))