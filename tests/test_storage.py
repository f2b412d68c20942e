import pytest

from splakit.config import SplaError, Status, VectorFormat
from splakit.storage import DecorationStorage, StorageManager

CAP = len(VectorFormat)
DOK = VectorFormat.CpuDokVec
DENSE = VectorFormat.CpuDenseVec
COO = VectorFormat.CpuCooVec


@pytest.fixture
def log():
    return []


@pytest.fixture
def manager(log):
    m = StorageManager(CAP)
    m.register_constructor(DOK, lambda s: s.__setitem__(DOK, {}))
    m.register_constructor(DENSE, lambda s: s.__setitem__(DENSE, []))
    m.register_constructor(COO, lambda s: s.__setitem__(COO, []))

    def clear_dok(s):
        log.append("validator dok")
        s[DOK].clear()

    def clear_dense(s):
        log.append("validator dense")
        s[DENSE][:] = [0] * s.n_rows

    m.register_validator(DOK, clear_dok)
    m.register_validator(DENSE, clear_dense)

    def dok_to_coo(s):
        log.append("dok->coo")
        s[COO][:] = sorted(s[DOK].items())

    def dok_to_dense(s):
        log.append("dok->dense")
        s[DENSE][:] = [s[DOK].get(i, 0) for i in range(s.n_rows)]

    def coo_to_dok(s):
        log.append("coo->dok")
        s[DOK].clear()
        s[DOK].update(s[COO])

    def dense_to_dok(s):
        log.append("dense->dok")
        s[DOK].clear()
        s[DOK].update({i: v for i, v in enumerate(s[DENSE]) if v != 0})

    m.register_converter(DOK, COO, dok_to_coo)
    m.register_converter(DOK, DENSE, dok_to_dense)
    m.register_converter(COO, DOK, coo_to_dok)
    m.register_converter(DENSE, DOK, dense_to_dok)
    return m


def storage_with_dok(values, n_rows=3):
    s = DecorationStorage(CAP, n_rows)
    s[DOK] = dict(values)
    s.validate(DOK)
    return s


def test_storage_slots_and_flags():
    s = DecorationStorage(CAP)
    assert s[DENSE] is None
    assert not s.is_valid_any()
    s[DENSE] = [1, 2]
    s.validate(DENSE)
    assert s.is_valid(DENSE)
    assert s.valid_formats() == [int(DENSE)]
    s.invalidate()
    assert not s.is_valid_any()
    assert s[DENSE] == [1, 2]


def test_storage_rejects_out_of_range_format():
    s = DecorationStorage(2)
    with pytest.raises(SplaError) as info:
        s.__getitem__(5)
    assert info.value.status == Status.InvalidArgument


def test_validate_rw_converts_directly(manager, log):
    s = storage_with_dok({1: 5})
    manager.validate_rw(DENSE, s)
    assert s[DENSE] == [0, 5, 0]
    assert s.is_valid(DENSE) and s.is_valid(DOK)
    assert log == ["dok->dense"]


def test_validate_rw_follows_multi_step_path(manager, log):
    s = DecorationStorage(CAP, 4)
    s[DENSE] = [0, 7, 0, 9]
    s.validate(DENSE)
    manager.validate_rw(COO, s)
    assert log == ["dense->dok", "dok->coo"]
    assert s[COO] == [(1, 7), (3, 9)]
    assert s.valid_formats() == sorted(int(f) for f in (DOK, DENSE, COO))


def test_validate_rw_noop_when_valid(manager, log):
    s = storage_with_dok({0: 1})
    manager.validate_rw(DOK, s)
    assert log == []
    assert s[DOK] == {0: 1}


def test_validate_rw_on_empty_storage_resets(manager, log):
    s = DecorationStorage(CAP, 2)
    manager.validate_rw(DENSE, s)
    assert s[DENSE] == [0, 0]
    assert log == ["validator dense"]
    assert s.valid_formats() == [int(DENSE)]


def test_validate_rwd_leaves_only_target_valid(manager):
    s = storage_with_dok({2: 3})
    manager.validate_rwd(DENSE, s)
    assert s.valid_formats() == [int(DENSE)]
    assert s[DENSE] == [0, 0, 3]


def test_validate_wd_discards_other_formats(manager, log):
    s = storage_with_dok({0: 4})
    s[DENSE] = [4, 0, 0]
    s.validate(DENSE)
    manager.validate_wd(DOK, s)
    assert s[DOK] == {}
    assert s.valid_formats() == [int(DOK)]
    assert log == ["validator dok"]


def test_validate_ctor_only_when_missing(manager):
    s = DecorationStorage(CAP)
    manager.validate_ctor(COO, s)
    slot = s[COO]
    assert slot == []
    manager.validate_ctor(COO, s)
    assert s[COO] is slot
    assert not s.is_valid_any()


def test_unreachable_format_raises(manager):
    s = storage_with_dok({0: 1})
    with pytest.raises(SplaError) as info:
        manager.validate_rw(VectorFormat.CLDenseVec, s)
    assert info.value.status == Status.InvalidState


def test_missing_constructor_raises():
    m = StorageManager(CAP)
    with pytest.raises(SplaError) as info:
        m.validate_ctor(DOK, DecorationStorage(CAP))
    assert info.value.status == Status.InvalidState


def test_capacity_mismatch_raises(manager):
    with pytest.raises(SplaError) as info:
        manager.validate_ctor(DOK, DecorationStorage(CAP + 1))
    assert info.value.status == Status.InvalidArgument