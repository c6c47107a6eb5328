import uuid

import pytest

from pdascope.models import PdaInfo, PdaPattern, SeedTemplate, SeedType, SeedValue


@pytest.mark.parametrize(
    "seed, expected",
    [
        (SeedValue(SeedType.STRING, "test"), "string"),
        (SeedValue(SeedType.U64, 123), "u64"),
        (SeedValue(SeedType.PUBKEY, "11111111111111111111111111111111"), "pubkey"),
        (SeedValue(SeedType.BYTES, b"\x01\x02\x03"), "bytes"),
    ],
)
def test_seed_type_names(seed, expected):
    assert seed.seed_type() == expected


@pytest.mark.parametrize("kind", [SeedType.U8, SeedType.U16, SeedType.U32])
def test_small_integer_seed_type_matches_kind(kind):
    assert SeedValue(kind, 1).seed_type() == kind.value


def test_kind_given_as_string_is_coerced():
    seed = SeedValue("u64", 5)
    assert seed.kind is SeedType.U64
    assert seed == SeedValue(SeedType.U64, 5)


def test_unknown_kind_rejected():
    with pytest.raises(ValueError):
        SeedValue("i128", 5)


@pytest.mark.parametrize(
    "kind, value",
    [(SeedType.U8, 256), (SeedType.U16, 1 << 16), (SeedType.U32, 1 << 32), (SeedType.U64, 1 << 64), (SeedType.U8, -1)],
)
def test_integer_out_of_range(kind, value):
    with pytest.raises(ValueError):
        SeedValue(kind, value)


def test_integer_upper_bound_accepted():
    seed = SeedValue(SeedType.U64, (1 << 64) - 1)
    assert seed.value == (1 << 64) - 1


@pytest.mark.parametrize(
    "kind, value",
    [(SeedType.STRING, 5), (SeedType.U64, "5"), (SeedType.U8, True), (SeedType.BYTES, "abc")],
)
def test_wrong_payload_type(kind, value):
    with pytest.raises(TypeError):
        SeedValue(kind, value)


def test_bytearray_stored_as_bytes():
    seed = SeedValue(SeedType.BYTES, bytearray([1, 2, 3, 4]))
    assert seed.value == bytes([1, 2, 3, 4])
    assert isinstance(seed.value, bytes)


def test_pda_info_rejects_bad_bump():
    with pytest.raises(ValueError):
        PdaInfo("addr", "prog", [], 256)


def test_pda_info_copies_seeds():
    seeds = [SeedValue(SeedType.STRING, "state")]
    info = PdaInfo("addr", "prog", seeds, 254, first_seen_slot=12345)
    seeds.append(SeedValue(SeedType.U8, 1))
    assert len(info.seeds) == 1
    assert info.first_seen_slot == 12345
    assert info.first_seen_transaction is None


def test_pattern_ids_are_unique():
    template = [SeedTemplate("prefix", "string", None, False)]
    first = PdaPattern("prog", "Test Pattern", template)
    second = PdaPattern("prog", "Test Pattern", template)
    assert isinstance(first.id, uuid.UUID)
    assert first.id != second.id
    assert first.seeds_template[0].is_variable is False


def test_seed_template_defaults():
    template = SeedTemplate("owner", "pubkey")
    assert template.is_variable is True
    assert template.description is None