import pytest

from chacha20.chacha20_key_schedule import (
    BLOCK_SIZE,
    MASK32,
    block_transform,
    double_round,
    initial_state,
    quarter_round,
    rotl32,
)


RFC_KEY = bytes(range(32))
# RFC 7539 section 2.3.2
BLOCK_NONCE = bytes.fromhex("000000090000004a00000000")
BLOCK_OUTPUT = bytes.fromhex(
    "10f1e7e4d13b5915500fdd1fa32071c4"
    "c7d1f4c733c068030422aa9ac3d46c4e"
    "d2826446079faa0914c2d705d98b02a2"
    "b5129cd1de164eb9cbd083e8a2503c4e"
)


def test_rotl32():
    assert rotl32(0x80000000, 1) == 0x00000001
    assert rotl32(0x7998BFDA, 7) == 0xCC5FED3C
    assert rotl32(0xFFFFFFFF, 16) == 0xFFFFFFFF


def test_quarter_round_rfc_2_1_1():
    s = [0x11111111, 0x01020304, 0x9B8D6F43, 0x01234567]
    quarter_round(s, 0, 1, 2, 3)
    assert s == [0xEA2A92F4, 0xCB1CF8CE, 0x4581472E, 0x5881C4BB]


def test_quarter_round_on_state_rfc_2_2_1():
    s = [
        0x879531E0, 0xC5ECF37D, 0x516461B1, 0xC9A62F8A,
        0x44C20EF3, 0x3390AF7F, 0xD9FC690B, 0x2A5F714C,
        0x53372767, 0xB00A5631, 0x974C541A, 0x359E9963,
        0x5C971061, 0x3D631689, 0x2098D9D6, 0x91DBD320,
    ]
    quarter_round(s, 2, 7, 8, 13)
    assert s == [
        0x879531E0, 0xC5ECF37D, 0xBDB886DC, 0xC9A62F8A,
        0x44C20EF3, 0x3390AF7F, 0xD9FC690B, 0xCFACAFD2,
        0xE46BEA80, 0xB00A5631, 0x974C541A, 0x359E9963,
        0x5C971061, 0xCCC07C79, 0x2098D9D6, 0x91DBD320,
    ]


def test_double_round_keeps_words_in_range():
    s = [MASK32] * 16
    double_round(s)
    assert len(s) == 16
    assert all(0 <= w <= MASK32 for w in s)


def test_initial_state_layout():
    s = initial_state(RFC_KEY, BLOCK_NONCE, counter=1)
    assert s == [
        0x61707865, 0x3320646E, 0x79622D32, 0x6B206574,
        0x03020100, 0x07060504, 0x0B0A0908, 0x0F0E0D0C,
        0x13121110, 0x17161514, 0x1B1A1918, 0x1F1E1D1C,
        0x00000001, 0x09000000, 0x4A000000, 0x00000000,
    ]


def test_block_transform_rfc_2_3_2():
    state = initial_state(RFC_KEY, BLOCK_NONCE, counter=1)
    assert block_transform(state, 1) == BLOCK_OUTPUT


def test_block_transform_all_zero_rfc_a_1():
    state = initial_state(bytes(32), bytes(12))
    expected = bytes.fromhex(
        "76b8e0ada0f13d90405d6ae55386bd28"
        "bdd219b8a08ded1aa836efcc8b770dc7"
        "da41597c5157488d7724e03fb8d84a37"
        "6a43b8f41518a11cc387b669b2ee6586"
    )
    assert block_transform(state, 0) == expected


def test_block_transform_leaves_state_and_overwrites_block():
    state = initial_state(RFC_KEY, BLOCK_NONCE, counter=1)
    snapshot = list(state)
    block = [0xDEADBEEF] * 16
    out = block_transform(state, 1, block)
    assert state == snapshot
    assert out == b"".join(w.to_bytes(4, "little") for w in block)


def test_feed_forward_uses_state_counter_word():
    # Rounds run with counter 1, but word 12 of the state (0) is added back.
    state = initial_state(RFC_KEY, BLOCK_NONCE, counter=0)
    out = block_transform(state, 1)
    assert out[:48] == BLOCK_OUTPUT[:48]
    assert out[52:] == BLOCK_OUTPUT[52:]
    assert int.from_bytes(out[48:52], "little") == 0xD19C12B4


@pytest.mark.parametrize("counter", [0, 1, 2**31, MASK32, 2**32 + 3, -1])
def test_block_transform_is_always_64_bytes(counter):
    state = initial_state(RFC_KEY, BLOCK_NONCE)
    assert len(block_transform(state, counter)) == BLOCK_SIZE
