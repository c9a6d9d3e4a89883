from typing import Optional

KEY_SIZE = 32
NONCE_SIZE = 12
BLOCK_SIZE = 64
STATE_WORDS = 16
DOUBLE_ROUNDS = 10  # 20 rounds

MASK32 = 0xFFFFFFFF

CONSTANTS = b"expand 32-byte k"

COUNTER_INDEX = 12


# ========== Little-endian word codec ==========
def _le_words(b: bytes) -> list[int]:
    return [int.from_bytes(b[i:i+4], "little") for i in range(0, len(b), 4)]

def _words_le(ws: list[int]) -> bytes:
    return b"".join((w & MASK32).to_bytes(4, "little") for w in ws)


# ========== State setup ==========
def initial_state(key: bytes, nonce: bytes, counter: int = 0) -> list[int]:
    """
    Susun state 16 word: konstanta || key (8 word) || counter || nonce (3 word).
    Ukuran key/nonce diperiksa oleh pemanggil (Cipher).
    """
    return _le_words(CONSTANTS) + _le_words(bytes(key)) + [counter & MASK32] + _le_words(bytes(nonce))


# ========== ChaCha20 core (pure Python) ==========
def rotl32(x: int, n: int) -> int:
    return ((x << n) & MASK32) | (x >> (32 - n))

def quarter_round(s: list[int], a: int, b: int, c: int, d: int) -> None:
    s[a] = (s[a] + s[b]) & MASK32; s[d] ^= s[a]; s[d] = rotl32(s[d], 16)
    s[c] = (s[c] + s[d]) & MASK32; s[b] ^= s[c]; s[b] = rotl32(s[b], 12)
    s[a] = (s[a] + s[b]) & MASK32; s[d] ^= s[a]; s[d] = rotl32(s[d], 8)
    s[c] = (s[c] + s[d]) & MASK32; s[b] ^= s[c]; s[b] = rotl32(s[b], 7)

def double_round(s: list[int]) -> None:
    # column rounds
    quarter_round(s, 0, 4, 8, 12); quarter_round(s, 1, 5, 9, 13)
    quarter_round(s, 2, 6, 10, 14); quarter_round(s, 3, 7, 11, 15)
    # diagonal rounds
    quarter_round(s, 0, 5, 10, 15); quarter_round(s, 1, 6, 11, 12)
    quarter_round(s, 2, 7, 8, 13); quarter_round(s, 3, 4, 9, 14)

def block_transform(state: list[int], counter: int, block: Optional[list[int]] = None) -> bytes:
    """
    Satu blok keystream (64 byte) dari snapshot `state` dengan counter `counter`.
    - `state` tidak diubah.
    - `block` (16 word) adalah buffer kerja milik pemanggil dan ditimpa seluruhnya.
    - Feed-forward memakai word state apa adanya, termasuk state[12].
    """
    if block is None:
        block = [0] * STATE_WORDS
    block[:] = state
    block[COUNTER_INDEX] = counter & MASK32
    for _ in range(DOUBLE_ROUNDS):
        double_round(block)
    for i in range(STATE_WORDS):
        block[i] = (block[i] + state[i]) & MASK32
    return _words_le(block)  # 64 bytes
