import numpy as np

from .chacha20_encrypt import generate_keystream


def _as_u8(data) -> np.ndarray:
    if isinstance(data, np.ndarray):
        return data
    if not len(data):
        return np.empty(0, dtype=np.uint8)
    return np.frombuffer(bytes(data), dtype=np.uint8)


def npcr(a, b) -> float:
    """
    Number of (byte) Positions Change Rate between two byte arrays (percentage).
    """
    x, y = _as_u8(a), _as_u8(b)
    if x.shape != y.shape:
        raise ValueError("Inputs must have the same shape for NPCR.")
    if x.size == 0:
        return 0.0
    diff = x != y
    return float(np.count_nonzero(diff)) / float(diff.size) * 100.0


def uaci(a, b, max_val: float = 255.0) -> float:
    """
    Unified Average Changing Intensity between two byte arrays (percentage).
    """
    x, y = _as_u8(a), _as_u8(b)
    if x.shape != y.shape:
        raise ValueError("Inputs must have the same shape for UACI.")
    if x.size == 0:
        return 0.0
    diff = np.abs(x.astype(np.float64) - y.astype(np.float64))
    return float(np.mean(diff) / max_val * 100.0)


def key_avalanche(key: bytes, nonce: bytes, length: int = 4096) -> tuple[float, float]:
    """
    Flip the lowest bit of key[0] and compare both keystreams.
    Returns (npcr, uaci); ideal values are ~99.61% and ~33.46%.
    """
    flipped = bytearray(key)
    flipped[0] ^= 0x01
    ks1 = generate_keystream(key, nonce, length)
    ks2 = generate_keystream(bytes(flipped), nonce, length)
    return npcr(ks1, ks2), uaci(ks1, ks2)
