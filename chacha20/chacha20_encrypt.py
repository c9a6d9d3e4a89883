import numpy as np

from .chacha20_cipher import Cipher
from .chacha20_errors import InvalidNonceSize
from .chacha20_key_schedule import NONCE_SIZE


def _parse_nonce(nonce: bytes) -> tuple[int, bytes]:
    if len(nonce) == NONCE_SIZE:
        return 0, bytes(nonce)
    if len(nonce) == NONCE_SIZE + 4:
        return int.from_bytes(nonce[:4], "little"), bytes(nonce[4:])
    raise InvalidNonceSize(len(nonce), allowed="12 or 16")


def _new_cipher(key: bytes, nonce: bytes) -> Cipher:
    counter, n12 = _parse_nonce(nonce)
    cipher = Cipher(key, n12)
    cipher.counter = counter
    return cipher


def generate_keystream(key: bytes, nonce: bytes, length: int) -> bytes:
    """
    Menghasilkan keystream ChaCha20 sepanjang 'length' byte.
    - key: 32 byte
    - nonce: 12 byte (counter=0) atau 16 byte (4B counter LE || 12B nonce)
    """
    return _new_cipher(key, nonce).keystream(length)


def encrypt_bytes(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """
    ChaCha20 stream cipher (XOR dengan keystream).
    nonce boleh 12 byte (counter=0) atau 16 byte (counter||nonce).
    """
    return _new_cipher(key, nonce).encrypt(plaintext)


def encrypt_array_to_array(arr: np.ndarray, key: bytes, nonce: bytes) -> np.ndarray:
    """
    Enkripsi array uint8 (bentuk apa pun) dan mengembalikan array uint8 dengan shape yang sama.
    """
    if arr.dtype != np.uint8:
        raise ValueError("Array must be uint8.")
    flat = np.ascontiguousarray(arr).reshape(-1)
    out = np.empty_like(flat)
    _new_cipher(key, nonce).xor_key_stream(out, flat)
    return out.reshape(arr.shape)
