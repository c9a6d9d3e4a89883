import numpy as np

from .chacha20_encrypt import encrypt_array_to_array, encrypt_bytes


def decrypt_bytes(key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
    """
    ChaCha20 dekripsi (identik dengan enkripsi): XOR dengan keystream.
    nonce boleh 12 byte (counter=0) atau 16 byte (counter||nonce).
    """
    return encrypt_bytes(key, nonce, ciphertext)


def decrypt_array_to_array(arr: np.ndarray, key: bytes, nonce: bytes) -> np.ndarray:
    return encrypt_array_to_array(arr, key, nonce)
