import logging

import numpy as np

from .chacha20_errors import BufferSizeMismatch, BufferTooLarge, InvalidKeySize, InvalidNonceSize
from .chacha20_key_schedule import (
    BLOCK_SIZE,
    COUNTER_INDEX,
    KEY_SIZE,
    MASK32,
    NONCE_SIZE,
    STATE_WORDS,
    block_transform,
    initial_state,
)

logger = logging.getLogger(__name__)


def _writable_view(buffer) -> memoryview:
    view = memoryview(buffer)
    if view.readonly:
        raise TypeError("Destination buffer must be writable")
    return view.cast("B")


class Cipher:
    """
    ChaCha20 (RFC 7539) dengan state 16 word dan blok kerja 16 word milik sendiri.

    Key (32 byte) dan nonce (12 byte) tetap selama umur objek; yang berubah
    hanya counter (state[12]), modulo 2^32. Tidak thread-safe: setiap operasi,
    termasuk next_bytes, mengubah counter dan blok kerja.
    """

    def __init__(self, key: bytes, nonce: bytes):
        if len(key) != KEY_SIZE:
            raise InvalidKeySize(len(key))
        if len(nonce) != NONCE_SIZE:
            raise InvalidNonceSize(len(nonce))
        self._state = initial_state(key, nonce)
        self._block = [0] * STATE_WORDS
        logger.debug("ChaCha20 cipher initialised (nonce=%s)", bytes(nonce).hex())

    @property
    def counter(self) -> int:
        return self._state[COUNTER_INDEX]

    @counter.setter
    def counter(self, value: int) -> None:
        if not isinstance(value, int):
            raise TypeError(f"Counter must be an int, got {type(value).__name__}")
        self._state[COUNTER_INDEX] = value & MASK32

    def reset_counter(self) -> None:
        self._state[COUNTER_INDEX] = 0

    def block_transform(self, counter: int) -> bytes:
        """
        One 64-byte block for `counter`; the stored counter is left alone.
        Feed-forward adds the stored counter, so this only matches the RFC
        keystream when `counter == self.counter`.
        """
        return block_transform(self._state, counter, self._block)

    def next_bytes(self, buffer) -> None:
        """
        Fill `buffer` (<= 64 bytes) with the head of the current block and
        advance the counter by one, however short the buffer is.
        """
        view = _writable_view(buffer)
        if len(view) > BLOCK_SIZE:
            raise BufferTooLarge(len(view))
        ks = block_transform(self._state, self._state[COUNTER_INDEX], self._block)
        view[:] = ks[: len(view)]
        self._state[COUNTER_INDEX] = (self._state[COUNTER_INDEX] + 1) & MASK32
        if self._state[COUNTER_INDEX] == 0:
            logger.debug("ChaCha20 block counter wrapped around to 0")

    def keystream(self, length: int) -> bytes:
        """
        Keystream of `length` bytes from the current counter onwards.
        Unlike xor_key_stream the counter is left advanced by ceil(length / 64).
        """
        if length < 0:
            raise ValueError("length must be non-negative")
        out = bytearray(length)
        view = memoryview(out)
        for off in range(0, length, BLOCK_SIZE):
            self.next_bytes(view[off:off + BLOCK_SIZE])
        return bytes(out)

    def xor_key_stream(self, dest, src) -> None:
        """
        dest[i] = src[i] ^ keystream[i]. Enkripsi dan dekripsi identik.

        Setelah selesai counter di-reset ke 0, jadi setiap panggilan mulai lagi
        dari blok 0 kecuali pemanggil mengatur `counter` sendiri.
        """
        dst = _writable_view(dest)
        src_view = memoryview(src).cast("B")
        if len(dst) != len(src_view):
            raise BufferSizeMismatch(len(dst), len(src_view))
        n = len(src_view)
        if n:
            start = self._state[COUNTER_INDEX]
            ks = np.frombuffer(self.keystream(n), dtype=np.uint8)
            out = np.bitwise_xor(np.frombuffer(src_view, dtype=np.uint8), ks)
            dst[:] = out.tobytes()
            logger.debug(
                "xor_key_stream: %d bytes, %d block(s) from counter %d",
                n, (self._state[COUNTER_INDEX] - start) & MASK32, start,
            )
        self.reset_counter()

    def encrypt(self, data: bytes) -> bytes:
        out = bytearray(len(memoryview(data).cast("B")))
        self.xor_key_stream(out, data)
        return bytes(out)

    def decrypt(self, data: bytes) -> bytes:
        return self.encrypt(data)
