class ChaCha20Error(ValueError):
    """
    Base class for ChaCha20 precondition failures.
    `size` holds the offending length.
    """

    def __init__(self, message: str, size: int):
        super().__init__(message)
        self.size = size


class InvalidKeySize(ChaCha20Error):
    def __init__(self, size: int):
        super().__init__(f"Key must be 32 bytes, got {size}", size)


class InvalidNonceSize(ChaCha20Error):
    def __init__(self, size: int, allowed: str = "12"):
        super().__init__(f"Nonce must be {allowed} bytes, got {size}", size)


class BufferTooLarge(ChaCha20Error):
    def __init__(self, size: int):
        super().__init__(f"Single block request must be at most 64 bytes, got {size}", size)


class BufferSizeMismatch(ChaCha20Error):
    def __init__(self, dest_size: int, src_size: int):
        super().__init__(
            f"Destination ({dest_size} bytes) and source ({src_size} bytes) must have the same length",
            dest_size,
        )
        self.src_size = src_size
