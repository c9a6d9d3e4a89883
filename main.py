import argparse
import logging
import os
import sys

from cryptography.hazmat.primitives.ciphers import Cipher as ReferenceCipher, algorithms
from cryptography.hazmat.backends import default_backend

from chacha20.chacha20_cipher import Cipher
from chacha20.chacha20_encrypt import encrypt_bytes, generate_keystream
from chacha20.chacha20_decrypt import decrypt_bytes
from chacha20.chacha20_diffusion import key_avalanche
from chacha20.chacha20_speed import measure_time, throughput


# RFC 7539 section 2.4.2
RFC_KEY = bytes(range(32))
RFC_NONCE = bytes.fromhex("000000000000004a00000000")
RFC_COUNTER = 1
RFC_PLAINTEXT = (
    b"Ladies and Gentlemen of the class of '99: If I could offer you only one tip "
    b"for the future, sunscreen would be it."
)
RFC_CIPHERTEXT = bytes.fromhex(
    "6e2e359a2568f98041ba0728dd0d6981e97e7aec1d4360c20a27afccfd9fae0b"
    "f91b65c5524733ab8f593dabcd62b3571639d624e65152ab8f530c359f0861d8"
    "07ca0dbf500d6a6156a38e088a22b65e52bc514d16ccf806818ce91ab7793736"
    "5af90bbf74a35be6b40b8eedf2785e42874d"
)


def reference_keystream(key: bytes, nonce16: bytes, length: int) -> bytes:
    """
    Keystream from the `cryptography` library (nonce16 = 4B counter LE || 12B nonce).
    """
    encryptor = ReferenceCipher(algorithms.ChaCha20(key, nonce16), mode=None, backend=default_backend()).encryptor()
    return encryptor.update(bytes(length)) + encryptor.finalize()


def known_answer_test() -> bool:
    cipher = Cipher(RFC_KEY, RFC_NONCE)
    cipher.counter = RFC_COUNTER
    ct = bytearray(len(RFC_PLAINTEXT))
    cipher.xor_key_stream(ct, RFC_PLAINTEXT)

    cipher.counter = RFC_COUNTER
    pt = bytearray(len(ct))
    cipher.xor_key_stream(pt, ct)
    return bytes(ct) == RFC_CIPHERTEXT and bytes(pt) == RFC_PLAINTEXT


def run(args: argparse.Namespace) -> int:
    ok = True

    print("== Known-Answer Test (RFC 7539 2.4.2) ==")
    kat = known_answer_test()
    print(f"Encrypt/decrypt sunscreen vector: {'OK' if kat else 'FAILED'}")
    ok &= kat

    key = os.urandom(32)
    nonce = os.urandom(12)
    data = os.urandom(args.size)

    print(f"\n== Round Trip ({args.size} bytes) ==")
    ct = encrypt_bytes(key, nonce, data)
    rt = decrypt_bytes(key, nonce, ct) == data
    print(f"decrypt(encrypt(m)) == m: {'OK' if rt else 'FAILED'}")
    ok &= rt

    print("\n== Cross-check vs cryptography ==")
    nonce16 = (7).to_bytes(4, "little") + nonce
    length = min(args.size, 4096)
    xc = generate_keystream(key, nonce16, length) == reference_keystream(key, nonce16, length)
    print(f"Keystream ({length} bytes, counter=7): {'OK' if xc else 'MISMATCH'}")
    ok &= xc

    print("\n== Diffusion (1-bit key change) ==")
    n, u = key_avalanche(key, nonce)
    print(f"Keystream NPCR={n:.4f}%, UACI={u:.4f}%")

    print("\n== Timing (encryption only) ==")
    repeats = max(1, args.repeats)
    t, _ = measure_time(encrypt_bytes, key, nonce, data, repeats=repeats)
    print(f"ChaCha20 avg time over {repeats} run(s): {t:.6f} s ({throughput(len(data), t):.3f} MiB/s)")

    print("\nAll checks passed." if ok else "\nSome checks FAILED.")
    return 0 if ok else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="ChaCha20 (RFC 7539) self-test and demonstration.")
    parser.add_argument("--size", type=int, default=64 * 1024, help="Message size in bytes for round trip and timing.")
    parser.add_argument("--repeats", type=int, default=3, help="Repeats for timing average.")
    parser.add_argument("--verbose", action="store_true", help="Show debug logging from the cipher.")
    args = parser.parse_args()
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(run(args))
