"""Password hashing with scrypt.

Stored format: ``scrypt$<n>$<r>$<p>$<salt hex>$<hash hex>``. Cost parameters
travel with each hash so they can be raised without invalidating old ones.
"""

import hashlib
import hmac
import secrets

SCHEME = "scrypt"
COST_N = 2**14
BLOCK_SIZE_R = 8
PARALLELISM_P = 1
KEY_LENGTH = 64


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt."""
    salt = secrets.token_bytes(16)
    digest = hashlib.scrypt(
        password.encode("utf-8"),
        salt=salt,
        n=COST_N,
        r=BLOCK_SIZE_R,
        p=PARALLELISM_P,
        dklen=KEY_LENGTH,
    )
    return f"{SCHEME}${COST_N}${BLOCK_SIZE_R}${PARALLELISM_P}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Check a password against a stored hash in constant time.

    Malformed or foreign-scheme hashes never verify.
    """
    parts = stored_hash.split("$")
    if len(parts) != 6 or parts[0] != SCHEME:
        return False

    _, n, r, p, salt_hex, digest_hex = parts
    try:
        digest = hashlib.scrypt(
            password.encode("utf-8"),
            salt=bytes.fromhex(salt_hex),
            n=int(n),
            r=int(r),
            p=int(p),
            dklen=len(digest_hex) // 2,
        )
    except ValueError:
        return False

    return hmac.compare_digest(digest.hex(), digest_hex)
