"""
Credential hashing with bcrypt.

bcrypt is CPU bound, so the async helpers run it in the default executor.
"""
import asyncio
import bcrypt

# bcrypt only consumes the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password_sync(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password_sync(password: str, digest: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), digest.encode("utf-8"))
    except ValueError:
        return False


async def hash_password(password: str, rounds: int = 10) -> str:
    """
    Hash a password with a fresh salt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor

    Returns:
        bcrypt digest string (algorithm, cost, salt and hash)
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, hash_password_sync, password, rounds)


async def verify_password(password: str, digest: str) -> bool:
    if not password or not digest:
        return False
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, verify_password_sync, password, digest)
