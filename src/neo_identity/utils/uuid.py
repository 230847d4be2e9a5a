"""UUID utilities for neo-identity."""

import time
import uuid


def generate_uuid_v7() -> str:
    """
    Generate a UUIDv7 with time-based ordering.

    Time-ordered keys keep relational indexes compact, so they are the
    default key for identity entities.

    Returns:
        String representation of UUIDv7
    """
    timestamp_ms = int(time.time() * 1000)

    # 48-bit big-endian timestamp followed by 80 random bits
    timestamp_bytes = timestamp_ms.to_bytes(6, byteorder='big')
    random_bytes = uuid.uuid4().bytes[6:]
    uuid_bytes = timestamp_bytes + random_bytes

    # Version 7
    uuid_bytes = uuid_bytes[:6] + bytes([(uuid_bytes[6] & 0x0f) | 0x70]) + uuid_bytes[7:]
    # Variant 10
    uuid_bytes = uuid_bytes[:8] + bytes([(uuid_bytes[8] & 0x3f) | 0x80]) + uuid_bytes[9:]

    return str(uuid.UUID(bytes=uuid_bytes))


def generate_stamp() -> str:
    """
    Generate a random concurrency or security stamp.

    Returns:
        String representation of a UUIDv4
    """
    return str(uuid.uuid4())
