"""Fabrication of Twilio-shaped identifiers.

Real Twilio SIDs are a two-letter resource prefix followed by 32 hex
characters (``UA`` for Autopilot assistants, ``PN`` for incoming phone
numbers). The mock builds them from a random md5-style hash.

Tests swap the synthesizer for a stub (see ``deps.get_synthesizer``) to
assert on exact values.
"""

from __future__ import annotations

import hashlib
import random
from typing import Optional, Protocol


ASSISTANT_SID_PREFIX = "UA"
PHONE_NUMBER_SID_PREFIX = "PN"


class IdentitySynthesizer(Protocol):
    def md5(self) -> str: ...

    def imei(self) -> str: ...

    def cell_phone(self) -> str: ...


class RandomIdentitySynthesizer:
    """Pseudo-random identifiers; pass ``seed`` for a repeatable sequence."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._random = random.Random(seed)

    def md5(self) -> str:
        raw = self._random.getrandbits(128).to_bytes(16, "big")
        return hashlib.md5(raw).hexdigest()

    def imei(self) -> str:
        """15-digit IMEI: 14 random digits plus a Luhn check digit."""
        body = "".join(str(self._random.randint(0, 9)) for _ in range(14))
        return body + str(luhn_check_digit(body))

    def cell_phone(self) -> str:
        # NANP: area code and exchange never start with 0 or 1
        area = self._random.randint(200, 999)
        exchange = self._random.randint(200, 999)
        line = self._random.randint(0, 9999)
        return f"+1{area}{exchange}{line:04d}"


def luhn_check_digit(digits: str) -> int:
    total = 0
    for i, ch in enumerate(reversed(digits)):
        d = int(ch)
        if i % 2 == 0:
            d *= 2
            if d > 9:
                d -= 9
        total += d
    return (10 - total % 10) % 10


def assistant_sid(hash_value: str) -> str:
    return ASSISTANT_SID_PREFIX + hash_value


def phone_number_sid(hash_value: str) -> str:
    return PHONE_NUMBER_SID_PREFIX + hash_value
