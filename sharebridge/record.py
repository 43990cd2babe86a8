"""
PortableKeyShare: the library-agnostic interchange record.

Every field is either a small integer or a hex string, so the record can sit
between two threshold-signature libraries (or on disk) without dragging
either library's types along.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, replace
from typing import Iterable, List

from .codec import decode_point, decode_scalar, encode_point, encode_scalar, pad_hex, strip_0x
from .errors import EmptyInput, MismatchedParticipantSet

_UINT16_MAX = 0xFFFF


@dataclass(frozen=True)
class PortableKeyShare:
    i: int  # party index, 0-based
    t: int  # threshold; n for additive shares
    n: int  # total parties
    x: str  # secret share, 64 hex chars
    y: str  # shared public key, compressed point hex

    def __post_init__(self):
        for name in ("i", "t", "n"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= _UINT16_MAX:
                raise ValueError(f"{name} must fit in a uint16, got {value!r}")
        if self.n and self.i >= self.n:
            raise MismatchedParticipantSet(
                f"Party index {self.i} outside 0..{self.n - 1}", index=self.i, n=self.n)
        # canonicalise both hex fields; raises on malformed input
        object.__setattr__(self, "x", encode_scalar(decode_scalar(self.x)))
        object.__setattr__(self, "y", encode_point(decode_point(self.y)))

    def secret(self) -> int:
        return decode_scalar(self.x)

    def public_key(self):
        return decode_point(self.y)

    def with_secret(self, value: int, **changes) -> "PortableKeyShare":
        return replace(self, x=encode_scalar(value), **changes)

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "PortableKeyShare":
        x = data["x"] if "x" in data else data["x_hex"]
        y = data["y"] if "y" in data else data["y_hex"]
        return cls(
            i=int(data["i"]),
            t=int(data["t"]),
            n=int(data["n"]),
            x=pad_hex(strip_0x(x)),
            y=pad_hex(strip_0x(y)),
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True)

    @classmethod
    def from_json(cls, payload: str) -> "PortableKeyShare":
        return cls.from_dict(json.loads(payload))

    def __repr__(self):
        # never print the secret share
        return f"PortableKeyShare(i={self.i}, t={self.t}, n={self.n}, y={self.y})"


def check_same_key(records: Iterable[PortableKeyShare], same_threshold: bool = True) -> List[PortableKeyShare]:
    """Records describing one key must agree on n, y and (within one mode) t."""
    records = list(records)
    if not records:
        raise EmptyInput("No key shares supplied")
    first = records[0]
    for r in records[1:]:
        if r.n != first.n:
            raise MismatchedParticipantSet(
                f"Party {r.i} declares n={r.n}, party {first.i} declares n={first.n}",
                index=r.i, expected=first.n, actual=r.n)
        if r.y != first.y:
            raise MismatchedParticipantSet(
                f"Party {r.i} carries a different shared public key", index=r.i)
        if same_threshold and r.t != first.t:
            raise MismatchedParticipantSet(
                f"Party {r.i} declares t={r.t}, party {first.i} declares t={first.t}",
                index=r.i, expected=first.t, actual=r.t)
    return records


def check_dense_indices(records: Iterable[PortableKeyShare]) -> List[PortableKeyShare]:
    """
    Sort by index and require exactly the parties 0..n-1.
    Gaps or collisions would mispair sub-shares without any visible error.
    """
    records = sorted(records, key=lambda r: r.i)
    if not records:
        raise EmptyInput("No key shares supplied")
    n = records[0].n
    indices = [r.i for r in records]
    if indices != list(range(n)):
        missing = sorted(set(range(n)) - set(indices))
        duplicated = sorted({i for i in indices if indices.count(i) > 1})
        raise MismatchedParticipantSet(
            f"Expected parties 0..{n - 1}, got {indices}",
            expected=n, actual=len(records), missing=missing, duplicated=duplicated)
    return records
