"""
Additive -> Shamir resharing, modelled as message passing between parties.

Given additive shares with secret = sum w_i, each party i:
    1. treats w_i as a secret and builds a degree t-1 polynomial g_i,
    2. sends g_i(j+1) to party j,
    3. once it holds a sub-share from every party, sets x_j = sum_i g_i(j+1).
The x_j lie on g = sum g_i, a fresh degree t-1 polynomial with g(0) = secret.

Running every party in one process, as reshare_additive_to_shamir does, means
one machine sees every additive share. That is a trusted-dealer shortcut and
is refused unless explicitly enabled. A real deployment replaces
LocalTransport with encrypted point-to-point delivery and runs each
ResharingParty on its own host; the party code does not change.
"""

from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List

import structlog

from .codec import decode_scalar
from .config import Config, require_simulation_mode
from .convert import generate_resharing_polynomial
from .curve import order
from .errors import InsufficientShares, MismatchedParticipantSet
from .record import PortableKeyShare, check_dense_indices, check_same_key

log = structlog.get_logger()


@dataclass(frozen=True)
class SubShare:
    sender: int
    recipient: int
    value: str  # scalar hex, secret

    def __repr__(self):
        return f"SubShare({self.sender} -> {self.recipient})"


class LocalTransport:
    """In-process stand-in for the n*(n-1) private channels of a resharing round."""

    def __init__(self):
        self._queues: Dict[int, deque] = defaultdict(deque)

    def send(self, msg: SubShare) -> None:
        self._queues[msg.recipient].append(msg)

    def drain(self, recipient: int) -> Iterator[SubShare]:
        queue = self._queues[recipient]
        while queue:
            yield queue.popleft()

    def pending(self) -> int:
        return sum(len(q) for q in self._queues.values())


class ResharingParty:
    def __init__(self, share: PortableKeyShare, threshold: int):
        self.share = share
        self.threshold = threshold
        self.index = share.i
        self.n = share.n
        self._received: Dict[int, int] = {}

    def deal(self) -> List[SubShare]:
        sub_shares = generate_resharing_polynomial(self.share.x, self.threshold, self.n)
        # sub_shares[j] is g_i evaluated at party j's point
        return [SubShare(self.index, j, v) for j, v in enumerate(sub_shares)]

    def receive(self, msg: SubShare) -> None:
        if msg.recipient != self.index:
            raise MismatchedParticipantSet(
                f"Party {self.index} received a sub-share addressed to {msg.recipient}",
                index=self.index, recipient=msg.recipient)
        if not 0 <= msg.sender < self.n:
            raise MismatchedParticipantSet(
                f"Party {self.index} received a sub-share from unknown party {msg.sender}",
                index=self.index, sender=msg.sender)
        if msg.sender in self._received:
            raise MismatchedParticipantSet(
                f"Party {self.index} received two sub-shares from party {msg.sender}",
                index=self.index, sender=msg.sender)
        self._received[msg.sender] = decode_scalar(msg.value)

    @property
    def missing(self) -> List[int]:
        return [i for i in range(self.n) if i not in self._received]

    def aggregate(self) -> PortableKeyShare:
        # n-way barrier: a partial sum is not a share of anything
        if self.missing:
            raise MismatchedParticipantSet(
                f"Party {self.index} is missing sub-shares from {self.missing}",
                index=self.index, expected=self.n, actual=len(self._received),
                missing=self.missing)
        x_j = sum(self._received.values()) % order
        return self.share.with_secret(x_j, t=self.threshold)


def run_resharing(parties: Iterable[ResharingParty], transport: LocalTransport) -> List[PortableKeyShare]:
    parties = list(parties)
    for party in parties:
        for msg in party.deal():
            transport.send(msg)
    for party in parties:
        for msg in transport.drain(party.index):
            party.receive(msg)
    return [party.aggregate() for party in parties]


def reshare_additive_to_shamir(
    additive_shares: Iterable[PortableKeyShare],
    threshold: int,
    *,
    trusted_dealer: bool = False,
    config: Config = None,
) -> List[PortableKeyShare]:
    """
    Turn n additive shares into n Shamir shares (threshold-of-n) of the same secret.
    All n parties must be present with indices 0..n-1.
    """
    require_simulation_mode("reshare_additive_to_shamir", trusted_dealer, config)
    records = check_dense_indices(check_same_key(additive_shares, same_threshold=False))
    n = len(records)
    if threshold < 1:
        raise ValueError(f"Resharing threshold must be at least 1, got {threshold}")
    if threshold > n:
        raise InsufficientShares(
            f"Threshold {threshold} exceeds the {n} parties resharing",
            expected=threshold, actual=n)

    log.warning("trusted_dealer_resharing", parties=n, threshold=threshold)
    parties = [ResharingParty(r, threshold) for r in records]
    transport = LocalTransport()
    reshared = run_resharing(parties, transport)
    log.info("resharing_complete", parties=n, threshold=threshold, undelivered=transport.pending())
    return reshared
