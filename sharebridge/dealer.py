"""
Simulated key generation, standing in for the external DKG engine.

Simplified GG20 keygen (https://eprint.iacr.org/2020/540.pdf):
1. Each participant creates a polynomial of degree t-1 and sends a point on it
   to every other participant, publishing the VSS commitments of its coefficients.
2. Each participant adds the points it receives. The sum lies on a polynomial
   nobody knows; any t participants can use it to sign.

All participants live in this process, so the shortcut is gated exactly like
local resharing.
"""

from typing import List

import structlog

from .adapters import ShamirKeyShare
from .codec import encode_point, encode_scalar
from .config import Config, require_simulation_mode
from .curve import ec_sum, order, pub_key_from_priv
from .errors import InconsistentShares
from .lagrange import evaluation_point
from .polynomial import Polynomial, vss_point
from .rand import int_sample
from .record import PortableKeyShare

log = structlog.get_logger()


def _check_threshold(t, n):
    if not 1 <= t <= n:
        raise ValueError(f"Need 1 <= t <= n, got t={t} n={n}")


class SimulatedKeyGen:
    def __init__(self, poly: List[Polynomial], t, n):
        _check_threshold(t, n)
        self.t = t
        self.n = n
        self.shards = [sum(pp.evaluate(evaluation_point(i)) for pp in poly) % order
                       for i in range(n)]
        # commitments of the summed polynomial are the sums of the commitments
        per_party = [pp.commitments() for pp in poly]
        self.commitments = [ec_sum(c[k] for c in per_party) for k in range(max(t, 1))]
        self.pub = self.commitments[0]
        self.public_shares = []
        for i, shard in enumerate(self.shards):
            X_i = pub_key_from_priv(shard)
            # every party would run this check on what it received
            if X_i != vss_point(self.commitments, i):
                raise InconsistentShares(f"Share of party {i} fails the VSS check", index=i)
            self.public_shares.append(X_i)

    @classmethod
    def random(cls, t, n):
        return cls([Polynomial.random(int_sample(order), t) for _ in range(n)], t, n)

    def records(self) -> List[PortableKeyShare]:
        y = encode_point(self.pub)
        return [PortableKeyShare(i=i, t=self.t, n=self.n, x=encode_scalar(s), y=y)
                for i, s in enumerate(self.shards)]

    def key_shares(self):
        return [ShamirKeyShare(i=i, min_signers=self.t, x=s,
                               public_shares=list(self.public_shares),
                               commitments=list(self.commitments),
                               shared_public_key=self.pub)
                for i, s in enumerate(self.shards)]

    def __repr__(self):
        return f"SimulatedKeyGen(t={self.t}, n={self.n}, public_key={self.pub})"


def simulate_dkg(t, n, *, trusted_dealer: bool = False, config: Config = None) -> SimulatedKeyGen:
    require_simulation_mode("simulate_dkg", trusted_dealer, config)
    keygen = SimulatedKeyGen.random(t, n)
    log.info("simulated_dkg_complete", threshold=t, parties=n)
    return keygen


def deal_key(secret: int, t, n, *, trusted_dealer: bool = False, config: Config = None) -> SimulatedKeyGen:
    """Split a known secret with a single dealer polynomial."""
    require_simulation_mode("deal_key", trusted_dealer, config)
    return SimulatedKeyGen([Polynomial.random(secret, t)], t, n)
