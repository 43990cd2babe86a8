"""
Local conversions between Shamir (t-of-n) and additive (n-of-n) shares.

Shamir -> additive is a purely local computation: w_i = x_i * lambda_{i,S}(0).
Every member of the quorum S must use the same S, otherwise the w_i no longer
add up to the secret. Nothing is exchanged and nothing flags the mistake.

Additive -> Shamir needs interaction (every party reshares its w_i); see
resharing.py. This module only holds the per-party piece of that protocol.
"""

from typing import Iterable, List

import structlog

from .codec import decode_scalar, encode_scalar
from .curve import order
from .lagrange import check_distinct, evaluation_point, lagrange_coefficient
from .polynomial import generate_shares
from .record import PortableKeyShare, check_same_key

log = structlog.get_logger()


def quorum_points(records: Iterable[PortableKeyShare]) -> List[int]:
    """1-based coordinate set of the parties in a signing quorum."""
    return check_distinct(evaluation_point(r.i) for r in records)


def shamir_to_additive(share: PortableKeyShare, active_points: Iterable[int]) -> PortableKeyShare:
    """
    Remap one Shamir share into an additive share for the quorum active_points.

    active_points: 1-based coordinates of every signer, this party included.
    """
    active_points = list(active_points)
    lam = lagrange_coefficient(evaluation_point(share.i), active_points)
    w_i = share.secret() * lam % order
    log.debug("shamir_to_additive", party=share.i, quorum=sorted(active_points))
    # an additive share is n-of-n for its quorum
    return share.with_secret(w_i, t=share.n)


def shamir_quorum_to_additive(records: Iterable[PortableKeyShare]) -> List[PortableKeyShare]:
    """Convert every member of a quorum with one agreed point set."""
    records = check_same_key(records)
    points = quorum_points(records)
    return [shamir_to_additive(r, points) for r in records]


def generate_resharing_polynomial(additive_share_hex: str, threshold: int, n: int) -> List[str]:
    """
    One party's outgoing sub-shares: a fresh polynomial with the additive share
    as constant term, evaluated at every party's point.
    These are secrets in transit and must reach each recipient over a private channel.
    """
    secret = decode_scalar(additive_share_hex)
    return [encode_scalar(s) for s in generate_shares(secret, threshold, n)]
