"""
Global parameter reconstruction.

A threshold key share carries more than its own secret: it also holds the VSS
commitments C_k = a_k * G of the whole sharing polynomial and every party's
public share X_j = f(j+1) * G. Whenever the secret shares are replaced (a
bridge from another library, a refresh) the old commitments describe a
polynomial that no longer exists, and the zero knowledge proofs of the next
signing round will fail against them. This module rebuilds both from a
quorum of shares.

Interpolation runs in the point domain: shares are lifted to Y_i = x_i * G and
only the public points are combined, so interpolate_commitments works from
public data alone. reconstruct_global_params is the trusted-dealer
convenience that starts from private shares.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

import structlog

from .codec import decode_point, encode_point
from .curve import O, Point, ec_add, ec_scalar_mul, pub_key_from_priv
from .curve import order as ORDER
from .errors import EmptyInput, FieldInversionFailure, InconsistentShares, InsufficientShares
from .lagrange import evaluation_point
from .polynomial import vss_point
from .record import PortableKeyShare, check_same_key

log = structlog.get_logger()


def basis_coefficients(xs: Sequence[int], order: int = ORDER) -> List[List[int]]:
    """
    Coefficient vectors of the Lagrange basis polynomials
        L_i(X) = prod_{j != i} (X - x_j) / (x_i - x_j)
    Row i holds [L_i[0], ..., L_i[m-1]] for m = len(xs).
    """
    m = len(xs)
    rows = []
    for i, xi in enumerate(xs):
        denom = 1
        for j, xj in enumerate(xs):
            if i != j:
                denom = denom * (xi - xj) % order
        if denom == 0:
            raise FieldInversionFailure(
                f"Lagrange denominator vanishes for coordinate {xi}; duplicate participant",
                point=xi)
        inv_denom = pow(denom, -1, order)

        # synthetic multiplication by (X - x_j), highest degree first
        poly = [0] * m
        poly[0] = 1
        for j, xj in enumerate(xs):
            if i == j:
                continue
            for k in range(m - 1, 0, -1):
                poly[k] = (poly[k - 1] - xj * poly[k]) % order
            poly[0] = (-xj * poly[0]) % order
        rows.append([c * inv_denom % order for c in poly])
    return rows


def interpolate_coefficients(shares: Iterable[Tuple[int, int]], order: int = ORDER) -> List[int]:
    """Scalar coefficients [a_0, ..., a_{m-1}] through m (point, value) pairs."""
    shares = list(shares)
    if not shares:
        raise EmptyInput("No shares to interpolate")
    rows = basis_coefficients([x for x, _ in shares], order)
    coef = [0] * len(shares)
    for (_, y), row in zip(shares, rows):
        for k, b in enumerate(row):
            coef[k] = (coef[k] + y * b) % order
    return coef


def interpolate_commitments(public_points: Iterable[Tuple[int, Point]]) -> List[Point]:
    """Commitments [C_0, ..., C_{m-1}] through m (point, Y) pairs, Y = f(point) * G."""
    public_points = list(public_points)
    if not public_points:
        raise EmptyInput("No public shares to interpolate")
    rows = basis_coefficients([x for x, _ in public_points], ORDER)
    commitments = [O] * len(public_points)
    for (_, Y), row in zip(public_points, rows):
        for k, b in enumerate(row):
            commitments[k] = ec_add(commitments[k], ec_scalar_mul(Y, b))
    return commitments


@dataclass(frozen=True)
class GlobalParams:
    commitments: List[Point]
    public_shares: List[Point]

    @property
    def shared_public_key(self) -> Point:
        return self.commitments[0]

    def matches(self, y) -> bool:
        """Compare C_0 with an expected shared key (Point or hex)."""
        if isinstance(y, str):
            y = decode_point(y)
        return self.shared_public_key == y

    def commitments_hex(self) -> List[str]:
        return [encode_point(c) for c in self.commitments]

    def public_shares_hex(self) -> List[str]:
        return [encode_point(X) for X in self.public_shares]


def reconstruct_from_public_shares(public_shares: Dict[int, Point], t: int, n: int) -> GlobalParams:
    """
    Rebuild commitments from at least t public shares keyed by 0-based party
    index, then evaluate them for all n parties.
    """
    if not public_shares:
        raise EmptyInput("No public shares supplied")
    if len(public_shares) < t:
        raise InsufficientShares(
            f"Need {t} shares to rebuild the polynomial, got {len(public_shares)}",
            expected=t, actual=len(public_shares))

    pairs = [(evaluation_point(i), Y) for i, Y in sorted(public_shares.items())]
    coeffs = interpolate_commitments(pairs)

    keep = t if t > 0 else len(coeffs)
    extra = [k for k, C in enumerate(coeffs[keep:], start=keep) if C != O]
    if extra:
        raise InconsistentShares(
            f"Shares do not lie on a degree {keep - 1} polynomial (non-zero terms {extra})",
            expected=keep, actual=len(pairs))
    commitments = coeffs[:keep]
    shares = [vss_point(commitments, k) for k in range(n)]
    log.info("global_params_reconstructed", parties=n, threshold=t, interpolated_from=len(pairs))
    return GlobalParams(commitments, shares)


def reconstruct_global_params(records: Iterable[PortableKeyShare]) -> GlobalParams:
    """
    From >= t Shamir records (threshold read from the first record) rebuild
    the commitment set and every party's public share.
    The caller must compare the result's C_0 with the key it expects.
    """
    records = list(records)
    if not records:
        raise EmptyInput("No refreshed shares supplied")
    t = records[0].t
    if len(records) < t:
        raise InsufficientShares(
            f"Need {t} shares to rebuild the polynomial, got {len(records)}",
            expected=t, actual=len(records))
    records = check_same_key(records)

    public = {}
    for r in records:
        if r.i in public:
            raise FieldInversionFailure(
                f"Party {r.i} supplied twice; Lagrange denominator would vanish", index=r.i)
        public[r.i] = pub_key_from_priv(r.secret())
    return reconstruct_from_public_shares(public, t, records[0].n)


def verify_public_shares(params: GlobalParams) -> bool:
    """Recompute sum_j C_j * (k+1)^j for every party k and compare."""
    return all(vss_point(params.commitments, k) == X for k, X in enumerate(params.public_shares))
