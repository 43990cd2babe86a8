"""
Lagrange interpolation weights over the scalar field.

For a participant set S of evaluation points the secret is
    f(0) = sum_{i in S} y_i * lambda_i,   lambda_i = prod_{j != i} x_j / (x_j - x_i)
If every signer multiplies its share by its own lambda_i, the signers as a
group hold an additive sharing of f(0).

For more details refer Page 14 Section 3.2 of GG20 paper:
https://eprint.iacr.org/2020/540.pdf
"""

from typing import Iterable, List, Tuple

from .curve import order as ORDER
from .errors import DuplicatePoint, MismatchedParticipantSet, SingularDenominator


def evaluation_point(index: int) -> int:
    """
    Map a 0-based party index to its 1-based polynomial coordinate.
    Every component goes through here; f(0) is the secret so no party may sit at 0.
    """
    if index < 0:
        raise MismatchedParticipantSet(f"Negative party index {index}", index=index)
    return index + 1


def check_distinct(points: Iterable[int]) -> List[int]:
    points = list(points)
    seen = set()
    for x in points:
        if x in seen:
            raise DuplicatePoint(f"Participant coordinate {x} appears more than once", point=x)
        seen.add(x)
    return points


def lagrange_coefficient(my_point: int, all_points: Iterable[int], order: int = ORDER) -> int:
    """
    lambda_i evaluated at x = 0.

    my_point: 1-based coordinate of the party we calculate the coefficient for.
    all_points: 1-based coordinates of every party in the quorum, my_point included.
    """
    all_points = check_distinct(all_points)
    if my_point not in all_points:
        raise MismatchedParticipantSet(
            f"Point {my_point} is not part of the participant set {sorted(all_points)}",
            point=my_point, participants=sorted(all_points))
    num = 1
    denom = 1
    for x in all_points:
        if x == my_point:
            continue
        diff = (x - my_point) % order
        # distinct integers can still collide modulo a small order
        if diff == 0:
            raise SingularDenominator(
                f"Points {x} and {my_point} coincide modulo the field order",
                point=my_point, other=x)
        num = num * x % order
        denom = denom * diff % order
    return num * pow(denom, -1, order) % order


def interpolate_at_zero(shares: Iterable[Tuple[int, int]], order: int = ORDER) -> int:
    """Recover f(0) from (point, value) pairs."""
    shares = list(shares)
    points = [x for x, _ in shares]
    secret = 0
    for x, y in shares:
        secret = (secret + y * lagrange_coefficient(x, points, order)) % order
    return secret
