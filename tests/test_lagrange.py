import itertools
import random

import pytest

from sharebridge.curve import order
from sharebridge.errors import DuplicatePoint, MismatchedParticipantSet, SingularDenominator
from sharebridge.lagrange import evaluation_point, interpolate_at_zero, lagrange_coefficient
from sharebridge.polynomial import Polynomial

TOY_ORDER = 17


def test_evaluation_point_is_one_based():
    assert [evaluation_point(i) for i in range(4)] == [1, 2, 3, 4]
    with pytest.raises(MismatchedParticipantSet):
        evaluation_point(-1)


def test_toy_coefficients():
    # lambda_1 over {1, 3, 5} = 15/8, lambda_3 = -5/4, lambda_5 = 3/8
    inv8 = pow(8, -1, TOY_ORDER)
    assert lagrange_coefficient(1, [1, 3, 5], TOY_ORDER) == 15 * inv8 % TOY_ORDER
    assert lagrange_coefficient(3, [1, 3, 5], TOY_ORDER) == -5 * pow(4, -1, TOY_ORDER) % TOY_ORDER
    assert lagrange_coefficient(5, [1, 3, 5], TOY_ORDER) == 3 * inv8 % TOY_ORDER


def test_coefficients_sum_to_one():
    # interpolating the constant polynomial 1 gives 1
    points = random.sample(range(1, 50), 6)
    assert sum(lagrange_coefficient(x, points) for x in points) % order == 1


def test_single_party_quorum():
    assert lagrange_coefficient(4, [4]) == 1


def test_order_of_points_does_not_matter():
    points = [2, 7, 3, 9]
    shuffled = points[:]
    random.shuffle(shuffled)
    for x in points:
        assert lagrange_coefficient(x, points) == lagrange_coefficient(x, shuffled)


def test_duplicate_point():
    with pytest.raises(DuplicatePoint) as exc:
        lagrange_coefficient(1, [1, 2, 2])
    assert exc.value.point == 2


def test_singular_denominator():
    # 18 and 1 are distinct integers but the same element of F_17
    with pytest.raises(SingularDenominator):
        lagrange_coefficient(1, [1, 18], TOY_ORDER)


def test_point_outside_participant_set():
    with pytest.raises(MismatchedParticipantSet):
        lagrange_coefficient(4, [1, 2, 3])


def test_interpolate_at_zero_any_subset():
    t, n = 3, 6
    poly = Polynomial.random(random.randint(1, order - 1), t)
    shares = [(evaluation_point(i), y) for i, y in enumerate(poly.shares(n))]
    for subset in itertools.combinations(shares, t):
        assert interpolate_at_zero(subset) == poly.secret
