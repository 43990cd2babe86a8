"""
Tests
"""

import random

import pytest

from sharebridge.codec import encode_point, encode_scalar
from sharebridge.config import Config
from sharebridge.convert import shamir_quorum_to_additive
from sharebridge.curve import order, pub_key_from_priv
from sharebridge.dealer import deal_key
from sharebridge.errors import InsufficientShares, MismatchedParticipantSet, SimulationModeRequired
from sharebridge.lagrange import evaluation_point, interpolate_at_zero
from sharebridge.reconstruct import reconstruct_global_params
from sharebridge.record import PortableKeyShare
from sharebridge.resharing import (LocalTransport, ResharingParty, SubShare,
                                   reshare_additive_to_shamir, run_resharing)


def additive_records(n):
    shares = [random.randint(1, order - 1) for _ in range(n)]
    secret = sum(shares) % order
    y = encode_point(pub_key_from_priv(secret))
    records = [PortableKeyShare(i=i, t=n, n=n, x=encode_scalar(w), y=y) for i, w in enumerate(shares)]
    return secret, records


def test_refused_outside_simulation_mode():
    _, records = additive_records(3)
    with pytest.raises(SimulationModeRequired):
        reshare_additive_to_shamir(records, 2)


def test_simulation_mode_from_config(monkeypatch):
    _, records = additive_records(3)
    monkeypatch.setenv("SHAREBRIDGE_SIMULATION", "1")
    assert len(reshare_additive_to_shamir(records, 2)) == 3
    assert len(reshare_additive_to_shamir(records, 2, config=Config(simulation_mode=True))) == 3


@pytest.mark.parametrize("t,n", [(1, 3), (2, 3), (3, 5), (4, 4)])
def test_resharing_homomorphism(t, n):
    secret, records = additive_records(n)
    shamir = reshare_additive_to_shamir(records, t, trusted_dealer=True)
    assert [r.i for r in shamir] == list(range(n))
    assert all(r.t == t and r.n == n and r.y == records[0].y for r in shamir)
    quorum = random.sample(shamir, t)
    assert interpolate_at_zero((evaluation_point(r.i), r.secret()) for r in quorum) == secret


def test_reshared_shares_reconstruct_shared_key():
    secret, records = additive_records(4)
    shamir = reshare_additive_to_shamir(records, 2, trusted_dealer=True)
    params = reconstruct_global_params(shamir[2:])
    assert params.matches(records[0].y)
    assert params.shared_public_key == pub_key_from_priv(secret)


def test_shamir_additive_round_trip():
    secret = random.randint(1, order - 1)
    n, t = 4, 3
    shamir = deal_key(secret, t, n, trusted_dealer=True).records()
    additive = shamir_quorum_to_additive(shamir)
    reshared = reshare_additive_to_shamir(additive, t, trusted_dealer=True)
    back = shamir_quorum_to_additive(random.sample(reshared, t))
    assert sum(a.secret() for a in back) % order == secret


def test_input_order_does_not_matter():
    secret, records = additive_records(4)
    random.shuffle(records)
    shamir = reshare_additive_to_shamir(records, 3, trusted_dealer=True)
    assert interpolate_at_zero((evaluation_point(r.i), r.secret()) for r in shamir[:3]) == secret


def test_gap_in_indices_is_rejected():
    _, records = additive_records(4)
    with pytest.raises(MismatchedParticipantSet):
        reshare_additive_to_shamir(records[:2] + records[3:], 2, trusted_dealer=True)


def test_threshold_bounds():
    _, records = additive_records(3)
    with pytest.raises(InsufficientShares):
        reshare_additive_to_shamir(records, 4, trusted_dealer=True)
    with pytest.raises(ValueError):
        reshare_additive_to_shamir(records, 0, trusted_dealer=True)


def test_party_waits_for_every_sub_share():
    _, records = additive_records(3)
    parties = [ResharingParty(r, 2) for r in records]
    messages = [m for p in parties for m in p.deal()]
    receiver = parties[1]
    for msg in messages:
        if msg.recipient == 1 and msg.sender != 2:
            receiver.receive(msg)
    assert receiver.missing == [2]
    with pytest.raises(MismatchedParticipantSet) as exc:
        receiver.aggregate()
    assert exc.value.missing == [2]


def test_party_rejects_bad_messages():
    _, records = additive_records(3)
    party = ResharingParty(records[0], 2)
    with pytest.raises(MismatchedParticipantSet):
        party.receive(SubShare(1, 2, encode_scalar(1)))
    with pytest.raises(MismatchedParticipantSet):
        party.receive(SubShare(5, 0, encode_scalar(1)))
    party.receive(SubShare(1, 0, encode_scalar(1)))
    with pytest.raises(MismatchedParticipantSet):
        party.receive(SubShare(1, 0, encode_scalar(1)))


def test_transport_delivers_everything():
    _, records = additive_records(3)
    transport = LocalTransport()
    shares = run_resharing([ResharingParty(r, 2) for r in records], transport)
    assert transport.pending() == 0
    assert len(shares) == 3
