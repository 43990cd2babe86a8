"""
Typed projections between native key-share objects and PortableKeyShare.

Two shapes of threshold library are covered:

* ShamirKeyShare: 0-based party index, a min_signers threshold, the VSS
  commitments of the sharing polynomial and every party's public share.
* AdditiveKeyShare: shares keyed by owner id, one public point per owner and
  no commitments. The shared key is the sum of the public points when the
  shares are additive.

Both expose the same structural interface (ThresholdKeyShare). Re-embedding
only ever overwrites the secret share, public shares, commitments and shared
public key; anything in metadata is carried over untouched.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional, Protocol, runtime_checkable

import structlog

from .codec import encode_point, encode_scalar, truncate_hex
from .curve import Point, ec_add, ec_sum, pub_key_from_priv
from .errors import MismatchedParticipantSet, SharedKeyMismatch
from .reconstruct import GlobalParams, reconstruct_global_params
from .record import PortableKeyShare

log = structlog.get_logger()


@runtime_checkable
class ThresholdKeyShare(Protocol):
    @property
    def i(self) -> int: ...

    @property
    def min_signers(self) -> int: ...

    @property
    def x(self) -> int: ...

    @property
    def public_shares(self) -> List[Point]: ...

    @property
    def commitments(self) -> List[Point]: ...

    @property
    def shared_public_key(self) -> Point: ...


@dataclass(frozen=True)
class ShamirKeyShare:
    i: int
    min_signers: int
    x: int
    public_shares: List[Point]
    commitments: List[Point]
    shared_public_key: Point
    metadata: Dict = field(default_factory=dict)

    @property
    def n(self) -> int:
        return len(self.public_shares)


@dataclass(frozen=True)
class AdditiveKeyShare:
    owner: int
    secret: int
    public: Dict[int, Point]
    metadata: Dict = field(default_factory=dict)

    @property
    def i(self) -> int:
        return self.owner

    @property
    def min_signers(self) -> int:
        # n-of-n
        return len(self.public)

    @property
    def x(self) -> int:
        return self.secret

    @property
    def public_shares(self) -> List[Point]:
        return [self.public[k] for k in sorted(self.public)]

    @property
    def commitments(self) -> List[Point]:
        return []

    @property
    def shared_public_key(self) -> Point:
        return global_public_key(self)


def export_shamir(share: ThresholdKeyShare) -> PortableKeyShare:
    """Project any threshold share onto the interchange record."""
    return PortableKeyShare(
        i=share.i,
        t=share.min_signers,
        n=len(share.public_shares),
        x=encode_scalar(share.x),
        y=encode_point(share.shared_public_key),
    )


def embed_shamir(template: ShamirKeyShare,
                 refreshed: PortableKeyShare,
                 params: Optional[GlobalParams] = None) -> ShamirKeyShare:
    """Overwrite the secret (and, given params, the global parameters) of a template share."""
    if refreshed.i != template.i:
        raise MismatchedParticipantSet(
            f"Refreshed share for party {refreshed.i} applied to party {template.i}",
            index=template.i, actual=refreshed.i)
    changes = {"x": refreshed.secret()}
    if params is not None:
        changes.update(
            public_shares=list(params.public_shares),
            commitments=list(params.commitments),
            # C_0 is the constant term of the polynomial, i.e. the shared key
            shared_public_key=params.shared_public_key,
        )
    return replace(template, **changes)


def update_shamir_shares(templates: Iterable[ShamirKeyShare],
                         refreshed: Iterable[PortableKeyShare]) -> List[ShamirKeyShare]:
    """
    Rebuild global parameters from the refreshed Shamir records and embed
    them into every template. A refresh never changes the key, so C_0 has to
    equal both the records' key and every template's key.
    """
    refreshed = list(refreshed)
    params = reconstruct_global_params(refreshed)
    actual = params.commitments_hex()[0]
    expected = refreshed[0].y
    if not params.matches(expected):
        raise SharedKeyMismatch(
            f"Reconstructed key {truncate_hex(actual)} does not match {truncate_hex(expected)}",
            expected=expected, actual=actual)

    by_index = {r.i: r for r in refreshed}
    updated = []
    for template in templates:
        if not params.matches(template.shared_public_key):
            raise SharedKeyMismatch(
                f"Refreshed shares belong to key {truncate_hex(actual)}, "
                f"party {template.i} holds a share of another key",
                index=template.i, expected=encode_point(template.shared_public_key), actual=actual)
        if template.i not in by_index:
            raise MismatchedParticipantSet(
                f"Missing refreshed data for party {template.i}", index=template.i)
        updated.append(embed_shamir(template, by_index[template.i], params))
    log.info("shamir_shares_updated", parties=len(updated), key=truncate_hex(expected))
    return updated


def export_additive(share: AdditiveKeyShare, y_hex: str, t: Optional[int] = None) -> PortableKeyShare:
    """The library does not record the shared key or a threshold; the caller supplies them."""
    n = len(share.public)
    return PortableKeyShare(
        i=share.owner,
        t=n if t is None else t,
        n=n,
        x=encode_scalar(share.secret),
        y=y_hex,
    )


def import_additive(record: PortableKeyShare, metadata: Optional[Dict] = None) -> AdditiveKeyShare:
    """
    Build a native share that only knows its own public point. merge_public_shares
    fills in the others once every party has published.
    """
    secret = record.secret()
    return AdditiveKeyShare(
        owner=record.i,
        secret=secret,
        public={record.i: pub_key_from_priv(secret)},
        metadata=dict(metadata or {}),
    )


def merge_public_shares(shares: Iterable[AdditiveKeyShare]) -> List[AdditiveKeyShare]:
    shares = list(shares)
    public = {}
    for s in shares:
        public[s.owner] = public_share_point(s, s.owner)
    return [replace(s, public=dict(public)) for s in shares]


def public_share_point(share: AdditiveKeyShare, owner: int) -> Point:
    try:
        return share.public[owner]
    except KeyError:
        raise MismatchedParticipantSet(
            f"No public share for party {owner}", index=owner) from None


def apply_public_share_changes(share: AdditiveKeyShare, changes: Dict[int, Point]) -> AdditiveKeyShare:
    """
    Apply the public side of a key refresh: X_k' = X_k + delta_k for every
    owner k named in changes. The deltas of a refresh sum to the identity,
    so the global public key stays put.
    """
    unknown = sorted(set(changes) - set(share.public))
    if unknown:
        raise MismatchedParticipantSet(
            f"Refresh changes name unknown parties {unknown}",
            index=share.owner, unknown=unknown)
    public = {k: ec_add(X, changes[k]) if k in changes else X
              for k, X in share.public.items()}
    return replace(share, public=public)


def global_public_key(share: AdditiveKeyShare) -> Point:
    return ec_sum(share.public[k] for k in sorted(share.public))
