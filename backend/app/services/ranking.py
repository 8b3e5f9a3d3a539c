"""
Bid ranking for reverse auctions.

Bids are ordered by delivery time (fewest days first), then cost per unit
(cheapest first), then submission time (earliest first). Rank 1 is the best
bid and the default winner candidate. Functions here are pure: they never
touch the session and accept any object exposing the Bid attributes.
"""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from app.utils import as_utc, normalize_email

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class RankedBid:
    rank: int
    bid: Any


@dataclass(frozen=True)
class RankSummary:
    rank: int  # 0 when the vendor has no bid
    total_bids: int
    leading_delivery_time_days: int
    leading_cost_per_unit: float
    vendor_bid: Optional[Any] = None


def bid_sort_key(bid: Any) -> tuple[int, float, datetime]:
    submitted = as_utc(getattr(bid, "submitted_at", None)) or _EPOCH
    return (int(bid.delivery_time_days), float(bid.cost_per_unit), submitted)


def rank_bids(bids: Iterable[Any]) -> list[RankedBid]:
    ordered = sorted(bids, key=bid_sort_key)
    return [RankedBid(rank=i + 1, bid=b) for i, b in enumerate(ordered)]


def leader(bids: Iterable[Any]) -> Optional[Any]:
    ranked = rank_bids(bids)
    return ranked[0].bid if ranked else None


def vendor_rank(bids: Iterable[Any], vendor_email: str | None) -> RankSummary:
    """Where a vendor stands among all bids of one auction."""
    ranked = rank_bids(bids)
    if not ranked:
        return RankSummary(rank=0, total_bids=0, leading_delivery_time_days=0, leading_cost_per_unit=0.0)
    email = normalize_email(vendor_email)
    mine = next((r for r in ranked if email and normalize_email(r.bid.vendor_email) == email), None)
    top = ranked[0].bid
    return RankSummary(
        rank=mine.rank if mine else 0,
        total_bids=len(ranked),
        leading_delivery_time_days=int(top.delivery_time_days),
        leading_cost_per_unit=float(top.cost_per_unit),
        vendor_bid=mine.bid if mine else None,
    )
