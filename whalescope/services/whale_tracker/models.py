"""Data models for whale tracking."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TransactionType(str, Enum):
    """Semantic transaction type derived from provider labels."""

    SWAP = "swap"
    TRANSFER = "transfer"
    STAKE = "stake"
    UNSTAKE = "unstake"
    UNKNOWN = "unknown"


class Direction(str, Enum):
    """Direction of a movement relative to the whale wallet."""

    IN = "in"
    OUT = "out"


class WhaleBehavior(str, Enum):
    """Behavior classification of a whale for one token."""

    UNKNOWN = "unknown"
    ACCUMULATING = "accumulating"
    DISTRIBUTING = "distributing"
    HOLDING = "holding"


class PatternType(str, Enum):
    ACCUMULATION = "accumulation"
    DISTRIBUTION = "distribution"


class Sentiment(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class RawTokenTransfer:
    """Token transfer leg as reported by the enhanced transaction feed."""

    mint: str
    from_user_account: str
    to_user_account: str
    token_amount: float

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawTokenTransfer":
        return cls(
            mint=data.get("mint", ""),
            from_user_account=data.get("fromUserAccount") or "",
            to_user_account=data.get("toUserAccount") or "",
            token_amount=float(data.get("tokenAmount") or 0),
        )


@dataclass(frozen=True)
class RawNativeTransfer:
    """Native SOL transfer leg, amount in lamports."""

    from_user_account: str
    to_user_account: str
    amount: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawNativeTransfer":
        return cls(
            from_user_account=data.get("fromUserAccount") or "",
            to_user_account=data.get("toUserAccount") or "",
            amount=int(data.get("amount") or 0),
        )


@dataclass(frozen=True)
class RawTransaction:
    """Provider-shaped transaction. Read-only input to the tracker."""

    signature: str
    timestamp: int  # seconds since epoch
    fee: int = 0  # lamports
    type: Optional[str] = None
    source: Optional[str] = None
    fee_payer: Optional[str] = None
    token_transfers: List[RawTokenTransfer] = field(default_factory=list)
    native_transfers: List[RawNativeTransfer] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawTransaction":
        """Build a transaction from a Helius enhanced-transaction payload.

        Args:
            data: One element of the ``/addresses/{address}/transactions`` response

        Returns:
            RawTransaction instance
        """
        return cls(
            signature=data["signature"],
            timestamp=int(data.get("timestamp") or 0),
            fee=int(data.get("fee") or 0),
            type=data.get("type"),
            source=data.get("source"),
            fee_payer=data.get("feePayer"),
            token_transfers=[
                RawTokenTransfer.from_dict(t) for t in data.get("tokenTransfers") or []
            ],
            native_transfers=[
                RawNativeTransfer.from_dict(t) for t in data.get("nativeTransfers") or []
            ],
        )


@dataclass(frozen=True)
class TokenHolder:
    """Token account balance returned by the provider."""

    address: str
    amount: int
    decimals: int
    ui_amount: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "amount": self.amount,
            "decimals": self.decimals,
            "uiAmount": self.ui_amount,
        }


@dataclass(frozen=True)
class TokenAmount:
    """A token leg of a parsed transaction."""

    mint: str
    amount: float
    decimals: int
    ui_amount: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mint": self.mint,
            "amount": self.amount,
            "decimals": self.decimals,
            "uiAmount": self.ui_amount,
        }


@dataclass(frozen=True)
class ParsedTransaction:
    """Transaction classified relative to a tracked wallet."""

    signature: str
    timestamp: int  # seconds since epoch
    type: TransactionType
    source: str
    fee: float  # SOL
    success: bool = True
    token_in: Optional[TokenAmount] = None
    token_out: Optional[TokenAmount] = None
    transfer: Optional[TokenAmount] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "signature": self.signature,
            "timestamp": self.timestamp,
            "type": self.type.value,
            "source": self.source,
            "fee": self.fee,
            "success": self.success,
        }
        if self.token_in:
            data["tokenIn"] = self.token_in.to_dict()
        if self.token_out:
            data["tokenOut"] = self.token_out.to_dict()
        if self.transfer:
            data["transfer"] = self.transfer.to_dict()
        return data


@dataclass(frozen=True)
class WhaleMovement:
    """A significant movement of a tracked token by a whale."""

    id: str
    timestamp: int  # milliseconds since epoch
    whale: str
    type: TransactionType
    token_mint: str
    amount: float
    usd_value: float
    signature: str
    direction: Direction

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "whale": self.whale,
            "type": self.type.value,
            "tokenMint": self.token_mint,
            "amount": self.amount,
            "usdValue": self.usd_value,
            "signature": self.signature,
            "direction": self.direction.value,
        }


@dataclass
class WhaleProfile:
    """Whale holding a tracked token. Updated in place by analysis."""

    address: str
    token_mint: str
    holdings: float
    usd_value: float
    first_seen: int  # milliseconds since epoch
    last_activity: int  # milliseconds since epoch
    behavior: WhaleBehavior = WhaleBehavior.UNKNOWN
    recent_tx_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "tokenMint": self.token_mint,
            "holdings": self.holdings,
            "usdValue": self.usd_value,
            "firstSeen": self.first_seen,
            "lastActivity": self.last_activity,
            "behavior": self.behavior.value,
            "recentTxCount": self.recent_tx_count,
        }


@dataclass(frozen=True)
class Pattern:
    """Accumulation or distribution pattern detected in a trade window."""

    whale: str
    token_mint: str
    type: PatternType
    tx_count: int
    total_amount: float
    total_usd_value: float
    start_time: int  # milliseconds since epoch
    end_time: int  # milliseconds since epoch
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "whale": self.whale,
            "tokenMint": self.token_mint,
            "type": self.type.value,
            "txCount": self.tx_count,
            "totalAmount": self.total_amount,
            "totalUsdValue": self.total_usd_value,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "confidence": self.confidence,
        }


@dataclass
class WhaleAnalysis:
    """Result of analyzing one whale for one token."""

    behavior: WhaleBehavior
    patterns: List[Pattern] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "behavior": self.behavior.value,
            "patterns": [p.to_dict() for p in self.patterns],
        }


@dataclass
class MovementStats:
    """Aggregate statistics over a token's movements in a trailing window."""

    total_movements: int
    total_volume_usd: float
    inflows: int
    outflows: int
    inflow_volume_usd: float
    outflow_volume_usd: float
    largest_movement: Optional[WhaleMovement]
    average_movement_usd: float
    swaps: int
    transfers: int
    stakes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalMovements": self.total_movements,
            "totalVolumeUsd": self.total_volume_usd,
            "inflows": self.inflows,
            "outflows": self.outflows,
            "inflowVolumeUsd": self.inflow_volume_usd,
            "outflowVolumeUsd": self.outflow_volume_usd,
            "largestMovement": self.largest_movement.to_dict() if self.largest_movement else None,
            "averageMovementUsd": self.average_movement_usd,
            "swaps": self.swaps,
            "transfers": self.transfers,
            "stakes": self.stakes,
        }


@dataclass
class NetFlow:
    """Net inflow/outflow of a token in a trailing window."""

    net_flow_usd: float
    net_flow_amount: float
    sentiment: Sentiment

    def to_dict(self) -> Dict[str, Any]:
        return {
            "netFlowUsd": self.net_flow_usd,
            "netFlowAmount": self.net_flow_amount,
            "sentiment": self.sentiment.value,
        }


@dataclass
class ActivitySummary:
    """Whale counts by behavior and total holdings for a token."""

    total_whales: int
    accumulating: int
    distributing: int
    holding: int
    total_holdings_usd: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalWhales": self.total_whales,
            "accumulating": self.accumulating,
            "distributing": self.distributing,
            "holding": self.holding,
            "totalHoldingsUsd": self.total_holdings_usd,
        }
