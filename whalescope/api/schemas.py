"""Response models for the whale, movement and signal endpoints."""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from whalescope.api.pagination import PaginationMeta


class ResponseMeta(BaseModel):
    """Metadata attached to every data response."""

    dataSource: str = Field(..., description="Where the data came from: helius or mock")
    timestamp: int = Field(..., description="Response time (unix ms)")


class MetaResponse(BaseModel):
    """Base for responses carrying a ``_meta`` block."""

    model_config = ConfigDict(populate_by_name=True)

    meta: ResponseMeta = Field(..., alias="_meta", description="Response metadata")


class Holding(BaseModel):
    """One of a whale's top token holdings."""

    mint: str = Field(..., description="Token mint address")
    symbol: str = Field(..., description="Token symbol")
    name: str = Field(..., description="Token name")
    amount: Optional[str] = Field(None, description="Raw amount in base units")
    uiAmount: float = Field(..., description="Amount in whole tokens")
    valueUsd: float = Field(..., description="Holding value in USD")
    portfolioPercent: float = Field(..., description="Share of the portfolio, 0-100")


class Whale(BaseModel):
    """A whale wallet."""

    address: str = Field(..., description="Wallet address")
    label: Optional[str] = Field(None, description="Known name of the wallet")
    totalValueUsd: float = Field(..., description="Portfolio value in USD")
    tokenCount: int = Field(..., description="Number of tokens held")
    tier: Literal["mega", "large", "medium"] = Field(..., description="Size tier")
    firstSeen: int = Field(..., description="First seen (unix ms)")
    lastActive: int = Field(..., description="Last activity (unix ms)")
    tags: List[str] = Field(..., description="Descriptive tags")
    topHoldings: List[Holding] = Field(..., description="Largest holdings")
    behavior: Optional[str] = Field(None, description="Classified behavior of a discovered whale")


class Movement(BaseModel):
    """A large token movement by a whale."""

    txHash: str = Field(..., description="Transaction signature")
    slot: int = Field(..., description="Slot of the transaction, 0 when unknown")
    timestamp: int = Field(..., description="Block time (unix ms)")
    wallet: str = Field(..., description="Whale wallet address")
    tokenMint: str = Field(..., description="Token mint address")
    tokenSymbol: str = Field(..., description="Token symbol")
    type: Literal["buy", "sell", "transfer_in", "transfer_out"] = Field(..., description="Movement type")
    amount: float = Field(..., description="Amount in whole tokens")
    valueUsd: float = Field(..., description="Value in USD")
    significance: int = Field(..., description="Significance score, 0-100")
    protocol: Optional[str] = Field(None, description="Protocol the movement went through")


class Evidence(BaseModel):
    type: str = Field(..., description="Kind of evidence")
    description: str = Field(..., description="What was observed")
    reference: Optional[str] = Field(None, description="Related transaction signature")


class Signal(BaseModel):
    """A notable pattern in a whale's activity."""

    id: str = Field(..., description="Signal id")
    type: Literal["accumulation", "distribution", "new_position", "exit", "unusual_activity"] = Field(
        ..., description="Signal type")
    wallet: str = Field(..., description="Whale wallet address")
    tokenMint: str = Field(..., description="Token mint address")
    tokenSymbol: str = Field(..., description="Token symbol")
    strength: int = Field(..., description="Signal strength, 0-100")
    confidence: int = Field(..., description="Detection confidence, 0-100")
    description: str = Field(..., description="Human readable summary")
    detectedAt: int = Field(..., description="Detection time (unix ms)")
    evidence: List[Evidence] = Field(..., description="Supporting evidence")


class TrackedProfile(BaseModel):
    """A whale discovered for one token."""

    address: str = Field(..., description="Wallet address")
    tokenMint: str = Field(..., description="Token the whale was discovered for")
    holdings: float = Field(..., description="Amount held in whole tokens")
    usdValue: float = Field(..., description="Holding value in USD")
    firstSeen: int = Field(..., description="First seen (unix ms)")
    lastActivity: int = Field(..., description="Last activity (unix ms)")
    behavior: str = Field(..., description="Classified behavior")
    recentTxCount: int = Field(..., description="Transactions seen in the last analysis")


class RecordedMovement(BaseModel):
    """A movement as kept by the movement store."""

    id: str
    timestamp: int
    whale: str
    type: str
    tokenMint: str
    amount: float
    usdValue: float
    signature: str
    direction: Literal["in", "out"]


class WhaleCounts(BaseModel):
    totalWhales: int = Field(..., description="Tracked whales for the token")
    accumulating: int
    distributing: int
    holding: int
    totalHoldingsUsd: float = Field(..., description="Combined holdings in USD")


class MovementSummary(BaseModel):
    totalMovements: int
    totalVolumeUsd: float
    inflows: int
    outflows: int
    inflowVolumeUsd: float
    outflowVolumeUsd: float
    largestMovement: Optional[RecordedMovement] = None
    averageMovementUsd: float
    swaps: int
    transfers: int
    stakes: int


class FlowSummary(BaseModel):
    netFlowUsd: float = Field(..., description="Inflow minus outflow in USD")
    netFlowAmount: float = Field(..., description="Signed net amount in whole tokens")
    sentiment: Literal["bullish", "bearish", "neutral"]


class WhaleList(MetaResponse):
    whales: List[Whale] = Field(..., description="Whales on this page")
    pagination: PaginationMeta


class WhaleDetail(MetaResponse):
    whale: Whale = Field(..., description="The whale")
    profiles: List[TrackedProfile] = Field(..., description="Tokens the whale was discovered for")
    recentMovements: List[Movement] = Field(..., description="Latest movements, at most 10")
    signals: List[Signal] = Field(..., description="Latest signals, at most 5")


class TokenSummary(MetaResponse):
    tokenMint: str = Field(..., description="Token mint address")
    tokenSymbol: str = Field(..., description="Token symbol")
    windowHours: float = Field(..., description="Trailing window in hours")
    whales: WhaleCounts
    movements: MovementSummary
    netFlow: FlowSummary


class MovementList(MetaResponse):
    movements: List[Movement] = Field(..., description="Movements on this page")
    pagination: PaginationMeta


class MovementDetail(MetaResponse):
    movement: Movement = Field(..., description="The movement")
    whale: Optional[Whale] = Field(None, description="Directory entry of the wallet, if known")
    relatedMovements: List[Movement] = Field(..., description="Same wallet and token within 24 hours")


class SignalList(MetaResponse):
    signals: List[Signal] = Field(..., description="Signals on this page")
    pagination: PaginationMeta


class WalletSignals(MetaResponse):
    wallet: str = Field(..., description="Wallet address")
    label: Optional[str] = Field(None, description="Known name of the wallet")
    behavior: Optional[str] = Field(None, description="Behavior from live analysis")
    signals: List[Signal] = Field(..., description="Signals on this page")
    pagination: PaginationMeta
