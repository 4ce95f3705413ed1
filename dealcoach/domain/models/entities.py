"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from dealcoach.domain.exceptions import InvalidTierError


class SubscriptionTier(str, Enum):
    """Subscription level, ordered FREE < PRO < GURU"""
    FREE = "FREE"
    PRO = "PRO"
    GURU = "GURU"

    @property
    def rank(self) -> int:
        """Explicit ordinal used for minimum-tier checks"""
        return _TIER_RANK[self]

    def meets(self, minimum: "SubscriptionTier") -> bool:
        """Check if this tier is at least the given minimum"""
        return self.rank >= minimum.rank

    @classmethod
    def parse(cls, value) -> "SubscriptionTier":
        """
        Convert a raw value to a tier.

        None means the user never subscribed and maps to FREE.
        Anything else that is not a known tier is rejected.
        """
        if value is None:
            return cls.FREE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            raise InvalidTierError(value) from None


_TIER_RANK = {
    SubscriptionTier.FREE: 0,
    SubscriptionTier.PRO: 1,
    SubscriptionTier.GURU: 2,
}


class CoachMessageType(str, Enum):
    """Kind of coaching message"""
    MORNING = "MORNING"
    MIDDAY = "MIDDAY"
    EVENING = "EVENING"
    ALERT = "ALERT"
    ACHIEVEMENT = "ACHIEVEMENT"

    @property
    def is_priority(self) -> bool:
        """ALERT and ACHIEVEMENT preempt the requested time slot"""
        return self in (CoachMessageType.ALERT, CoachMessageType.ACHIEVEMENT)


class TimeOfDay(str, Enum):
    """Slots a caller can request a message for"""
    MORNING = "MORNING"
    MIDDAY = "MIDDAY"
    EVENING = "EVENING"

    @property
    def message_type(self) -> CoachMessageType:
        return CoachMessageType(self.value)


class CoachMessageLevel(str, Enum):
    """Severity shown next to a message"""
    INFO = "INFO"
    WARNING = "WARNING"
    SUCCESS = "SUCCESS"


class PacingStatus(str, Enum):
    """Where the month stands against a linear pace"""
    AHEAD = "AHEAD"
    ON_TRACK = "ON_TRACK"
    BEHIND = "BEHIND"


class UpsellWarningLevel(str, Enum):
    """Free-tier banner severity"""
    NONE = "NONE"
    SOFT = "SOFT"
    HARD = "HARD"


class DealType(str, Enum):
    """Vehicle category of a deal"""
    NEW = "new"
    USED = "used"
    CERTIFIED = "certified"


class CommissionMode(str, Enum):
    """How a commission component is paid"""
    FLAT = "flat"
    PERCENTAGE = "percentage"


# ---------------------------------------------------------------------------
# Deals
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProductStatus:
    """Back-end products sold with a deal"""
    vsc: bool = False
    gap: bool = False
    maintenance: bool = False
    accessories: bool = False
    tire_and_wheel: bool = False
    appearance_package: bool = False
    key_replacement: bool = False

    def attached(self) -> Tuple[str, ...]:
        """Names of the products sold on this deal"""
        return tuple(f.name for f in fields(self) if getattr(self, f.name))


PRODUCT_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(ProductStatus))


@dataclass(frozen=True)
class Deal:
    """Logged vehicle deal - Immutable"""
    id: str
    delivery_date: Optional[str]
    customer_name: str = ""
    type: DealType = DealType.NEW
    year: str = ""
    make: str = ""
    model: str = ""
    front_gross: float = 0.0
    back_gross: float = 0.0
    finance_gross: Optional[float] = None
    pack: float = 0.0
    flat: float = 0.0
    spiffs: float = 0.0
    products: ProductStatus = field(default_factory=ProductStatus)
    chargeback: float = 0.0
    note: str = ""
    created_at: Optional[str] = None

    # Overrides
    override_front: Optional[float] = None
    override_back: Optional[float] = None
    override_reserve: Optional[float] = None

    # Filled by the commission engine or supplied by the caller
    commission: Optional[float] = None

    @property
    def delivery_day(self) -> Optional[str]:
        """Calendar day prefix (YYYY-MM-DD) of the delivery date"""
        if not self.delivery_date:
            return None
        return self.delivery_date.split("T")[0]


# ---------------------------------------------------------------------------
# Pay plan
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProductCommission:
    """Commission paid for one back-end product"""
    mode: CommissionMode = CommissionMode.FLAT
    flat_amount: float = 0.0
    percent_of_gross: float = 0.0


@dataclass(frozen=True)
class FinanceReserve:
    """Share of the bank reserve paid to the salesperson"""
    mode: CommissionMode = CommissionMode.FLAT
    value: float = 0.0


@dataclass(frozen=True)
class VolumeBonus:
    """Flat bonus earned once monthly units reach a threshold"""
    units: int
    bonus: float

    def __post_init__(self):
        if self.units < 1:
            raise ValueError("Volume bonus threshold must be at least 1 unit")


@dataclass(frozen=True)
class PayPlan:
    """Salesperson pay plan - Immutable"""
    front_commission_percent: float = 0.0
    back_commission_percent: float = 0.0
    finance_reserve: FinanceReserve = field(default_factory=FinanceReserve)
    pack: float = 0.0
    flat_rate: float = 0.0
    spiffs_rate: float = 100.0
    volume_bonuses: Tuple[VolumeBonus, ...] = ()
    product_commission: Dict[str, ProductCommission] = field(default_factory=dict)

    def __post_init__(self):
        unknown = set(self.product_commission) - set(PRODUCT_NAMES)
        if unknown:
            raise ValueError(f"Unknown products in pay plan: {sorted(unknown)}")


@dataclass(frozen=True)
class DealCommission:
    """Commission breakdown for a single deal"""
    front: float
    back: float
    reserve: float
    flat: float
    spiffs: float
    products: float
    chargeback: float
    total: float


@dataclass(frozen=True)
class UserProfile:
    """User record fields the coaching core reads"""
    id: str
    monthly_goal: int
    tier: SubscriptionTier = SubscriptionTier.FREE
    email: str = ""
    first_name: Optional[str] = None
    # Prices deals stored without a commission
    pay_plan: Optional[PayPlan] = None


# ---------------------------------------------------------------------------
# Coaching
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CoachingStats:
    """Pacing aggregates for the current and previous month"""
    monthly_goal: int
    deals_this_month: int
    deals_last_month: int
    commission_this_month: float
    commission_last_month: float
    avg_commission_this_month: float
    avg_commission_last_month: float
    days_elapsed: int
    days_in_month: int
    today_deals: int
    recent_days_without_deals: int


@dataclass(frozen=True)
class CoachingContext:
    """Everything a coaching rule may look at - recomputed per request"""
    tier: SubscriptionTier
    stats: CoachingStats


@dataclass(frozen=True)
class PacingResult:
    """Month-to-date pace against a linear goal"""
    status: PacingStatus
    pace_delta: float
    days_remaining: int
    required_daily_deals: float
    expected_pace: float


@dataclass(frozen=True)
class AchievementData:
    deals_this_month: int
    monthly_goal: int


@dataclass(frozen=True)
class AlertData:
    recent_days_without_deals: int


@dataclass(frozen=True)
class PacingData:
    pacing: PacingResult


@dataclass(frozen=True)
class ActivityData:
    today_deals: int
    pacing: PacingResult


@dataclass(frozen=True)
class EmptyData:
    pass


MessageData = Union[AchievementData, AlertData, PacingData, ActivityData, EmptyData]


@dataclass(frozen=True)
class CoachMessageBody:
    """Coaching output before the caller assigns identity"""
    type: CoachMessageType
    level: CoachMessageLevel
    text: str
    data: MessageData = field(default_factory=EmptyData)

    def stamp(self, message_id: str, user_id: str, created_at: datetime) -> "CoachMessage":
        """Attach identity and timestamp for persistence/display"""
        return CoachMessage(
            id=message_id,
            user_id=user_id,
            created_at=created_at,
            type=self.type,
            level=self.level,
            text=self.text,
            data=self.data,
        )


@dataclass(frozen=True)
class CoachMessage:
    """Coaching message with identity - Immutable"""
    id: str
    user_id: str
    created_at: datetime
    type: CoachMessageType
    level: CoachMessageLevel
    text: str
    data: MessageData


# ---------------------------------------------------------------------------
# Upsell
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class UpsellState:
    """What the free-tier warning banner should show"""
    warning_level: UpsellWarningLevel
    deals_remaining: Optional[int] = None
    projected_income: Optional[float] = None
    title: Optional[str] = None
    message: Optional[str] = None
    cta_label: Optional[str] = None

    @property
    def show(self) -> bool:
        return self.warning_level != UpsellWarningLevel.NONE
