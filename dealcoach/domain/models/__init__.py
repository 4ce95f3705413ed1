"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    CoachMessageLevel,
    CoachMessageType,
    CommissionMode,
    DealType,
    PacingStatus,
    SubscriptionTier,
    TimeOfDay,
    UpsellWarningLevel,

    # Entities
    AchievementData,
    ActivityData,
    AlertData,
    CoachingContext,
    CoachingStats,
    CoachMessage,
    CoachMessageBody,
    Deal,
    DealCommission,
    EmptyData,
    FinanceReserve,
    MessageData,
    PacingData,
    PacingResult,
    PayPlan,
    PRODUCT_NAMES,
    ProductCommission,
    ProductStatus,
    UpsellState,
    UserProfile,
    VolumeBonus,
)

__all__ = [
    # Enums
    "CoachMessageLevel",
    "CoachMessageType",
    "CommissionMode",
    "DealType",
    "PacingStatus",
    "SubscriptionTier",
    "TimeOfDay",
    "UpsellWarningLevel",

    # Entities
    "AchievementData",
    "ActivityData",
    "AlertData",
    "CoachingContext",
    "CoachingStats",
    "CoachMessage",
    "CoachMessageBody",
    "Deal",
    "DealCommission",
    "EmptyData",
    "FinanceReserve",
    "MessageData",
    "PacingData",
    "PacingResult",
    "PayPlan",
    "PRODUCT_NAMES",
    "ProductCommission",
    "ProductStatus",
    "UpsellState",
    "UserProfile",
    "VolumeBonus",
]
