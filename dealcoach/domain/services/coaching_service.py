"""
COACHING SERVICE
Host-side orchestration around the pure coaching engines

Loads the user's deals and profile from the persistence collaborator, builds a
fresh CoachingContext, selects a message and stamps its identity. Deals
stored without a commission are priced with the user's pay plan first.
Coaching is advisory: if the deal history cannot be aggregated the user still
gets the fallback message for the slot.
"""

import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional, Protocol, Tuple

from dealcoach.domain.coaching.constants import EVENING_START_HOUR, MIDDAY_START_HOUR
from dealcoach.domain.exceptions import InvalidTierError, UserNotFoundError
from dealcoach.domain.models import (
    CoachingContext,
    CoachMessage,
    Deal,
    SubscriptionTier,
    TimeOfDay,
    UpsellState,
    UserProfile,
)
from dealcoach.domain.services.coaching_engine import fallback_message, generate_coaching_message
from dealcoach.domain.services.coaching_stats_engine import (
    calculate_coaching_stats,
    project_monthly_income,
)
from dealcoach.domain.services.commission_engine import CommissionEngine
from dealcoach.domain.services.upsell_engine import evaluate_upsell_state
from dealcoach.utils.time import now_local_naive

logger = logging.getLogger(__name__)


class DealRepository(Protocol):
    """Protocol for deal data access - ASYNC"""

    async def get_deals(self, user_id: str) -> List[Deal]:
        """Get every deal logged by a user"""
        ...


class UserRepository(Protocol):
    """Protocol for user data access - ASYNC"""

    async def get_user(self, user_id: str) -> Optional[UserProfile]:
        """Get a user's profile, None if unknown"""
        ...


def time_of_day_for(moment: datetime) -> TimeOfDay:
    """Slot for a local time: morning until noon, midday until 5pm"""
    if moment.hour < MIDDAY_START_HOUR:
        return TimeOfDay.MORNING
    if moment.hour < EVENING_START_HOUR:
        return TimeOfDay.MIDDAY
    return TimeOfDay.EVENING


class CoachingService:
    """
    Coaching Service
    Glue between persistence and the stateless coaching engines
    """

    def __init__(
        self,
        deal_repository: DealRepository,
        user_repository: UserRepository,
        clock: Callable[[], datetime] = now_local_naive,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ):
        self.deal_repository = deal_repository
        self.user_repository = user_repository
        self.clock = clock
        self.id_factory = id_factory

    async def build_context(self, user_id: str, now: Optional[datetime] = None) -> CoachingContext:
        """
        Load a user's deals and aggregate them

        Raises:
            UserNotFoundError: No such user
            InvalidTierError: The stored tier is not a known tier
            ValueError: A stored delivery date is malformed
        """
        user, deals = await self._load(user_id)
        return self._aggregate(user, deals, now or self.clock())

    async def get_message(
        self,
        user_id: str,
        time_of_day: Optional[TimeOfDay] = None,
        now: Optional[datetime] = None,
    ) -> CoachMessage:
        """
        Coaching message for a user, stamped and ready to persist

        Args:
            user_id: User to coach
            time_of_day: Requested slot, derived from the clock when omitted
            now: Snapshot of the current local time

        Raises:
            UserNotFoundError: No such user
            InvalidTierError: The stored tier is not a known tier
        """
        snapshot = now or self.clock()
        slot = time_of_day or time_of_day_for(snapshot)

        try:
            context = await self.build_context(user_id, now=snapshot)
        except (UserNotFoundError, InvalidTierError):
            raise
        except ValueError:
            logger.exception("Could not aggregate deals for user %s, sending fallback", user_id)
            body = fallback_message(slot)
        else:
            body = generate_coaching_message(context, slot)

        logger.info("Coach message for %s: %s/%s", user_id, body.type.value, body.level.value)
        return body.stamp(message_id=self.id_factory(), user_id=user_id, created_at=snapshot)

    async def get_upsell_state(self, user_id: str, now: Optional[datetime] = None) -> UpsellState:
        """
        Free-tier banner state from the user's total deal count and projection
        """
        user, deals = await self._load(user_id)
        context = self._aggregate(user, deals, now or self.clock())
        return evaluate_upsell_state(len(deals), project_monthly_income(context))

    async def _load(self, user_id: str) -> Tuple[UserProfile, List[Deal]]:
        user = await self.user_repository.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        deals = await self.deal_repository.get_deals(user_id)
        return user, deals

    @staticmethod
    def _aggregate(user: UserProfile, deals: List[Deal], now: datetime) -> CoachingContext:
        tier = SubscriptionTier.parse(user.tier)
        if user.pay_plan is not None:
            deals = CommissionEngine(user.pay_plan).with_commissions(deals)
        return calculate_coaching_stats(
            deals,
            monthly_goal=user.monthly_goal,
            tier=tier,
            now=now,
        )
