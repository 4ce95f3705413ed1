"""
COACHING ENGINE (ENGINE-2)
Select one coaching message for a requested time slot

RESPONSIBILITIES:
- Scan ALL_RULES in priority order
- Apply tier gating
- Let ALERT / ACHIEVEMENT preempt the requested slot
- Fall back to a generic message

RULES:
❌ No identity, no timestamps (caller stamps)
❌ No hidden state, no randomness
✅ Exactly one message per call
✅ Same context + slot -> same message
"""

import logging
from typing import Sequence

from dealcoach.domain.coaching.constants import FALLBACK_TEXT
from dealcoach.domain.coaching.rules import ALL_RULES, CoachingRule
from dealcoach.domain.models import (
    CoachingContext,
    CoachMessageBody,
    CoachMessageLevel,
    EmptyData,
    TimeOfDay,
)

logger = logging.getLogger(__name__)


def generate_coaching_message(
    context: CoachingContext,
    time_of_day: TimeOfDay,
    rules: Sequence[CoachingRule] = ALL_RULES,
) -> CoachMessageBody:
    """
    Pick the message for a time slot

    Args:
        context: Coaching context for the user
        time_of_day: Requested slot (MORNING / MIDDAY / EVENING)
        rules: Rules in priority order

    Returns:
        CoachMessageBody
    """
    slot = time_of_day.message_type

    for rule in rules:
        if not rule.is_available_for(context.tier):
            continue
        if not rule.should_trigger(context):
            continue

        message = rule.generate_message(context)

        if message.type.is_priority:
            logger.debug("Rule %s preempted %s slot with %s", rule.name, slot.value, message.type.value)
            return message

        if message.type == slot:
            logger.debug("Rule %s selected for %s slot", rule.name, slot.value)
            return message

    return fallback_message(time_of_day)


def fallback_message(time_of_day: TimeOfDay) -> CoachMessageBody:
    """Generic encouragement when no rule matches the slot"""
    return CoachMessageBody(
        type=time_of_day.message_type,
        level=CoachMessageLevel.INFO,
        text=FALLBACK_TEXT,
        data=EmptyData(),
    )
