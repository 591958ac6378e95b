"""
Plan configuration for generation quota tiers.

Single source of truth for per-tier limits. Lives in core/ so both the
service and API layers can import it without circular dependencies.
"""

from enum import Enum


class QuotaTier(str, Enum):
    FREE = "free"
    PRO = "pro"


# AI generations allowed per tier (static, not reset automatically)
QUOTA_LIMITS = {
    QuotaTier.FREE.value: 10,
    QuotaTier.PRO.value: 100,
}

# Dashboard heuristic: writing time saved per stored article
HOURS_SAVED_PER_ARTICLE = 2


def get_quota_limit(tier: str) -> int:
    """Limit for a tier; unknown tiers get the free allowance."""
    return QUOTA_LIMITS.get(tier, QUOTA_LIMITS[QuotaTier.FREE.value])
