"""Exception hierarchy for the onboarding bot.

``ConfigError`` is fatal and stops the process at startup.  Everything derived
from :class:`OnboardingError` is an expected anomaly: it abandons one unit of
work (a workflow run, a callback request) and is logged, while the rest of the
bot keeps running.
"""

from __future__ import annotations


class ConfigError(RuntimeError):
    """A required setting is missing or the hub guild cannot be found."""


class CommunitiesNotReady(RuntimeError):
    """Hub and satellites were read before the bot became ready."""


class OnboardingError(Exception):
    """Base class for expected, non-fatal onboarding anomalies."""


class ConversationAbandoned(OnboardingError):
    """The member did not reply before the conversation timed out."""

    def __init__(self, asker_id: int, prompt: str) -> None:
        super().__init__(f"No reply from {asker_id} to {prompt!r}")
        self.asker_id = asker_id
        self.prompt = prompt


class AuthorizationFailed(OnboardingError):
    """The grant code could not be exchanged or the identity not resolved."""


class MemberNotFound(OnboardingError):
    """The authorizing user is not a member of the hub guild."""


class RoleNotFound(OnboardingError):
    """The hub member holds no tournament role."""
