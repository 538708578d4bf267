"""Core package for the tournament hub onboarding bot.

This module exposes the onboarding components so that consumers of the package
can simply import them from ``hub_bot``.  The Discord runtime itself lives in
:mod:`hub_bot.bot` and is started by :mod:`hub_bot.main`.
"""

from .config import Settings, load_settings
from .core.dialogue import Dialogue
from .core.exchange import AuthorizationExchange
from .core.fanout import MembershipFanout
from .core.workflow import OnboardingWorkflow

__all__ = [
    "AuthorizationExchange",
    "Dialogue",
    "MembershipFanout",
    "OnboardingWorkflow",
    "Settings",
    "load_settings",
]
