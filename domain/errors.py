"""
Error types raised by the rules engine.
"""


class RulesError(Exception):
    """Base class for every error raised while building or running a ruleset."""


class ConfigurationError(RulesError, ValueError):
    """
    A ruleset, pipeline, map or settings object could not be constructed.

    Always raised before the first turn is resolved, never mid-turn.
    """


class ConsistencyFault(RulesError):
    """
    An invariant was found broken while resolving a turn.

    Examples: a living snake with an empty body, or a snake eliminated by
    collision without a recorded culprit. The game cannot continue.
    """
