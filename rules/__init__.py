"""
Rules engine: stage functions, the stage registry and pipeline, and the
ruleset variants built from them.
"""

from .pipeline import STAGE_REGISTRY, Pipeline, get_stage
from .rulesets import (
    RULESETS,
    ConstrictorRuleset,
    RoyaleRuleset,
    SoloRuleset,
    SquadRuleset,
    StandardRuleset,
)
from .builder import RulesetBuilder, get_ruleset

__all__ = [
    'STAGE_REGISTRY',
    'Pipeline',
    'get_stage',
    'RULESETS',
    'StandardRuleset',
    'SoloRuleset',
    'SquadRuleset',
    'RoyaleRuleset',
    'ConstrictorRuleset',
    'RulesetBuilder',
    'get_ruleset',
]
