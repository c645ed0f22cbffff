"""Brewmaster spell ids referenced by the stagger analysis."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Spell:
    id: int
    name: str


STAGGER = Spell(id=115069, name="Stagger")
PURIFYING_BREW = Spell(id=119582, name="Purifying Brew")

# Purify marker to pool point matching, and click-to-zoom half-width
DEFAULT_PURIFY_TOLERANCE_MS = 500
DEFAULT_ZOOM_WINDOW_MS = 10000

# WCL event types the stagger pipeline understands
ADD_STAGGER = "addstagger"
REMOVE_STAGGER = "removestagger"
DAMAGE = "damage"
HEAL = "heal"
DEATH = "death"

STAGGER_EVENT_TYPES: frozenset[str] = frozenset({ADD_STAGGER, REMOVE_STAGGER})
PLAYER_EVENT_TYPES: frozenset[str] = frozenset({DAMAGE, HEAL, DEATH})
