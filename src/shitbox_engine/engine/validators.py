"""Prerequisite and affordability checks.

Every check is a pure predicate over a state snapshot returning a
``ValidationResult``; a failed check carries a reason suitable for direct
display. Nothing here raises for an expected player shortfall.
"""

from __future__ import annotations

from collections.abc import Sequence

from shitbox_engine.core.logging import get_logger
from shitbox_engine.engine.calculations import format_number
from shitbox_engine.models.definitions import Prerequisite
from shitbox_engine.models.enums import PrerequisiteType
from shitbox_engine.models.game_state import GameState
from shitbox_engine.models.results import ActivityParams, ValidationResult


logger = get_logger(__name__)

_OWNERSHIP_MESSAGES = {
    "car": "You need to own a car.",
    "garage": "You need to own a garage.",
    "workshop": "You need to own a workshop.",
}

_ITEM_LABELS = {
    "engineParts": "engine parts",
    "bodyParts": "body parts",
}


def _numeric_minimum(prereq: Prerequisite, default: float) -> float:
    """Numeric minimum of a prerequisite; string minimums fall back to default."""
    if isinstance(prereq.minimum, (int, float)):
        return prereq.minimum
    return default


# =============================================================================
# Prerequisite Kinds
# =============================================================================


def check_money_prerequisite(state: GameState, prereq: Prerequisite) -> ValidationResult:
    minimum = _numeric_minimum(prereq, 0)
    money = state.player.money
    if money < minimum:
        return ValidationResult.fail(
            f"Not enough money. Need ${format_number(minimum)}, have ${format_number(money)}."
        )
    return ValidationResult.ok()


def check_stat_prerequisite(state: GameState, prereq: Prerequisite) -> ValidationResult:
    if prereq.stat is None:
        return ValidationResult.ok()

    minimum = _numeric_minimum(prereq, 0)
    level = state.player.stats.get(prereq.stat)
    if level < minimum:
        return ValidationResult.fail(
            f"{prereq.stat.value} too low. "
            f"Need {format_number(minimum)}, have {format_number(level)}."
        )
    return ValidationResult.ok()


def check_license_prerequisite(state: GameState, prereq: Prerequisite) -> ValidationResult:
    if not prereq.requirement:
        return ValidationResult.ok()
    if not state.player.has_license(prereq.requirement):
        return ValidationResult.fail(f"Missing license: {prereq.requirement}")
    return ValidationResult.ok()


def check_ownership_prerequisite(state: GameState, prereq: Prerequisite) -> ValidationResult:
    """Check possession of a car, garage or workshop.

    Unknown item types pass.
    """
    match prereq.item_type:
        case "car":
            owned = bool(state.inventory.cars)
        case "garage":
            owned = state.assets.garage is not None
        case "workshop":
            owned = state.assets.workshop is not None
        case _:
            return ValidationResult.ok()

    if not owned:
        return ValidationResult.fail(_OWNERSHIP_MESSAGES[prereq.item_type])
    return ValidationResult.ok()


def check_item_prerequisite(state: GameState, prereq: Prerequisite) -> ValidationResult:
    """Check a minimum count of a consumable part (default minimum 1)."""
    match prereq.item_type:
        case "engineParts":
            have = state.inventory.engine_parts
        case "bodyParts":
            have = state.inventory.body_parts
        case _:
            return ValidationResult.ok()

    minimum = _numeric_minimum(prereq, 1)
    if have < minimum:
        return ValidationResult.fail(
            f"Not enough {_ITEM_LABELS[prereq.item_type]}. "
            f"Need {format_number(minimum)}, have {have}."
        )
    return ValidationResult.ok()


def check_prerequisite(
    state: GameState,
    prereq: Prerequisite,
    params: ActivityParams,
) -> ValidationResult:
    """Check one prerequisite.

    Context prerequisites are resolved by the presentation layer and
    always pass here.
    """
    match prereq.type:
        case PrerequisiteType.MONEY:
            return check_money_prerequisite(state, prereq)
        case PrerequisiteType.STAT:
            return check_stat_prerequisite(state, prereq)
        case PrerequisiteType.LICENSE:
            return check_license_prerequisite(state, prereq)
        case PrerequisiteType.OWNERSHIP:
            return check_ownership_prerequisite(state, prereq)
        case PrerequisiteType.ITEM:
            return check_item_prerequisite(state, prereq)
        case PrerequisiteType.CONTEXT:
            return ValidationResult.ok()
    return ValidationResult.ok()


def check_prerequisites(
    state: GameState,
    prerequisites: Sequence[Prerequisite],
    params: ActivityParams,
) -> ValidationResult:
    """Check prerequisites in declared order.

    Args:
        state: Current game state.
        prerequisites: Prerequisites as declared by the activity.
        params: Caller parameters.

    Returns:
        The first failure verbatim, or a passing result.
    """
    for prereq in prerequisites:
        result = check_prerequisite(state, prereq, params)
        if not result.valid:
            logger.debug("Prerequisite failed", kind=prereq.type, reason=result.reason)
            return result
    return ValidationResult.ok()


# =============================================================================
# Affordability
# =============================================================================


def check_energy_available(state: GameState, required_energy: int) -> ValidationResult:
    energy = state.player.energy
    if energy < required_energy:
        return ValidationResult.fail(
            f"Not enough energy. Need {required_energy}, have {energy}."
        )
    return ValidationResult.ok()


def check_money_available(state: GameState, required_money: float) -> ValidationResult:
    money = state.player.money
    if money < required_money:
        return ValidationResult.fail(
            f"Not enough money. Need ${format_number(required_money)}, "
            f"have ${format_number(money)}."
        )
    return ValidationResult.ok()


__all__ = [
    "check_money_prerequisite",
    "check_stat_prerequisite",
    "check_license_prerequisite",
    "check_ownership_prerequisite",
    "check_item_prerequisite",
    "check_prerequisite",
    "check_prerequisites",
    "check_energy_available",
    "check_money_available",
]
