"""What a plant says back when it is cared for."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from numpy.random import Generator

from plant_sim.core.config import (
    FULL_GROWTH_LABEL,
    GROWTH_STAGE_LABELS,
    PRUNE_OVERDUE_GROWTH,
    PRUNE_TOO_EARLY_GROWTH,
    RESOURCE_TOO_LITTLE,
    RESOURCE_TOO_MUCH,
    TALK_CONTENT_HAPPINESS,
    TALK_LONELY_HAPPINESS,
)
from plant_sim.plants.plant import CareAction, Plant
from plant_sim.plants.species import profile_for


class ResponseType(str, Enum):
    TOO_MUCH = "too_much"
    TOO_LITTLE = "too_little"
    PERFECT = "perfect"


_RESPONSES: dict[CareAction, dict[ResponseType, list[str]]] = {
    CareAction.WATERING: {
        ResponseType.TOO_MUCH: [
            "Hey, I'm not a fish! Stop drowning me!",
            "Glub glub... too much water!",
            "I'm swimming here! Ease up on the H2O!",
        ],
        ResponseType.TOO_LITTLE: [
            "So... thirsty...",
            "Water, please! I'm turning into a raisin over here!",
            "Is this a desert? Because I feel like I'm in one!",
        ],
        ResponseType.PERFECT: [
            "Ahhh, just right! Thank you!",
            "Perfect amount of water. You're getting good at this!",
            "Hydration station! Thanks, friend!",
        ],
    },
    CareAction.FERTILIZING: {
        ResponseType.TOO_MUCH: [
            "Whoa! That's too much food! I'm stuffed!",
            "Easy on the nutrients!",
            "Too much fertilizer! My roots are burning!",
        ],
        ResponseType.TOO_LITTLE: [
            "I'm hungry! Could use some nutrients here.",
            "My soil feels empty. A little fertilizer would be nice.",
        ],
        ResponseType.PERFECT: [
            "Mmm, delicious nutrients! Thank you!",
            "Perfect amount of fertilizer. I feel stronger already!",
            "Yum! That's the good stuff!",
        ],
    },
    CareAction.SUNLIGHT: {
        ResponseType.TOO_MUCH: [
            "Too bright! I'm getting a sunburn over here!",
            "Ow, my leaves! Dial down the sun, please!",
            "I need sunglasses! It's too intense!",
        ],
        ResponseType.TOO_LITTLE: [
            "It's so dark... I can barely photosynthesize...",
            "More light, please! I'm fading away here.",
            "Could use some sunshine in my life. Literally.",
        ],
        ResponseType.PERFECT: [
            "Perfect amount of light! I'm photosynthesizing like a champ!",
            "This sunshine feels amazing on my leaves!",
            "Ah, just the right amount of light. I feel energized!",
        ],
    },
    CareAction.PRUNING: {
        ResponseType.TOO_MUCH: [
            "Ouch! Not so rough with the pruning!",
            "Hey! I needed those leaves!",
            "Careful with those scissors! You're taking too much!",
        ],
        ResponseType.TOO_LITTLE: [
            "I could use a little trim...",
            "Some of my leaves are looking shabby. A pruning would be nice.",
        ],
        ResponseType.PERFECT: [
            "Ahh, that feels better! Thanks for the trim!",
            "Perfect pruning! I feel lighter and healthier!",
            "Thanks for the haircut! I feel fabulous!",
        ],
    },
    CareAction.TALKING: {
        ResponseType.TOO_MUCH: [
            "Okay, okay, I heard you the first time!",
            "I love you too, but I need some quiet photosynthesis time.",
        ],
        ResponseType.TOO_LITTLE: [
            "Oh! You remembered me! I was getting lonely.",
            "Finally, someone to talk to...",
        ],
        ResponseType.PERFECT: [
            "I love our little chats!",
            "Tell me more! My leaves are all ears.",
            "Talking with you makes me feel like growing!",
        ],
    },
}


def _sassy(message: str) -> str:
    return re.sub(r"\.$", "!", message) + " 💅"


def _shy(message: str) -> str:
    return re.sub(r"!+", ".", message) + " 🥺"


def _cheerful(message: str) -> str:
    return message + " 😄"


PERSONALITY_MODIFIERS = {
    "sassy": _sassy,
    "shy": _shy,
    "cheerful": _cheerful,
}


@dataclass
class ResponseContext:
    """Everything the UI needs to show after a care action."""

    action: CareAction
    response_type: ResponseType
    message: str
    bonus_granted: bool = False
    unlocked_achievements: list = field(default_factory=list)


def classify(plant: Plant, action: CareAction) -> ResponseType:
    """Judge the plant's state for an action, before the action is applied."""
    action = CareAction(action)
    if action == CareAction.WATERING:
        level = plant.water_level
    elif action == CareAction.FERTILIZING:
        level = plant.fertilizer_level
    elif action == CareAction.SUNLIGHT:
        low, high = profile_for(plant.plant_type).sun_range
        if plant.sun_exposure > high:
            return ResponseType.TOO_MUCH
        if plant.sun_exposure < low:
            return ResponseType.TOO_LITTLE
        return ResponseType.PERFECT
    elif action == CareAction.PRUNING:
        # Young plants don't want pruning, overgrown ones need it
        if plant.growth_stage < PRUNE_TOO_EARLY_GROWTH:
            return ResponseType.TOO_MUCH
        if plant.growth_stage > PRUNE_OVERDUE_GROWTH:
            return ResponseType.TOO_LITTLE
        return ResponseType.PERFECT
    else:
        if plant.happiness > TALK_CONTENT_HAPPINESS:
            return ResponseType.TOO_MUCH
        if plant.happiness < TALK_LONELY_HAPPINESS:
            return ResponseType.TOO_LITTLE
        return ResponseType.PERFECT

    if level > RESOURCE_TOO_MUCH:
        return ResponseType.TOO_MUCH
    if level < RESOURCE_TOO_LITTLE:
        return ResponseType.TOO_LITTLE
    return ResponseType.PERFECT


def personalize(message: str, personality: str) -> str:
    modifier = PERSONALITY_MODIFIERS.get(personality)
    return modifier(message) if modifier else message


def plant_response(
    plant: Plant,
    action: CareAction,
    rng: Generator,
    response_type: Optional[ResponseType] = None,
) -> tuple[ResponseType, str]:
    """Pick a line for the action and dress it in the plant's personality."""
    if response_type is None:
        response_type = classify(plant, action)
    lines = _RESPONSES[CareAction(action)][response_type]
    line = lines[int(rng.integers(len(lines)))]
    return response_type, personalize(line, plant.personality)


def mood_response(plant: Plant) -> str:
    if plant.health < 30 and plant.happiness < 30:
        message = "I'm not feeling so good..."
    elif plant.health > 80 and plant.happiness > 80:
        message = "I'm thriving! Life is good!"
    elif plant.health < 50:
        message = "I could use some better care..."
    elif plant.happiness < 50:
        message = "I'm a bit lonely. Let's hang out more!"
    else:
        message = "I'm doing okay today."
    return personalize(message, plant.personality)


def growth_stage_label(growth_stage: float) -> str:
    for upper, label in GROWTH_STAGE_LABELS:
        if growth_stage < upper:
            return label
    return FULL_GROWTH_LABEL
