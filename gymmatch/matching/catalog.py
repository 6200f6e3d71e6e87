"""Hardcoded option catalog: configuration only."""

from __future__ import annotations

from dataclasses import asdict, dataclass

from gymmatch.matching.models import FitnessLevel, Weekday


@dataclass(frozen=True, slots=True)
class CatalogOption:
    id: str
    label: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class SchedulePreset:
    id: str
    start: str  # "HH:MM"
    end: str


FITNESS_LEVELS: dict[str, CatalogOption] = {
    FitnessLevel.beginner.value: CatalogOption(
        id="beginner", label="Beginner", description="Just starting my fitness journey"
    ),
    FitnessLevel.intermediate.value: CatalogOption(
        id="intermediate", label="Intermediate", description="1-3 years of consistent training"
    ),
    FitnessLevel.advanced.value: CatalogOption(
        id="advanced", label="Advanced", description="3+ years, compete or train seriously"
    ),
}

WORKOUT_STYLES: dict[str, CatalogOption] = {
    "powerlifting": CatalogOption(id="powerlifting", label="Powerlifting", description="Squat, bench, deadlift focused"),
    "bodybuilding": CatalogOption(id="bodybuilding", label="Bodybuilding", description="Hypertrophy and aesthetics"),
    "crossfit": CatalogOption(id="crossfit", label="CrossFit", description="High-intensity functional fitness"),
    "cardio": CatalogOption(id="cardio", label="Cardio", description="Running, cycling, rowing"),
    "yoga": CatalogOption(id="yoga", label="Yoga", description="Flexibility and mindfulness"),
    "pilates": CatalogOption(id="pilates", label="Pilates", description="Core strength and stability"),
    "boxing": CatalogOption(id="boxing", label="Boxing/MMA", description="Combat sports training"),
    "sports": CatalogOption(id="sports", label="Sports", description="Basketball, soccer, tennis"),
}

FITNESS_GOALS: dict[str, CatalogOption] = {
    "muscle": CatalogOption(id="muscle", label="Build Muscle"),
    "weight_loss": CatalogOption(id="weight_loss", label="Lose Weight"),
    "endurance": CatalogOption(id="endurance", label="Endurance"),
    "strength": CatalogOption(id="strength", label="Get Stronger"),
    "flexibility": CatalogOption(id="flexibility", label="Flexibility"),
    "general_fitness": CatalogOption(id="general_fitness", label="General Fitness"),
}

SCHEDULE_PRESETS: dict[str, SchedulePreset] = {
    "morning": SchedulePreset(id="morning", start="06:00", end="09:00"),
    "midday": SchedulePreset(id="midday", start="11:00", end="14:00"),
    "evening": SchedulePreset(id="evening", start="17:00", end="20:00"),
    "night": SchedulePreset(id="night", start="20:00", end="23:00"),
}


def list_catalog() -> dict[str, list[dict]]:
    return {
        "fitness_levels": [asdict(o) for o in FITNESS_LEVELS.values()],
        "workout_styles": [asdict(o) for o in WORKOUT_STYLES.values()],
        "fitness_goals": [asdict(o) for o in FITNESS_GOALS.values()],
        "weekdays": [d.value for d in Weekday],
        "schedule_presets": [asdict(p) for p in SCHEDULE_PRESETS.values()],
    }
