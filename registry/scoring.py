"""
Trust score calculation for registry tools.

Nine boolean quality flags are weighted and summed into a 0-100 score. Four of them are
required: missing any required flag forces grade F, regardless of the total.

Grades:
- A: 80%+ with all required flags
- B: 60-79% with all required flags
- F: below 60%, or any required flag missing
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from typing import Any, Literal

Grade = Literal["a", "b", "f"]

# flag name -> (weight, required)
WEIGHTS: dict[str, tuple[int, bool]] = {
    "is_validated": (20, True),
    "has_tools": (15, True),
    "has_deployment": (15, True),
    "has_readme": (10, True),
    "has_deploy_more_than_manual": (12, False),
    "has_license": (8, False),
    "has_prompts": (8, False),
    "has_resources": (8, False),
    "is_claimed": (4, False),
}

FLAG_NAMES: tuple[str, ...] = tuple(WEIGHTS)
REQUIRED_FLAGS: tuple[str, ...] = tuple(name for name, (_, required) in WEIGHTS.items() if required)
MAX_SCORE = sum(weight for weight, _ in WEIGHTS.values())
MAX_REQUIRED_SCORE = sum(WEIGHTS[name][0] for name in REQUIRED_FLAGS)

GRADE_A_THRESHOLD = 80
GRADE_B_THRESHOLD = 60

_DESCRIPTIONS: dict[str, tuple[str, str]] = {
    "is_validated": ("Validated", "Tool has been verified by the registry maintainers"),
    "has_tools": ("Has Tools", "Tool definitions are properly specified"),
    "has_deployment": ("Has Deployment", "Deployment options are available"),
    "has_readme": ("Documentation", "README or documentation is provided"),
    "has_deploy_more_than_manual": ("Automated Deployment", "Has automated deployment options beyond manual"),
    "has_license": ("License", "Open source license is specified"),
    "has_prompts": ("Prompts", "Prompt templates are included"),
    "has_resources": ("Resources", "Additional resources are provided"),
    "is_claimed": ("Claimed", "Tool is claimed by its developer"),
}

_GRADE_LABELS = {"a": "Excellent", "b": "Good", "f": "Needs Improvement"}
_GRADE_COLORS = {"a": "#52c41a", "b": "#faad14", "f": "#ff4d4f"}


@dataclass(frozen=True)
class ScoreFlags:
    """The nine quality flags. Unset flags are False."""

    is_validated: bool = False
    has_tools: bool = False
    has_deployment: bool = False
    has_readme: bool = False
    has_deploy_more_than_manual: bool = False
    has_license: bool = False
    has_prompts: bool = False
    has_resources: bool = False
    is_claimed: bool = False

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> ScoreFlags:
        """Build flags from a partial mapping; anything other than True counts as False."""
        data = data or {}
        return cls(**{name: data.get(name) is True for name in FLAG_NAMES})

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreResult:
    grade: Grade
    total_score: int
    max_score: int
    percentage: int
    required_score: int
    max_required_score: int
    required_percentage: int


@dataclass(frozen=True)
class ScoreItem:
    """One row of a score breakdown, for display."""

    key: str
    title: str
    description: str
    weight: int
    required: bool
    check: bool


def _percent(score: int, maximum: int) -> int:
    """100 * score / maximum rounded half-up, in integer arithmetic."""
    if maximum <= 0:
        return 0
    return (200 * score + maximum) // (2 * maximum)


def compute_score(flags: ScoreFlags) -> ScoreResult:
    total_score = 0
    required_score = 0
    for name, (weight, required) in WEIGHTS.items():
        if getattr(flags, name) is not True:
            continue
        total_score += weight
        if required:
            required_score += weight

    percentage = _percent(total_score, MAX_SCORE)
    required_percentage = _percent(required_score, MAX_REQUIRED_SCORE)

    grade: Grade
    if required_percentage < 100:
        grade = "f"
    elif percentage >= GRADE_A_THRESHOLD:
        grade = "a"
    elif percentage >= GRADE_B_THRESHOLD:
        grade = "b"
    else:
        grade = "f"

    return ScoreResult(
        grade=grade,
        total_score=total_score,
        max_score=MAX_SCORE,
        percentage=percentage,
        required_score=required_score,
        max_required_score=MAX_REQUIRED_SCORE,
        required_percentage=required_percentage,
    )


def merge_score_flags(current: ScoreFlags, changes: Mapping[str, Any]) -> ScoreFlags:
    """Overlay a partial update on the current flags.

    Keys that are absent or None keep the current value; unknown keys are ignored.
    """
    merged = current.as_dict()
    for name in FLAG_NAMES:
        value = changes.get(name)
        if value is not None:
            merged[name] = value is True
    return ScoreFlags(**merged)


def has_flag_changes(changes: Mapping[str, Any]) -> bool:
    """True if a partial update sets at least one quality flag."""
    return any(changes.get(name) is not None for name in FLAG_NAMES)


def score_breakdown(flags: ScoreFlags) -> list[ScoreItem]:
    items = []
    for f in fields(flags):
        weight, required = WEIGHTS[f.name]
        title, description = _DESCRIPTIONS[f.name]
        items.append(
            ScoreItem(
                key=f.name,
                title=title,
                description=description,
                weight=weight,
                required=required,
                check=getattr(flags, f.name) is True,
            )
        )
    return items


def grade_label(grade: str) -> str:
    return _GRADE_LABELS.get(grade, "Unknown")


def grade_color(grade: str) -> str:
    return _GRADE_COLORS.get(grade, "#8c8c8c")
