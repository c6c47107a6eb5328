"""Detection and matching of seed patterns among derived addresses."""

from __future__ import annotations

import math
import uuid
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from pdascope.models import PdaInfo, PdaPattern, SeedTemplate, SeedValue

SPL_TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
METAPLEX_PROGRAM_ID = "metaqbxxUerdq28cj1RbAWkYQm3ybzjb6a8bt518x1s"

_MIN_PATTERN_FREQUENCY = 2
_MAX_EXAMPLES = 5
_CONFIDENCE_CAP = 95.0


@dataclass
class DetectedPattern:
    """A seed layout seen repeatedly among a program's addresses."""

    program_id: str
    pattern_signature: str
    seed_template: list[SeedTemplate]
    frequency: int
    confidence: float
    examples: list[str]
    id: uuid.UUID = field(default_factory=uuid.uuid4)


@dataclass
class PatternMatch:
    """How well an address's seeds fit a known pattern."""

    pattern_id: uuid.UUID
    pattern_name: str
    match_score: float
    matched_seeds: list[SeedValue]


@dataclass
class PatternSuggestion:
    """The most common seed type at one seed position."""

    seed_index: int
    suggested_type: str
    frequency: int
    confidence: float


class PatternDetector:
    """Finds recurring seed layouts and compares addresses with known ones."""

    def __init__(self) -> None:
        self.known_patterns: dict[str, list[PdaPattern]] = {}
        self.detected_patterns: dict[str, list[DetectedPattern]] = {}

    def add_known_pattern(self, pattern: PdaPattern) -> None:
        self.known_patterns.setdefault(pattern.program_id, []).append(pattern)

    def detect_patterns(self, program_id: str, pdas: Sequence[PdaInfo]) -> list[DetectedPattern]:
        """Group the program's addresses by seed signature and report repeated ones."""
        groups: dict[str, list[PdaInfo]] = defaultdict(list)
        for pda in pdas:
            if pda.program_id == program_id:
                groups[self.create_pattern_signature(pda.seeds)].append(pda)

        detected = [
            DetectedPattern(
                program_id=program_id,
                pattern_signature=signature,
                seed_template=self.create_seed_template(examples[0].seeds),
                frequency=len(examples),
                confidence=self.calculate_confidence(len(examples), len(pdas)),
                examples=[pda.address for pda in examples[:_MAX_EXAMPLES]],
            )
            for signature, examples in groups.items()
            if len(examples) >= _MIN_PATTERN_FREQUENCY
        ]
        detected.sort(key=lambda p: (p.frequency, p.confidence), reverse=True)

        self.detected_patterns[program_id] = list(detected)
        return detected

    def match_against_known_patterns(self, pda: PdaInfo) -> list[PatternMatch]:
        """Score the address against every known pattern of its program, best first."""
        matches = []
        for pattern in self.known_patterns.get(pda.program_id, []):
            score = self.calculate_pattern_match(pda.seeds, pattern.seeds_template)
            if score is not None:
                matches.append(
                    PatternMatch(
                        pattern_id=pattern.id,
                        pattern_name=pattern.pattern_name,
                        match_score=score,
                        matched_seeds=list(pda.seeds),
                    )
                )
        matches.sort(key=lambda m: m.match_score, reverse=True)
        return matches

    def generate_pattern_suggestions(
        self, program_id: str, pdas: Sequence[PdaInfo]
    ) -> list[PatternSuggestion]:
        """Suggest the most common seed type for each seed position."""
        by_position: dict[int, Counter[str]] = defaultdict(Counter)
        for pda in pdas:
            if pda.program_id == program_id:
                for index, seed in enumerate(pda.seeds):
                    by_position[index][seed.seed_type()] += 1

        if not by_position:
            return []

        suggestions = []
        for seed_index in range(max(by_position) + 1):
            type_counts = by_position.get(seed_index)
            if not type_counts:
                continue
            most_common_type, count = type_counts.most_common(1)[0]
            suggestions.append(
                PatternSuggestion(
                    seed_index=seed_index,
                    suggested_type=most_common_type,
                    frequency=count,
                    confidence=self.calculate_type_confidence(type_counts),
                )
            )
        return suggestions

    def create_pattern_signature(self, seeds: Sequence[SeedValue]) -> str:
        if not seeds:
            return "empty"
        return ":".join(seed.seed_type() for seed in seeds)

    def create_seed_template(self, seeds: Sequence[SeedValue]) -> list[SeedTemplate]:
        return [
            SeedTemplate(
                name=f"seed_{index}",
                seed_type=seed.seed_type(),
                description=f"Seed parameter {index}",
                is_variable=True,
            )
            for index, seed in enumerate(seeds)
        ]

    def calculate_confidence(self, frequency: int, total_pdas: int) -> float:
        """Share of all addresses as a percentage, capped at 95."""
        if total_pdas == 0:
            return 0.0
        return min(frequency / total_pdas * 100.0, _CONFIDENCE_CAP)

    def calculate_pattern_match(
        self, seeds: Sequence[SeedValue], template: Sequence[SeedTemplate]
    ) -> float | None:
        """Percentage of positions whose seed type agrees, or None on a length mismatch."""
        if len(seeds) != len(template):
            return None
        if not seeds:
            return math.nan
        matches = sum(
            seed.seed_type() == slot.seed_type for seed, slot in zip(seeds, template)
        )
        return matches / len(seeds) * 100.0

    def calculate_type_confidence(self, type_counts: Mapping[str, int]) -> float:
        total = sum(type_counts.values())
        if total == 0:
            return 0.0
        return max(type_counts.values()) / total * 100.0


def _template(name: str, seed_type: str, description: str, is_variable: bool) -> SeedTemplate:
    return SeedTemplate(name=name, seed_type=seed_type, description=description, is_variable=is_variable)


class PatternRegistry:
    """A pattern detector preloaded with patterns of well-known programs."""

    def __init__(self) -> None:
        self.detector = PatternDetector()
        self.builtin_patterns: dict[str, list[PdaPattern]] = {}
        self.register_builtin_patterns()

    def register_builtin_patterns(self) -> None:
        self.add_pattern(
            PdaPattern(
                program_id=SPL_TOKEN_PROGRAM_ID,
                pattern_name="Token Account",
                seeds_template=[
                    _template("owner", "pubkey", "Token account owner", True),
                    _template("mint", "pubkey", "Token mint", True),
                ],
                description="Standard SPL token associated account",
            )
        )
        self.add_pattern(
            PdaPattern(
                program_id=METAPLEX_PROGRAM_ID,
                pattern_name="Metadata Account",
                seeds_template=[
                    _template("prefix", "string", "Metadata prefix", False),
                    _template("program_id", "pubkey", "Metadata program ID", False),
                    _template("mint", "pubkey", "NFT mint", True),
                ],
                description="NFT metadata account",
            )
        )

    def add_pattern(self, pattern: PdaPattern) -> None:
        self.detector.add_known_pattern(pattern)
        self.builtin_patterns.setdefault(pattern.program_id, []).append(pattern)

    def detect_patterns(self, program_id: str, pdas: Sequence[PdaInfo]) -> list[DetectedPattern]:
        return self.detector.detect_patterns(program_id, pdas)

    def match_pda(self, pda: PdaInfo) -> list[PatternMatch]:
        return self.detector.match_against_known_patterns(pda)

    def get_suggestions(self, program_id: str, pdas: Iterable[PdaInfo]) -> list[PatternSuggestion]:
        return self.detector.generate_pattern_suggestions(program_id, list(pdas))