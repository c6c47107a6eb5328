"""Processing counters and seed-pattern summaries for a program's addresses."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Iterable, Sequence

from pdascope.models import PdaInfo, SeedValue

_MAX_EXAMPLES = 5


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ProcessingStats:
    """Running totals kept while transactions are processed."""

    transactions_processed: int = 0
    pdas_discovered: int = 0
    interactions_recorded: int = 0
    errors_encountered: int = 0
    processing_start_time: datetime = field(default_factory=_now)

    def processing_duration(self) -> timedelta:
        return _now() - self.processing_start_time

    def transactions_per_second(self) -> float:
        """Throughput over whole elapsed seconds; zero until a second has passed."""
        seconds = int(self.processing_duration().total_seconds())
        if seconds > 0:
            return self.transactions_processed / seconds
        return 0.0


@dataclass
class PdaPatternAnalysis:
    """How often one seed layout occurs among a program's addresses."""

    pattern: str
    frequency: int
    program_id: str
    examples: list[str]


def extract_seed_pattern(seeds: Iterable[SeedValue]) -> str:
    """Colon-joined seed type names, or "empty" when there are none."""
    types = [seed.seed_type() for seed in seeds]
    return ":".join(types) if types else "empty"


def analyze_pda_patterns(program_id: str, pdas: Sequence[PdaInfo]) -> list[PdaPatternAnalysis]:
    """Count seed layouts of the program's addresses, most frequent first."""
    own = [pda for pda in pdas if pda.program_id == program_id]
    frequency = Counter(extract_seed_pattern(pda.seeds) for pda in own)
    examples = [pda.address for pda in own[:_MAX_EXAMPLES]]

    patterns = [
        PdaPatternAnalysis(
            pattern=pattern,
            frequency=count,
            program_id=program_id,
            examples=list(examples),
        )
        for pattern, count in frequency.items()
    ]
    patterns.sort(key=lambda p: p.frequency, reverse=True)
    return patterns