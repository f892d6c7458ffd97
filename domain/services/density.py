from __future__ import annotations

from collections.abc import Sequence

from domain.config import DEFAULT_CURRENT_YEAR
from domain.models import DensitySample, PersonRecord, YearRange


def sample_alive_counts(
    people: Sequence[PersonRecord],
    year_range: YearRange,
    current_year: int = DEFAULT_CURRENT_YEAR,
    max_samples: int = 180,
) -> list[DensitySample]:
    span = year_range.span or 1
    step = max(1, span // max_samples)
    samples: list[DensitySample] = []
    for year in range(year_range.min_year, year_range.max_year + 1, step):
        count = sum(
            1
            for person in people
            if person.birth_year <= year <= person.effective_end(current_year)
        )
        samples.append(DensitySample(year=year, count=count))
    return samples


def peak_sample(samples: Sequence[DensitySample]) -> DensitySample:
    if not samples:
        msg = "peak_sample requires at least one sample"
        raise ValueError(msg)
    best = samples[0]
    for sample in samples[1:]:
        if sample.count > best.count:
            best = sample
    return best
