"""
Placement Statistics Service

Folds placement records (company, students placed, year, branch) into the
three summaries shown on the analysis screen:

- company-wise: order of first appearance
- branch-wise: order of first appearance
- year-wise: ascending by year

Pure functions, no I/O. Every distinct key yields exactly one row and the
group sums always add up to the overall total.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Hashable, Iterable, List, Tuple


@dataclass(frozen=True)
class PlacementAnalysis:
    company_wise: List[Tuple[str, int]] = field(default_factory=list)
    branch_wise: List[Tuple[str, int]] = field(default_factory=list)
    year_wise: List[Tuple[int, int]] = field(default_factory=list)
    total_placed: int = 0

    @property
    def has_data(self) -> bool:
        """False means the view should render its "no data" state."""
        return bool(self.company_wise)


def _group_sum(records: Iterable[Any], key: Callable[[Any], Hashable]) -> List[Tuple[Any, int]]:
    # dicts keep insertion order, so the first occurrence fixes the position
    totals: Dict[Hashable, int] = {}
    for record in records:
        k = key(record)
        totals[k] = totals.get(k, 0) + int(record.students_placed)
    return list(totals.items())


def company_wise(records: Iterable[Any]) -> List[Tuple[str, int]]:
    """Students placed per company, in order of first appearance."""
    return _group_sum(records, lambda r: r.company_name)


def branch_wise(records: Iterable[Any]) -> List[Tuple[str, int]]:
    """Students placed per branch, in order of first appearance."""
    return _group_sum(records, lambda r: r.branch)


def year_wise(records: Iterable[Any]) -> List[Tuple[int, int]]:
    """Students placed per year, ascending by year."""
    return sorted(_group_sum(records, lambda r: int(r.year)), key=lambda item: item[0])


def total_placed(records: Iterable[Any]) -> int:
    return sum(int(r.students_placed) for r in records)


def summarize(records: Iterable[Any]) -> PlacementAnalysis:
    """Run all folds over the same input."""
    records = list(records)
    return PlacementAnalysis(
        company_wise=company_wise(records),
        branch_wise=branch_wise(records),
        year_wise=year_wise(records),
        total_placed=total_placed(records),
    )
