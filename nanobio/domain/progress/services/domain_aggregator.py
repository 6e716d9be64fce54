"""Domain service for per-domain completion statistics."""

from collections.abc import Collection, Iterable
from dataclasses import dataclass

from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.catalog.services.domain_derivation import DomainDeriver, explicit_domain
from nanobio.domain.common.percentage import round_half_up_percentage
from nanobio.domain.common.value_objects import ModuleId


@dataclass(frozen=True)
class DomainStat:
    """Completion figures for one domain label."""

    domain_name: str
    completed: int
    total: int
    percentage: int


def compute_domain_stats(
    catalog: Iterable[Module],
    completed_module_ids: Collection[ModuleId],
    derive: DomainDeriver = explicit_domain,
) -> list[DomainStat]:
    """
    Group the catalog by domain label and count completions per group.

    Args:
        catalog: All modules, in the order the caller fetched them
        completed_module_ids: Ids the user has completed; ids outside the
            catalog are ignored
        derive: Label strategy, explicit domain relation by default

    Returns:
        One DomainStat per non-empty group, highest percentage first; groups
        with equal percentage keep the order in which they were first seen
    """
    completed_ids = set(completed_module_ids)
    totals: dict[str, int] = {}
    completions: dict[str, int] = {}
    seen: set[ModuleId] = set()

    for module in catalog:
        # A module listed twice would otherwise count twice
        if module.id in seen:
            continue
        seen.add(module.id)

        label = derive(module)
        totals[label] = totals.get(label, 0) + 1
        if module.id in completed_ids:
            completions[label] = completions.get(label, 0) + 1

    stats = [
        DomainStat(
            domain_name=label,
            completed=completions.get(label, 0),
            total=total,
            percentage=round_half_up_percentage(completions.get(label, 0), total),
        )
        for label, total in totals.items()
        if total > 0
    ]
    return sorted(stats, key=lambda stat: stat.percentage, reverse=True)


def overall_mastery(total: int, completed: int) -> int:
    """Completed-over-total percentage for the whole catalog."""
    return round_half_up_percentage(min(completed, total), total)
