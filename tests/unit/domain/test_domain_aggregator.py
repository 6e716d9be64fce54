"""Tests for per-domain mastery statistics and answer accuracy."""

import pytest

from nanobio.domain.catalog.entities.module import Module
from nanobio.domain.catalog.services.domain_derivation import UNCATEGORIZED, title_domain
from nanobio.domain.common.value_objects import ModuleId, OptionLabel, QuestionId, UserId
from nanobio.domain.progress.entities.quiz_attempt import QuizAttempt
from nanobio.domain.progress.services import (
    accuracy_percentage,
    compute_domain_stats,
    overall_mastery,
)


def _module(id: str, domain: str | None, title: str | None = None) -> Module:
    return Module(id=ModuleId(id), title=title or f"Module {id}", slug=id, domain=domain)


def _attempt(correct: bool) -> QuizAttempt:
    return QuizAttempt(
        user_id=UserId("u"),
        question_id=QuestionId("q"),
        selected_option=OptionLabel("a"),
        is_correct=correct,
    )


class TestComputeDomainStats:
    def test_groups_and_counts(self) -> None:
        catalog = [
            _module("1", "Imaging"),
            _module("2", "Imaging"),
            _module("3", "Imaging"),
            _module("4", "Genetics"),
        ]
        stats = compute_domain_stats(catalog, {ModuleId("1"), ModuleId("4")})

        assert [(s.domain_name, s.completed, s.total, s.percentage) for s in stats] == [
            ("Genetics", 1, 1, 100),
            ("Imaging", 1, 3, 33),
        ]

    def test_totals_cover_catalog(self) -> None:
        catalog = [_module(str(i), ["A", "B", None][i % 3]) for i in range(10)]
        stats = compute_domain_stats(catalog, set())

        assert sum(s.total for s in stats) == 10
        assert all(s.total > 0 for s in stats)
        assert all(0 <= s.completed <= s.total for s in stats)

    def test_missing_domain_goes_to_sentinel(self) -> None:
        stats = compute_domain_stats([_module("1", None)], {ModuleId("1")})
        assert stats[0].domain_name == UNCATEGORIZED
        assert stats[0].percentage == 100

    def test_ties_keep_first_seen_order(self) -> None:
        catalog = [_module("1", "Zeta"), _module("2", "Alpha"), _module("3", "Mu")]
        stats = compute_domain_stats(catalog, set())
        assert [s.domain_name for s in stats] == ["Zeta", "Alpha", "Mu"]

    def test_sorted_by_percentage_descending(self) -> None:
        catalog = [_module("1", "A"), _module("2", "A"), _module("3", "B"), _module("4", "C")]
        stats = compute_domain_stats(catalog, {ModuleId("1"), ModuleId("3")})
        percentages = [s.percentage for s in stats]
        assert percentages == sorted(percentages, reverse=True)
        assert stats[0].domain_name == "B"

    def test_duplicate_module_counted_once(self) -> None:
        module = _module("1", "A")
        stats = compute_domain_stats([module, module], [ModuleId("1"), ModuleId("1")])
        assert (stats[0].completed, stats[0].total) == (1, 1)

    def test_ignores_completions_outside_catalog(self) -> None:
        stats = compute_domain_stats([_module("1", "A")], {ModuleId("ghost")})
        assert stats[0].completed == 0

    def test_empty_catalog(self) -> None:
        assert compute_domain_stats([], {ModuleId("1")}) == []

    @pytest.mark.parametrize(
        ("size", "domains", "completed", "duplicates"),
        [
            (1, ["A"], ["0"], 0),
            (5, ["A", "B"], ["0", "2", "4"], 0),
            (6, ["A", None, "B"], ["1", "ghost", "other"], 2),
            (7, [None], ["0", "3", "6", "99"], 3),
            (8, ["A", "B", "C", "D"], [], 1),
            (9, ["Imaging", "Genetics", None], [str(i) for i in range(12)], 4),
        ],
    )
    def test_completed_sum_matches_catalog_intersection(
        self, size: int, domains: list[str | None], completed: list[str], duplicates: int
    ) -> None:
        modules = [_module(str(i), domains[i % len(domains)]) for i in range(size)]
        catalog = modules + modules[:duplicates]
        completed_ids = [ModuleId(id) for id in completed]

        stats = compute_domain_stats(catalog, completed_ids)

        catalog_ids = {module.id for module in catalog}
        assert sum(s.completed for s in stats) == len(catalog_ids & set(completed_ids))
        assert sum(s.total for s in stats) == len(catalog_ids)

    def test_title_strategy(self) -> None:
        catalog = [_module("1", "Stored", title="Electron Microscopy")]
        stats = compute_domain_stats(catalog, set(), derive=title_domain)
        assert stats[0].domain_name == "Imaging"


class TestOverallMastery:
    def test_percentage(self) -> None:
        assert overall_mastery(3, 2) == 67

    def test_empty_catalog(self) -> None:
        assert overall_mastery(0, 0) == 0

    def test_capped_at_total(self) -> None:
        assert overall_mastery(2, 5) == 100


class TestAccuracyPercentage:
    def test_mixed_history(self) -> None:
        attempts = [_attempt(True), _attempt(True), _attempt(False), _attempt(True)]
        assert accuracy_percentage(attempts) == 75

    def test_no_attempts(self) -> None:
        assert accuracy_percentage([]) == 0
