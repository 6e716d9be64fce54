from .accuracy import accuracy_percentage
from .domain_aggregator import DomainStat, compute_domain_stats, overall_mastery

__all__ = ["DomainStat", "accuracy_percentage", "compute_domain_stats", "overall_mastery"]
