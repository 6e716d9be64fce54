"""
Domain label derivation for catalog modules.

Two strategies share one signature, ``(Module) -> str``, and both are total:
every module maps to some label, never to ``None``.

- ``explicit_domain`` trusts the stored domain relation and is the one used
  for mastery statistics.
- ``title_domain`` classifies by keywords in the title, the way the quiz
  listing groups topics.
"""

from collections.abc import Callable

from nanobio.domain.catalog.entities.module import Module

UNCATEGORIZED = "Uncategorized"

DomainDeriver = Callable[[Module], str]

# First matching rule wins; order matters for titles like "Quantum dot imaging".
TITLE_KEYWORD_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("microscopy", "imaging"), "Imaging"),
    (("genetic", "dna", "sirna", "crispr"), "Genetic Engineering"),
    (("fluidics",), "Microfluidics"),
    (("protein", "enzyme"), "Protein Engineering"),
    (("atomic", "quantum"), "Nanomaterials"),
)


def explicit_domain(module: Module) -> str:
    """Return the module's stored domain, or the sentinel label."""
    if module.domain and module.domain.strip():
        return module.domain.strip()
    return UNCATEGORIZED


def derive_domain_from_title(title: str) -> str:
    """
    Classify a title by keyword, falling back to its leading token.

    >>> derive_domain_from_title("Atomic Layer Deposition")
    'Nanomaterials'
    >>> derive_domain_from_title("Liposome Engineering")
    'Liposome'
    """
    lowered = (title or "").lower()
    for keywords, label in TITLE_KEYWORD_RULES:
        if any(keyword in lowered for keyword in keywords):
            return label
    tokens = (title or "").split()
    if not tokens:
        return UNCATEGORIZED
    return tokens[0].strip(":-,.").title() or UNCATEGORIZED


def title_domain(module: Module) -> str:
    """Strategy adapter for ``derive_domain_from_title``."""
    return derive_domain_from_title(module.title)
