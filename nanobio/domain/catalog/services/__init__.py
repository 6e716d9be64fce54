from .domain_derivation import UNCATEGORIZED, DomainDeriver, explicit_domain, title_domain

__all__ = ["UNCATEGORIZED", "DomainDeriver", "explicit_domain", "title_domain"]
