"""Domain registry held by a Locale.

Maps domain names to Domains and remembers the default domain. The registry
is copy-on-write: put() builds a new mapping and swaps it in, and Domains are
immutable, so a reader holding the previous mapping sees a consistent state.
Callers serialize mutations with the owning Locale's write lock.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from localecatalog.catalog.domain import Domain
from localecatalog.localization.types import DomainName

__all__ = ["DomainRegistry", "RegistryState"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RegistryState:
    """Consistent point-in-time view of a registry.

    Attributes:
        default_domain: Default domain name ("" if none)
        domains: Read-only name -> Domain mapping
    """

    default_domain: DomainName
    domains: Mapping[DomainName, Domain]


class DomainRegistry:
    """Name -> Domain mapping with a default domain.

    The first domain stored becomes the default unless a default was set
    explicitly before.
    """

    __slots__ = ("_default", "_domains")

    def __init__(
        self,
        domains: Mapping[DomainName, Domain] | None = None,
        default_domain: DomainName = "",
    ) -> None:
        self._domains: Mapping[DomainName, Domain] = MappingProxyType(dict(domains or {}))
        self._default = default_domain

    @property
    def default_domain(self) -> DomainName:
        return self._default

    @default_domain.setter
    def default_domain(self, name: DomainName) -> None:
        self._default = name

    def get(self, name: DomainName) -> Domain | None:
        return self._domains.get(name)

    def put(self, name: DomainName, domain: Domain) -> bool:
        """Store domain under name, replacing any previous entry whole.

        Returns:
            True if an existing domain was replaced
        """
        replaced = name in self._domains
        updated = dict(self._domains)
        updated[name] = domain
        self._domains = MappingProxyType(updated)
        if not self._default:
            self._default = name
        logger.debug("%s domain %r (%d entries)", "Replaced" if replaced else "Added", name, len(domain))
        return replaced

    def state(self) -> RegistryState:
        return RegistryState(default_domain=self._default, domains=self._domains)

    def names(self) -> tuple[DomainName, ...]:
        return tuple(self._domains)

    def __contains__(self, name: object) -> bool:
        return name in self._domains

    def __len__(self) -> int:
        return len(self._domains)

    def __iter__(self) -> Iterator[DomainName]:
        return iter(self._domains)
