"""Binary persistence of Domains and whole Locales.

encode_locale() writes an envelope (magic ``LCLE``) holding the Locale's path,
language, default domain name, and one independently encoded domain payload
(magic ``LCDP``) per domain. Decoding is all-or-nothing: any malformed part
aborts with CatalogDecodeError and no Locale is built.

Python 3.13+.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from localecatalog.catalog.domain import Domain
from localecatalog.constants import DOMAIN_MAGIC, LOCALE_MAGIC
from localecatalog.errors import CatalogDecodeError, ErrorContext
from localecatalog.serialization.snapshot import DomainSnapshot, LocaleSnapshot
from localecatalog.serialization.wire import dumps, loads

if TYPE_CHECKING:
    from localecatalog.config import LocaleConfig
    from localecatalog.localization.locale import Locale

__all__ = ["decode_domain", "decode_locale", "encode_domain", "encode_locale"]

logger = logging.getLogger(__name__)


def encode_domain(domain: Domain) -> bytes:
    """Encode one Domain to a self-contained payload."""
    return dumps(domain.to_snapshot().to_wire(), DOMAIN_MAGIC)


def decode_domain(data: bytes, *, name: str | None = None) -> Domain:
    """Decode a payload written by encode_domain().

    Args:
        data: Encoded payload
        name: Domain name for error context

    Raises:
        CatalogDecodeError: If data is malformed
    """
    try:
        snapshot = DomainSnapshot.from_wire(loads(data, DOMAIN_MAGIC))
    except ValueError as e:
        msg = f"Cannot decode domain payload: {e}"
        raise CatalogDecodeError(
            msg, ErrorContext(operation="decode", domain=name, detail=type(e).__name__)
        ) from e
    return Domain.from_snapshot(snapshot)


def encode_locale(locale: Locale) -> bytes:
    """Encode a Locale and every domain it holds.

    The registry is captured once under the Locale's read lock, so the blob
    reflects a single consistent state.
    """
    state = locale.registry_state()
    snapshot = LocaleSnapshot(
        path=str(locale.path),
        language=locale.language,
        default_domain=state.default_domain,
        domains={name: encode_domain(domain) for name, domain in state.domains.items()},
    )
    data = dumps(snapshot.to_wire(), LOCALE_MAGIC)
    logger.debug(
        "Encoded locale %s with %d domains (%d bytes)", locale.language, len(state.domains), len(data)
    )
    return data


def decode_locale(data: bytes, *, config: LocaleConfig | None = None) -> Locale:
    """Rebuild a Locale from a blob written by encode_locale().

    Args:
        data: Encoded envelope
        config: Settings for the new Locale (default: LocaleConfig())

    Raises:
        CatalogDecodeError: If the envelope or any domain payload is malformed
    """
    from localecatalog.localization.locale import Locale  # noqa: PLC0415
    from localecatalog.localization.registry import DomainRegistry  # noqa: PLC0415

    try:
        snapshot = LocaleSnapshot.from_wire(loads(data, LOCALE_MAGIC))
    except ValueError as e:
        msg = f"Cannot decode locale envelope: {e}"
        raise CatalogDecodeError(
            msg, ErrorContext(operation="decode", detail=type(e).__name__)
        ) from e

    domains = {
        name: decode_domain(blob, name=name) for name, blob in snapshot.domains.items()
    }
    registry = DomainRegistry(domains, default_domain=snapshot.default_domain)
    logger.debug("Decoded locale %s with %d domains", snapshot.language, len(domains))
    return Locale.from_registry(snapshot.path, snapshot.language, registry, config=config)
