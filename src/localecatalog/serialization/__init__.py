"""Binary persistence of catalogs.

Submodules:
    wire     - Tagged binary encoding of plain values (dumps, loads)
    snapshot - DomainSnapshot and LocaleSnapshot records
    codec    - encode/decode of Domains and whole Locales

The codec is imported from its module (localecatalog.serialization.codec) or
through the top-level package; it depends on the catalog package, which in
turn imports the snapshot records from here.

Python 3.13+.
"""

from .snapshot import DomainSnapshot, LocaleSnapshot
from .wire import WireFormatError, dumps, loads

__all__ = ["DomainSnapshot", "LocaleSnapshot", "WireFormatError", "dumps", "loads"]
