"""gettext catalog parsers for .po and .mo files.

Both formats are read with Babel (babel.messages.pofile.PoFileParser and
babel.messages.mofile.read_mo) and converted to the same Domain, so everything
downstream of the parser is format-agnostic. Domain.headers carries the
header fields exactly as the file declares them.

Components:
    CatalogParser - Protocol every parser satisfies (structural typing)
    PoParser - Editable catalog parser
    MoParser - Compiled catalog parser
    PARSERS - Flat extension -> parser class dispatch table
    parse_file - Read a path and dispatch on its extension

Python 3.13+.
"""

from __future__ import annotations

import logging
import os
import stat
import struct
from email import message_from_string
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, ClassVar, Protocol

from babel.core import UnknownLocaleError
from babel.messages.catalog import Catalog
from babel.messages.mofile import LE_MAGIC, read_mo
from babel.messages.pofile import PoFileParser

from localecatalog.catalog.domain import Domain
from localecatalog.catalog.translation import Translation
from localecatalog.constants import MO_EXTENSION, PO_EXTENSION
from localecatalog.enums import CatalogFormat
from localecatalog.errors import (
    CatalogIOError,
    CatalogIsDirectoryError,
    CatalogNotFoundError,
    CatalogParseError,
    ErrorContext,
    UnsupportedFormatError,
)
from localecatalog.locale_utils import get_babel_locale, normalize_locale

if TYPE_CHECKING:
    from collections.abc import Callable

    from babel.messages.catalog import Message

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "CatalogParser",
    # Concrete parsers
    "PoParser",
    "MoParser",
    # Dispatch
    "PARSERS",
    "parse_file",
    "domain_from_catalog",
]

logger = logging.getLogger(__name__)


class CatalogParser(Protocol):
    """Protocol for turning the bytes of one catalog file into a Domain.

    The lookup methods mirror the Locale's own lookup family so a parser can
    be used directly for one-off translation without a Locale.
    """

    def parse(self, data: bytes) -> None:
        """Populate internal state from raw file bytes.

        Raises:
            CatalogParseError: If the content cannot be parsed
        """

    def domain(self) -> Domain:
        """Return the Domain built by the last parse()."""

    def get(self, key: str, *args: object) -> str: ...

    def get_plural(self, key: str, plural_key: str, n: int, *args: object) -> str: ...

    def get_context(self, key: str, context: str, *args: object) -> str: ...

    def get_plural_context(
        self, key: str, plural_key: str, n: int, context: str, *args: object
    ) -> str: ...


def _text(value: str | bytes | None, charset: str) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(charset)
    return value


def _translation_from_message(message: Message, charset: str) -> Translation:
    if isinstance(message.id, (list, tuple)):
        msgid = _text(message.id[0], charset)
        plural_id = _text(message.id[1], charset) if len(message.id) > 1 else ""
    else:
        msgid, plural_id = _text(message.id, charset), ""

    if isinstance(message.string, (list, tuple)):
        forms = tuple(_text(form, charset) for form in message.string)
    else:
        forms = (_text(message.string, charset),)
    return Translation(id=msgid, plural_id=plural_id, forms=forms)


class _HeaderCatalog(Catalog):
    """Catalog that keeps the header entry as written in the file.

    Babel folds the ``msgid ""`` entry into mime_headers, which it regenerates
    with placeholder and current-time values for fields the file lacks.
    """

    def __init__(self) -> None:
        super().__init__()
        self.source_header: str | None = None

    def __setitem__(self, key: str | tuple[str, ...], message: Message) -> None:
        if key == "":
            self.source_header = str(message.string or "")
        super().__setitem__(key, message)


def _read_po(fileobj: BinaryIO) -> tuple[Catalog, str | None]:
    catalog = _HeaderCatalog()
    PoFileParser(catalog).parse(fileobj)
    return catalog, catalog.source_header


def _mo_header(data: bytes) -> bytes | None:
    """Return the raw translation of the empty msgid in a .mo file."""
    order = "<" if struct.unpack_from("<I", data)[0] == LE_MAGIC else ">"
    count, originals, translations = struct.unpack_from(f"{order}3I", data, 8)
    for index in range(count):
        length, _ = struct.unpack_from(f"{order}2I", data, originals + 8 * index)
        if length == 0:
            size, offset = struct.unpack_from(f"{order}2I", data, translations + 8 * index)
            return data[offset : offset + size]
    return None


def _read_mo(fileobj: BinaryIO) -> tuple[Catalog, str | None]:
    data = fileobj.read()
    catalog = read_mo(BytesIO(data))
    raw = _mo_header(data)
    return catalog, None if raw is None else raw.decode(catalog.charset or "utf-8")


def _source_headers(text: str | None) -> dict[str, str]:
    if not text:
        return {}
    return {name: str(value) for name, value in message_from_string(text).items()}


def domain_from_catalog(
    catalog: Catalog, *, locale: str | None = None, header: str | None = None
) -> Domain:
    """Convert a Babel Catalog into a Domain.

    Fuzzy entries are skipped, as msgfmt does when compiling.

    Args:
        catalog: Catalog returned by read_po or read_mo
        locale: Language to assume when the catalog has no Language header;
            Babel then derives the default plural rule for it
        header: Text of the catalog's ``msgid ""`` entry. Domain.headers holds
            exactly the fields it declares; None leaves them empty.

    Returns:
        Populated Domain
    """
    if catalog.locale_identifier is None and locale:
        try:
            catalog.locale = get_babel_locale(locale)
        except UnknownLocaleError:
            # No CLDR data: keep the identifier without plural defaults.
            catalog.locale = normalize_locale(locale)
        except ValueError:
            logger.debug("Ignoring unparseable fallback locale %r", locale)

    charset = catalog.charset or "utf-8"
    translations: dict[str, Translation] = {}
    contexts: dict[str, dict[str, Translation]] = {}
    skipped = 0

    for message in catalog:
        if not message.id:
            continue
        if message.fuzzy:
            skipped += 1
            continue
        translation = _translation_from_message(message, charset)
        if message.context is None:
            translations[translation.id] = translation
        else:
            context = _text(message.context, charset)
            contexts.setdefault(context, {})[translation.id] = translation

    if skipped:
        logger.debug("Skipped %d fuzzy entries", skipped)

    return Domain(
        headers=_source_headers(header),
        language=str(catalog.locale_identifier or ""),
        plural_forms=catalog.plural_forms,
        nplurals=catalog.num_plurals,
        plural=catalog.plural_expr,
        translations=translations,
        contexts=contexts,
    )


class _BabelParser:
    """Shared CatalogParser implementation over a Babel reader."""

    format: ClassVar[CatalogFormat]
    _reader: ClassVar[Callable[[BinaryIO], tuple[Catalog, str | None]]]

    __slots__ = ("_domain", "_locale", "_source")

    def __init__(self, *, locale: str | None = None, source: str | None = None) -> None:
        """Create an empty parser.

        Args:
            locale: Fallback language for catalogs without a Language header
            source: Path or name of the input, used in error messages
        """
        self._domain = Domain()
        self._locale = locale
        self._source = source

    def parse(self, data: bytes) -> None:
        try:
            catalog, header = self._reader(BytesIO(data))
        except (OSError, struct.error, UnicodeDecodeError, ValueError, LookupError) as e:
            msg = f"Cannot parse {self.format.extension} catalog: {e}"
            raise CatalogParseError(
                msg,
                ErrorContext(operation="parse", path=self._source, detail=type(e).__name__),
            ) from e
        self._domain = domain_from_catalog(catalog, locale=self._locale, header=header)

    def domain(self) -> Domain:
        return self._domain

    def get(self, key: str, *args: object) -> str:
        return self._domain.get(key, *args)

    def get_plural(self, key: str, plural_key: str, n: int, *args: object) -> str:
        return self._domain.get_plural(key, plural_key, n, *args)

    def get_context(self, key: str, context: str, *args: object) -> str:
        return self._domain.get_context(key, context, *args)

    def get_plural_context(
        self, key: str, plural_key: str, n: int, context: str, *args: object
    ) -> str:
        return self._domain.get_plural_context(key, plural_key, n, context, *args)


class PoParser(_BabelParser):
    """Parser for editable .po catalogs."""

    format = CatalogFormat.PO

    __slots__ = ()

    _reader = staticmethod(_read_po)


class MoParser(_BabelParser):
    """Parser for compiled .mo catalogs."""

    format = CatalogFormat.MO

    __slots__ = ()

    _reader = staticmethod(_read_mo)


PARSERS: dict[str, type[_BabelParser]] = {
    PO_EXTENSION: PoParser,
    MO_EXTENSION: MoParser,
}
"""File extension -> parser class."""


def parse_file(path: str | os.PathLike[str], *, locale: str | None = None) -> CatalogParser:
    """Read a catalog file and parse it with the parser for its extension.

    Args:
        path: Path to a .po or .mo file
        locale: Fallback language for catalogs without a Language header

    Returns:
        Parser holding the parsed Domain

    Raises:
        CatalogIsDirectoryError: If path is a directory
        UnsupportedFormatError: If the extension is neither .po nor .mo
        CatalogNotFoundError: If path does not exist
        CatalogIOError: If the file cannot be read
        CatalogParseError: If the content cannot be parsed
    """
    file_path = Path(path)
    source = str(file_path)

    try:
        info: os.stat_result | None = file_path.stat()
    except FileNotFoundError:
        info = None
    except OSError as e:
        msg = f"Cannot stat catalog file {source}: {e}"
        raise CatalogIOError(msg, ErrorContext(operation="parse", path=source)) from e

    if info is not None and stat.S_ISDIR(info.st_mode):
        msg = f"Cannot parse a directory: {source}"
        raise CatalogIsDirectoryError(msg, ErrorContext(operation="parse", path=source))

    parser_class = PARSERS.get(file_path.suffix.lower())
    if parser_class is None:
        msg = f"Unsupported catalog file type {file_path.suffix!r}: {source}"
        raise UnsupportedFormatError(
            msg, ErrorContext(operation="parse", path=source, detail=file_path.suffix)
        )

    if info is None:
        msg = f"Catalog file not found: {source}"
        raise CatalogNotFoundError(msg, ErrorContext(operation="parse", path=source))

    try:
        data = file_path.read_bytes()
    except OSError as e:
        msg = f"Cannot read catalog file {source}: {e}"
        raise CatalogIOError(msg, ErrorContext(operation="parse", path=source)) from e

    parser = parser_class(locale=locale, source=source)
    parser.parse(data)
    logger.debug("Parsed %s (%d bytes) as %s", source, len(data), parser_class.format)
    return parser
