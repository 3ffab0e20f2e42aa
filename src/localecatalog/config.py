"""Configuration for Locale and its file resolver.

Frozen dataclasses validated at construction time. Pass instances to
``Locale(config=...)`` or ``FileResolver(config=...)``; all fields have
working defaults.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from localecatalog.constants import LC_MESSAGES

__all__ = ["LocaleConfig", "ResolverConfig"]


@dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Immutable configuration for catalog file resolution.

    Attributes:
        messages_dir: Subdirectory tried first inside each language
            directory (default: "LC_MESSAGES").
        include_language_prefix: Also try the bare 2-letter language code
            ("de" for "de_AT") when the identifier is longer (default: True).

    Example:
        >>> config = ResolverConfig(messages_dir="messages")
        >>> config.messages_dir
        'messages'
    """

    messages_dir: str = LC_MESSAGES
    include_language_prefix: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If messages_dir is empty or contains a path separator
                or a parent reference.
        """
        if not self.messages_dir:
            msg = "messages_dir cannot be empty"
            raise ValueError(msg)
        if "/" in self.messages_dir or "\\" in self.messages_dir or ".." in self.messages_dir:
            msg = f"messages_dir must be a single directory name, got {self.messages_dir!r}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class LocaleConfig:
    """Immutable configuration for a Locale.

    Attributes:
        resolver: File resolution settings.
        lock_timeout: Seconds to wait for the registry lock on every
            operation; None (default) waits indefinitely. A timeout surfaces
            as TimeoutError from mutations and lookups alike.

    Example:
        >>> LocaleConfig(lock_timeout=2.0).lock_timeout
        2.0
    """

    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    lock_timeout: float | None = None

    def __post_init__(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If lock_timeout is negative.
        """
        if self.lock_timeout is not None and self.lock_timeout < 0:
            msg = "lock_timeout must be non-negative"
            raise ValueError(msg)
