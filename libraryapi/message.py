"""Keyed, localized messages.

Messages are stored key first: a :class:`MessageService` maps keys to
:class:`TranslatableMessage` objects, each holding one text per locale.
Typical use from a plugin::

    service.get_message("shop.purchase", player_locale)

Locales are :class:`babel.Locale` objects; identifiers such as ``"de_DE"``
are accepted wherever a locale is expected.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple, Union

from babel import Locale

from libraryapi.plugins import PLUGIN_MANAGER
from libraryapi.settings import LibrarySettings

__all__ = ["DEFAULT_LOCALE", "MessageService", "TranslatableMessage", "to_locale"]

LocaleLike = Union[Locale, str]

DEFAULT_LOCALE = Locale("en", "US")


def to_locale(locale: LocaleLike) -> Locale:
    if isinstance(locale, Locale):
        return locale
    return Locale.parse(locale.replace("-", "_"))


class TranslatableMessage:
    """A series of texts keyed by locale."""

    def __init__(self, translations: Optional[Dict[LocaleLike, str]] = None) -> None:
        self._translations: Dict[Locale, str] = {}
        for locale, text in (translations or {}).items():
            self.add_translation(locale, text)

    def add_translation(self, locale: LocaleLike, translation: str) -> None:
        self._translations[to_locale(locale)] = translation

    def remove_translation(self, locale: LocaleLike) -> None:
        self._translations.pop(to_locale(locale), None)

    def locales(self) -> Tuple[Locale, ...]:
        return tuple(self._translations)

    def get_translation(self, locale: LocaleLike, fallback: LocaleLike) -> str:
        """Return the text for ``locale``, else for ``fallback``, else an error text."""

        locale = to_locale(locale)
        fallback = to_locale(fallback)
        translation = self._translations.get(locale)
        if translation is not None:
            return translation
        translation = self._translations.get(fallback)
        if translation is not None:
            return translation
        return f"No translation for locales {locale} and {fallback}."


class MessageService:
    def __init__(self, default_locale: LocaleLike = DEFAULT_LOCALE) -> None:
        self._default_locale = to_locale(default_locale)
        self._messages: Dict[str, TranslatableMessage] = {}

    @classmethod
    def from_settings(cls, settings: LibrarySettings) -> "MessageService":
        return cls(settings.default_locale)

    @property
    def default_locale(self) -> Locale:
        return self._default_locale

    def add_message(self, key: str, message: TranslatableMessage) -> None:
        self._messages[key] = message

    def remove_message(self, key: str) -> None:
        self._messages.pop(key, None)

    def has_message(self, key: str) -> bool:
        return key in self._messages

    def get_message(self, key: str, locale: Optional[LocaleLike] = None) -> str:
        """Return the message for ``key`` in ``locale`` (default locale if omitted).

        Missing translations fall back to the default locale.
        """

        message = self._messages.get(key)
        if message is None:
            return f"No message for key {key}"
        return message.get_translation(locale if locale is not None else self._default_locale, self._default_locale)


PLUGIN_MANAGER.expose("message_service", MessageService)
PLUGIN_MANAGER.expose("translatable_message", TranslatableMessage)
