from babel import Locale

from libraryapi.message import DEFAULT_LOCALE, MessageService, TranslatableMessage, to_locale
from libraryapi.settings import LibrarySettings


def _greeting():
    message = TranslatableMessage()
    message.add_translation("en_US", "Hello")
    message.add_translation(Locale("de", "DE"), "Hallo")
    return message


def test_translation_prefers_requested_locale():
    assert _greeting().get_translation("de_DE", "en_US") == "Hallo"


def test_translation_falls_back():
    assert _greeting().get_translation("fr_FR", "en_US") == "Hello"


def test_translation_reports_missing_locales():
    assert _greeting().get_translation("fr_FR", "es_ES") == "No translation for locales fr_FR and es_ES."


def test_remove_translation():
    message = _greeting()
    message.remove_translation("de-DE")

    assert message.locales() == (Locale("en", "US"),)


def test_service_uses_default_locale():
    service = MessageService()
    service.add_message("greeting", _greeting())

    assert service.default_locale == DEFAULT_LOCALE
    assert service.get_message("greeting") == "Hello"
    assert service.get_message("greeting", "de_DE") == "Hallo"
    assert service.get_message("greeting", "fr_FR") == "Hello"


def test_service_with_custom_default_locale():
    service = MessageService("de_DE")
    service.add_message("greeting", _greeting())

    assert service.get_message("greeting", "ja_JP") == "Hallo"


def test_missing_and_removed_keys():
    service = MessageService()
    service.add_message("greeting", _greeting())
    service.remove_message("greeting")

    assert not service.has_message("greeting")
    assert service.get_message("greeting") == "No message for key greeting"


def test_to_locale_accepts_locale_instances():
    locale = Locale("pt", "BR")

    assert to_locale(locale) is locale
    assert to_locale("pt-BR") == locale


def test_service_from_settings_uses_configured_locale():
    service = MessageService.from_settings(LibrarySettings(default_locale="de_DE"))
    service.add_message("greeting", _greeting())

    assert service.default_locale == Locale("de", "DE")
    assert service.get_message("greeting", "ja_JP") == "Hallo"
