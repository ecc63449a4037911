"""Tracking status localization for DPD Russia."""
import json
import logging
from pathlib import Path

from .const import DEFAULT_LANGUAGE

_LOGGER = logging.getLogger(__name__)

_TRANSLATIONS_DIR = Path(__file__).resolve().parent / "translations"
_TRANSLATION_CACHE = {}

_STATUS_FALLBACK = {
    "ru": {
        "NewOrderByClient": "Оформлен новый заказ по инициативе клиента",
        "NotDone": "Заказ отменен",
        "OnTerminalPickup": "Посылка находится на терминале приема отправления",
        "OnRoad": "Посылка находится в пути",
        "OnTerminal": "Посылка находится на транзитном терминале",
        "OnTerminalDelivery": "Посылка находится на терминале доставки",
        "Delivering": "Посылка выведена на доставку",
        "Delivered": "Посылка доставлена получателю",
        "Lost": "Посылка утеряна",
        "Problem": "С посылкой возникла проблемная ситуация",
        "ReturnedFromDelivery": "Посылка возвращена с доставки",
        "NewOrderByDPD": "Оформлен новый заказ по инициативе DPD",
    },
    "en": {
        "NewOrderByClient": "New order placed by the client",
        "NotDone": "Order cancelled",
        "OnTerminalPickup": "Parcel is at the pickup terminal",
        "OnRoad": "Parcel is in transit",
        "OnTerminal": "Parcel is at a transit terminal",
        "OnTerminalDelivery": "Parcel is at the delivery terminal",
        "Delivering": "Parcel is out for delivery",
        "Delivered": "Parcel delivered",
        "Lost": "Parcel lost",
        "Problem": "Delivery issue",
        "ReturnedFromDelivery": "Parcel returned from delivery",
        "NewOrderByDPD": "New order placed by DPD",
    },
}


def normalize_language(language):
    if not language:
        return DEFAULT_LANGUAGE
    return str(language).replace("_", "-").split("-")[0].lower()


def _load_translation_map(language):
    path = _TRANSLATIONS_DIR / f"{language}.json"
    if not path.exists():
        return {}
    try:
        with path.open(encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, ValueError) as err:
        _LOGGER.warning("Could not read translations %s: %s", path, err)
        return {}
    return data.get("statuses", {})


def get_status_translations(language):
    lang = normalize_language(language)
    if lang not in _TRANSLATION_CACHE:
        translations = dict(_STATUS_FALLBACK.get(lang, {}))
        translations.update(_load_translation_map(lang))
        _TRANSLATION_CACHE[lang] = translations
    return _TRANSLATION_CACHE[lang]


def translate_status(code, language=DEFAULT_LANGUAGE):
    """Return readable text for a tracing state code, or the code itself."""
    if code is None:
        return None
    return get_status_translations(language).get(str(code), str(code))
