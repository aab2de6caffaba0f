"""
Formatting of retrieved listings into user-facing messages.

Two renderings are produced from the same localized listings:
- one caption per listing, paired with its primary image
- a single text block with a header, one section per listing and a
  delimiter line between sections
"""

import re
from typing import Dict, List, Optional, Any

from ..models.schemas import PropertyItem
from ..models.state import Language, LocalizedListing

DELIMITER = "─" * 24
MISSING = "-"

YES_NO = {
    Language.DUTCH: ("Ja", "Nee"),
    Language.ENGLISH: ("Yes", "No"),
    Language.GERMAN: ("Ja", "Nein"),
    Language.SPANISH: ("Sí", "No"),
    Language.FRENCH: ("Oui", "Non"),
    Language.ITALIAN: ("Sì", "No"),
    Language.PORTUGUESE: ("Sim", "Não"),
    Language.RUSSIAN: ("Да", "Нет"),
    Language.NORWEGIAN: ("Ja", "Nei"),
}

RESULTS_HEADER = {
    Language.DUTCH: "Ik heb {count} woning(en) voor je gevonden:",
    Language.ENGLISH: "I found {count} matching properties:",
    Language.GERMAN: "Ich habe {count} passende Immobilien gefunden:",
    Language.SPANISH: "He encontrado {count} propiedades que coinciden:",
    Language.FRENCH: "J'ai trouvé {count} biens correspondants :",
    Language.ITALIAN: "Ho trovato {count} immobili corrispondenti:",
    Language.PORTUGUESE: "Encontrei {count} imóveis correspondentes:",
    Language.RUSSIAN: "Найдено подходящих объектов: {count}",
    Language.NORWEGIAN: "Jeg fant {count} passende eiendommer:",
}

NO_ANSWER = {
    Language.DUTCH: "Sorry, ik heb geen antwoord kunnen genereren.",
    Language.ENGLISH: "Sorry, I couldn't generate an answer.",
    Language.GERMAN: "Entschuldigung, ich konnte keine Antwort generieren.",
    Language.SPANISH: "Lo siento, no he podido generar una respuesta.",
    Language.FRENCH: "Désolé, je n'ai pas pu générer de réponse.",
    Language.ITALIAN: "Mi dispiace, non sono riuscito a generare una risposta.",
    Language.PORTUGUESE: "Desculpe, não consegui gerar uma resposta.",
    Language.RUSSIAN: "Извините, я не смог сформулировать ответ.",
    Language.NORWEGIAN: "Beklager, jeg klarte ikke å lage et svar.",
}


def no_answer_message(language: Optional[Language]) -> str:
    """Placeholder used when the assistant produced no reply."""
    return NO_ANSWER[language or Language.DUTCH]


def format_amount(value: Any) -> str:
    """
    Format a number for display, dropping a zero fractional part.

    >>> format_amount(350000.0)
    '350000'
    >>> format_amount(1.5)
    '1.5'
    """
    if value is None or value == "":
        return MISSING
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _single_line(text: Any) -> str:
    return " ".join(str(text).split()) if text else ""


def _location(item: LocalizedListing) -> str:
    listing = item.listing
    parts = [_single_line(p) for p in (listing.town, listing.province, listing.country)]
    return ", ".join(p for p in parts if p) or MISSING


def _caption_lines(item: LocalizedListing, language: Language) -> Dict[str, str]:
    # Every field is collapsed to one line so a caption is always six lines
    listing = item.listing
    yes, no = YES_NO[language]
    return {
        "ref": f"🏡 {_single_line(listing.ref) or MISSING}",
        "location": f"📍 {_location(item)}",
        "price": f"💰 {format_amount(listing.price)} {_single_line(listing.currency)}".rstrip(),
        "rooms": (
            f"🛌 {format_amount(listing.beds)} | 🛁 {format_amount(listing.baths)} | "
            f"🏊 {yes if listing.has_pool else no}"
        ),
        "description": f"✨ {_single_line(item.description)}".rstrip(),
        "url": f"🔗 {_single_line(listing.url_for(language)) or MISSING}",
    }


def format_caption(item: LocalizedListing, language: Language) -> str:
    """Multi-line caption for a single listing."""
    lines = _caption_lines(item, language)
    return "\n".join([
        lines["ref"],
        lines["location"],
        lines["price"],
        lines["rooms"],
        lines["description"],
        lines["url"],
    ])


def format_items(items: List[LocalizedListing], language: Language) -> List[PropertyItem]:
    """Caption/image pairs in retrieval order."""
    return [
        PropertyItem(caption=format_caption(item, language), image_url=item.listing.primary_image)
        for item in items
    ]


def format_section(item: LocalizedListing, language: Language) -> str:
    """Text block section for one listing, with built area and features."""
    lines = _caption_lines(item, language)
    built = item.listing.built
    features = _single_line(item.features) or ", ".join(item.listing.feature_list)

    section = [
        lines["ref"],
        lines["location"],
        lines["price"],
        lines["rooms"],
        f"📐 {format_amount(built)} m²" if built else f"📐 {MISSING}",
        lines["description"],
    ]
    if features:
        section.append(f"🧾 {features}")
    section.append(lines["url"])
    return "\n".join(section)


def format_text_block(items: List[LocalizedListing], language: Language) -> str:
    """Localized header followed by all listing sections."""
    header = RESULTS_HEADER[language].format(count=len(items))
    if not items:
        return header

    sections = f"\n{DELIMITER}\n".join(format_section(item, language) for item in items)
    return f"{header}\n\n{sections}"


_CAPTION_PATTERNS = {
    "ref": re.compile(r"^🏡 (?P<ref>.*)$", re.MULTILINE),
    "price": re.compile(r"^💰 (?P<price>\S+) ?(?P<currency>.*)$", re.MULTILINE),
    "rooms": re.compile(r"^🛌 (?P<beds>\S+) \| 🛁 (?P<baths>\S+) \| 🏊 (?P<pool>.*)$", re.MULTILINE),
    "url": re.compile(r"^🔗 (?P<url>.*)$", re.MULTILINE),
}


def parse_caption(caption: str) -> Dict[str, Optional[str]]:
    """
    Recover the structured fields of a caption or text block section.

    Returns:
        Dict with ref, price, currency, beds, baths, pool and url; fields
        that are missing from the text are None
    """
    parsed: Dict[str, Optional[str]] = {
        "ref": None, "price": None, "currency": None,
        "beds": None, "baths": None, "pool": None, "url": None,
    }
    for pattern in _CAPTION_PATTERNS.values():
        match = pattern.search(caption)
        if match:
            parsed.update({k: v.strip() or None for k, v in match.groupdict().items()})
    return parsed
