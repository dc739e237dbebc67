# SPDX-License-Identifier: Apache-2.0
"""Language codes and per-provider language sets."""

from __future__ import annotations

SUPPORTED_LANGUAGES: dict[str, str] = {
    "zh": "中文 (Chinese)",
    "en": "English",
    "ja": "日本語 (Japanese)",
    "ko": "한국어 (Korean)",
    "es": "Español (Spanish)",
    "fr": "Français (French)",
    "de": "Deutsch (German)",
    "ru": "Русский (Russian)",
    "ar": "العربية (Arabic)",
    "pt": "Português (Portuguese)",
    "it": "Italiano (Italian)",
    "nl": "Nederlands (Dutch)",
    "sv": "Svenska (Swedish)",
    "da": "Dansk (Danish)",
    "no": "Norsk (Norwegian)",
    "fi": "Suomi (Finnish)",
    "pl": "Polski (Polish)",
    "cs": "Čeština (Czech)",
    "sk": "Slovenčina (Slovak)",
    "hu": "Magyar (Hungarian)",
    "ro": "Română (Romanian)",
    "bg": "Български (Bulgarian)",
    "hr": "Hrvatski (Croatian)",
    "sr": "Српски (Serbian)",
    "sl": "Slovenščina (Slovenian)",
    "et": "Eesti (Estonian)",
    "lv": "Latviešu (Latvian)",
    "lt": "Lietuvių (Lithuanian)",
    "uk": "Українська (Ukrainian)",
    "be": "Беларуская (Belarusian)",
    "tr": "Türkçe (Turkish)",
    "he": "עברית (Hebrew)",
    "fa": "فارسی (Persian)",
    "ur": "اردو (Urdu)",
    "hi": "हिन्दी (Hindi)",
    "bn": "বাংলা (Bengali)",
    "ta": "தமிழ் (Tamil)",
    "te": "తెలుగు (Telugu)",
    "ml": "മലയാളം (Malayalam)",
    "kn": "ಕನ್ನಡ (Kannada)",
    "gu": "ગુજરાતી (Gujarati)",
    "pa": "ਪੰਜਾਬੀ (Punjabi)",
    "mr": "मराठी (Marathi)",
    "ne": "नेपाली (Nepali)",
    "si": "සිංහල (Sinhala)",
    "my": "မြန်မာ (Myanmar)",
    "km": "ខ្មែរ (Khmer)",
    "lo": "ລາວ (Lao)",
    "ka": "ქართული (Georgian)",
    "am": "አማርኛ (Amharic)",
    "sw": "Kiswahili (Swahili)",
    "zu": "isiZulu (Zulu)",
    "af": "Afrikaans",
    "sq": "Shqip (Albanian)",
    "hy": "Հայերեն (Armenian)",
    "az": "Azərbaycan (Azerbaijani)",
    "eu": "Euskera (Basque)",
    "ca": "Català (Catalan)",
    "cy": "Cymraeg (Welsh)",
    "ga": "Gaeilge (Irish)",
    "is": "Íslenska (Icelandic)",
    "mt": "Malti (Maltese)",
    "vi": "Tiếng Việt (Vietnamese)",
    "th": "ไทย (Thai)",
    "id": "Bahasa Indonesia (Indonesian)",
    "ms": "Bahasa Melayu (Malay)",
    "tl": "Filipino (Tagalog)",
    "haw": "ʻŌlelo Hawaiʻi (Hawaiian)",
    "mi": "Te Reo Māori (Maori)",
    "sm": "Gagana Samoa (Samoan)",
    "to": "Lea Fakatonga (Tongan)",
    "fj": "Na Vosa Vakaviti (Fijian)",
}

ALL_LANGUAGES = frozenset(SUPPORTED_LANGUAGES)

# Google's public web endpoint lacks the Pacific languages.
GOOGLE_FREE_LANGUAGES = ALL_LANGUAGES - {"haw", "mi", "sm", "to", "fj"}

DEEPL_LANGUAGES = frozenset({"zh", "en", "ja", "ko", "es", "fr", "de", "ru", "pt"})

COMMON_LANGUAGES = frozenset({"zh", "en", "ja", "ko", "es", "fr", "de", "ru", "ar", "pt"})

DEFAULT_ENABLED_LANGUAGES = ("zh", "en", "ja", "ko", "es", "fr", "de", "ru")

# The admin interface itself runs in these, so they are always enabled.
REQUIRED_LANGUAGES = ("zh", "en")


def english_name(lang_code: str) -> str:
    """English name of a language for use in prompts.

    Args:
        lang_code: Language code (e.g., "zh", "ja").

    Returns:
        English language name, or the code itself when unknown.
    """
    label = SUPPORTED_LANGUAGES.get(lang_code.lower())
    if label is None:
        return lang_code
    if label.endswith(")") and "(" in label:
        return label[label.rindex("(") + 1 : -1]
    return label


def normalize_enabled_languages(languages: list[str] | tuple[str, ...] | None) -> tuple[str, ...]:
    """Apply defaults, drop unknown codes and force the required languages.

    Order is preserved; required languages come first.
    """
    requested = DEFAULT_ENABLED_LANGUAGES if languages is None else languages
    result: list[str] = []
    for code in (*REQUIRED_LANGUAGES, *requested):
        if code in SUPPORTED_LANGUAGES and code not in result:
            result.append(code)
    return tuple(result)
