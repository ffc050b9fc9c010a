"""
Language code mappings and utilities.

Standards:
- ISO 639-1: 2-letter language codes (en, zh, es)
- BCP 47: Language + Region codes (en-US, zh-CN, pt-BR)

Every code entering the engine goes through normalize_language_code(), which
maps aliases ('russian', 'RU', 'zh-cn') to canonical codes. Unknown codes
pass through unchanged so providers can still be asked about them.
"""

from typing import Optional

AUTO = 'auto'

# ISO 639-1 language codes (2-letter)
# Source: https://en.wikipedia.org/wiki/List_of_ISO_639-1_codes
ISO_639_1 = {
    'af': 'Afrikaans',
    'am': 'Amharic',
    'ar': 'Arabic',
    'ay': 'Aymara',
    'az': 'Azerbaijani',
    'bg': 'Bulgarian',
    'bn': 'Bengali',
    'bo': 'Tibetan',
    'bs': 'Bosnian',
    'ca': 'Catalan',
    'cs': 'Czech',
    'cy': 'Welsh',
    'da': 'Danish',
    'de': 'German',
    'el': 'Greek',
    'en': 'English',
    'es': 'Spanish',
    'et': 'Estonian',
    'eu': 'Basque',
    'fa': 'Persian',
    'ff': 'Fulah',
    'fi': 'Finnish',
    'fr': 'French',
    'ga': 'Irish',
    'gl': 'Galician',
    'gn': 'Guarani',
    'gu': 'Gujarati',
    'ha': 'Hausa',
    'he': 'Hebrew',
    'hi': 'Hindi',
    'hr': 'Croatian',
    'hu': 'Hungarian',
    'hy': 'Armenian',
    'id': 'Indonesian',
    'ig': 'Igbo',
    'is': 'Icelandic',
    'it': 'Italian',
    'ja': 'Japanese',
    'ka': 'Georgian',
    'kk': 'Kazakh',
    'km': 'Khmer',
    'kn': 'Kannada',
    'ko': 'Korean',
    'ky': 'Kyrgyz',
    'lb': 'Luxembourgish',
    'lo': 'Lao',
    'lt': 'Lithuanian',
    'lv': 'Latvian',
    'mg': 'Malagasy',
    'mi': 'Maori',
    'mk': 'Macedonian',
    'ml': 'Malayalam',
    'mn': 'Mongolian',
    'mr': 'Marathi',
    'ms': 'Malay',
    'mt': 'Maltese',
    'my': 'Burmese',
    'ne': 'Nepali',
    'nl': 'Dutch',
    'no': 'Norwegian',
    'om': 'Oromo',
    'or': 'Odia',
    'pa': 'Punjabi',
    'pl': 'Polish',
    'pt': 'Portuguese',
    'qu': 'Quechua',
    'rn': 'Kirundi',
    'ro': 'Romanian',
    'ru': 'Russian',
    'rw': 'Kinyarwanda',
    'si': 'Sinhala',
    'sk': 'Slovak',
    'sl': 'Slovenian',
    'so': 'Somali',
    'sq': 'Albanian',
    'sr': 'Serbian',
    'ss': 'Swati',
    'st': 'Southern Sotho',
    'sv': 'Swedish',
    'sw': 'Swahili',
    'ta': 'Tamil',
    'te': 'Telugu',
    'tg': 'Tajik',
    'th': 'Thai',
    'tk': 'Turkmen',
    'tn': 'Tswana',
    'tr': 'Turkish',
    'ts': 'Tsonga',
    'uk': 'Ukrainian',
    'ur': 'Urdu',
    'uz': 'Uzbek',
    've': 'Venda',
    'vi': 'Vietnamese',
    'xh': 'Xhosa',
    'yo': 'Yoruba',
    'zh': 'Chinese',
    'zu': 'Zulu',
}

# BCP 47 language-region codes (common variants)
BCP_47_VARIANTS = {
    'en-US': 'English (United States)',
    'en-GB': 'English (United Kingdom)',
    'en-AU': 'English (Australia)',
    'en-CA': 'English (Canada)',

    'zh-CN': 'Chinese (Simplified, China)',
    'zh-TW': 'Chinese (Traditional, Taiwan)',
    'zh-HK': 'Chinese (Traditional, Hong Kong)',
    'zh-SG': 'Chinese (Simplified, Singapore)',

    'es-ES': 'Spanish (Spain)',
    'es-MX': 'Spanish (Mexico)',
    'es-AR': 'Spanish (Argentina)',
    'es-CO': 'Spanish (Colombia)',

    'pt-BR': 'Portuguese (Brazil)',
    'pt-PT': 'Portuguese (Portugal)',

    'fr-FR': 'French (France)',
    'fr-CA': 'French (Canada)',
    'fr-BE': 'French (Belgium)',
    'fr-CH': 'French (Switzerland)',

    'de-DE': 'German (Germany)',
    'de-AT': 'German (Austria)',
    'de-CH': 'German (Switzerland)',

    'ar-SA': 'Arabic (Saudi Arabia)',
    'ar-AE': 'Arabic (United Arab Emirates)',
    'ar-EG': 'Arabic (Egypt)',
}

# Combined mapping
ALL_LANGUAGE_CODES = {**ISO_639_1, **BCP_47_VARIANTS}

# Alias -> canonical code. Keys are lowercase.
LANGUAGE_ALIASES = {
    'automatic': AUTO,
    'detect': AUTO,
    'english': 'en',
    'russian': 'ru',
    'spanish': 'es',
    'french': 'fr',
    'german': 'de',
    'italian': 'it',
    'portuguese': 'pt',
    'chinese': 'zh',
    'japanese': 'ja',
    'korean': 'ko',
    'arabic': 'ar',
    'hindi': 'hi',
    'turkish': 'tr',
    'dutch': 'nl',
    'swedish': 'sv',
    'danish': 'da',
    'norwegian': 'no',
    'finnish': 'fi',
    'polish': 'pl',
    'ukrainian': 'uk',
    'nb': 'no',
    'iw': 'he',
    'zh-hans': 'zh-CN',
    'zh-hant': 'zh-TW',
}

# Languages offered to users, in display order (code -> native name)
UI_LANGUAGES = {
    'ru': 'Русский',
    'en': 'English',
    'es': 'Español',
    'fr': 'Français',
    'de': 'Deutsch',
    'it': 'Italiano',
    'pt': 'Português',
    'zh': '中文',
    'ja': '日本語',
    'ko': '한국어',
    'ar': 'العربية',
    'hi': 'हिन्दी',
    'tr': 'Türkçe',
    'nl': 'Nederlands',
    'sv': 'Svenska',
    'da': 'Dansk',
    'no': 'Norsk',
    'fi': 'Suomi',
    'pl': 'Polski',
}

_CANONICAL_BY_LOWER = {code.lower(): code for code in ALL_LANGUAGE_CODES}


def normalize_language_code(code: Optional[str]) -> Optional[str]:
    """
    Canonicalize a language code or alias.

    Args:
        code: Language code, alias or name (e.g., 'RU', 'russian', 'zh-cn')

    Returns:
        Canonical code, or the input unchanged when it is unknown

    Examples:
        >>> normalize_language_code('russian')
        'ru'
        >>> normalize_language_code('zh-cn')
        'zh-CN'
        >>> normalize_language_code('AUTO')
        'auto'
        >>> normalize_language_code('xx-klingon')
        'xx-klingon'
    """
    if not code:
        return code

    key = code.strip().lower().replace('_', '-')
    if key == AUTO:
        return AUTO
    if key in LANGUAGE_ALIASES:
        return LANGUAGE_ALIASES[key]
    if key in _CANONICAL_BY_LOWER:
        return _CANONICAL_BY_LOWER[key]
    return code


def is_auto(code: Optional[str]) -> bool:
    """Check whether a code requests automatic detection."""
    return normalize_language_code(code) == AUTO


def is_valid_language_code(code: str) -> bool:
    """
    Check if a language code is valid.

    Examples:
        >>> is_valid_language_code('en')
        True
        >>> is_valid_language_code('zh-CN')
        True
        >>> is_valid_language_code('invalid')
        False
    """
    return code in ALL_LANGUAGE_CODES


def get_language_name(code: str) -> Optional[str]:
    """
    Get the full language name from code.

    Examples:
        >>> get_language_name('en')
        'English'
        >>> get_language_name('zh-CN')
        'Chinese (Simplified, China)'
    """
    return ALL_LANGUAGE_CODES.get(code)


def extract_base_language(code: str) -> str:
    """
    Extract base language from code (remove region).

    Examples:
        >>> extract_base_language('zh-CN')
        'zh'
        >>> extract_base_language('fr')
        'fr'
    """
    return code.split('-')[0]


def languages_match(code1: str, code2: str, strict: bool = False) -> bool:
    """
    Check if two language codes match.

    Args:
        code1: First language code
        code2: Second language code
        strict: If True, must match exactly. If False, base language match is ok.

    Returns:
        True if languages match. 'auto' never matches anything.

    Examples:
        >>> languages_match('en', 'en-US')
        True
        >>> languages_match('en', 'en-US', strict=True)
        False
        >>> languages_match('auto', 'auto')
        False
    """
    if not code1 or not code2 or is_auto(code1) or is_auto(code2):
        return False

    code1 = normalize_language_code(code1)
    code2 = normalize_language_code(code2)
    if strict:
        return code1 == code2

    return extract_base_language(code1).lower() == extract_base_language(code2).lower()


def get_ui_languages(include_auto: bool = True) -> list:
    """
    Get the languages offered to users.

    Returns:
        List of {'code', 'name', 'native_name'} dicts, 'auto' first when requested
    """
    languages = []
    if include_auto:
        languages.append({'code': AUTO, 'name': 'Auto-detect', 'native_name': 'Auto'})
    for code, native_name in UI_LANGUAGES.items():
        languages.append({
            'code': code,
            'name': ALL_LANGUAGE_CODES.get(code, code),
            'native_name': native_name,
        })
    return languages
