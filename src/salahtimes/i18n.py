"""Simple two-language (ko/en) translation helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "page_title": {
        "ko": "오늘의 기도 시간",
        "en": "Salah Times",
    },
    "label_place": {
        "ko": "장소",
        "en": "Location",
    },
    "label_date": {
        "ko": "날짜",
        "en": "Date",
    },
    "label_method": {
        "ko": "계산 방식",
        "en": "Method",
    },
    "label_madhab": {
        "ko": "법학파 (아스르)",
        "en": "Madhab (Asr)",
    },
    "btn_show_times": {
        "ko": "✦ 시간 보기",
        "en": "✦ Show Times",
    },
    "placeholder": {
        "ko": "장소와 날짜를 입력하고 기도 시간을 불러오세요",
        "en": "Enter a location and date to see the prayer times",
    },
    "loading_compute": {
        "ko": "✦ 기도 시간을 계산하는 중",
        "en": "✦ Computing prayer times",
    },
    "error_address": {
        "ko": "주소를 찾을 수 없어요. 더 구체적으로 입력해보세요. ({error})",
        "en": "Address not found. Try a more specific address. ({error})",
    },
    "error_no_schedule": {
        "ko": "이 날짜와 장소에서는 기도 시간을 계산할 수 없어요. ({error})",
        "en": "Prayer times cannot be computed for this place and date. ({error})",
    },
    "fajr": {"ko": "파즈르", "en": "Fajr"},
    "sunrise": {"ko": "일출", "en": "Sunrise"},
    "dhuhr": {"ko": "두후르", "en": "Dhuhr"},
    "asr": {"ko": "아스르", "en": "Asr"},
    "maghrib": {"ko": "마그립", "en": "Maghrib"},
    "isha": {"ko": "이샤", "en": "Isha"},
    "middle_of_the_night": {
        "ko": "한밤중",
        "en": "Middle of the night",
    },
    "last_third_of_the_night": {
        "ko": "밤의 마지막 3분의 1",
        "en": "Last third of the night",
    },
    "next_prayer": {
        "ko": "다음 기도",
        "en": "Next prayer",
    },
    "qibla": {
        "ko": "키블라 방향",
        "en": "Qibla",
    },
}


def t(key: str, lang: str) -> str:
    """Return the translated string for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
