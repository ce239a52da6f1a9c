"""
Locale Vocabulary Table

Static per-locale records holding command keywords, response messages,
alert templates, category labels and greetings. Adding a locale means adding
one LocaleVocabulary entry to VOCABULARIES - nothing else branches on locale.
"""

import logging
from dataclasses import dataclass

from .models import Action, ObstacleCategory, Severity
from .utils.constants import DEFAULT_LOCALE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocaleVocabulary:
    """
    Everything the core says or listens for in one language.

    Attributes:
        code: Locale code ("en", "hi")
        language_tag: BCP-47 tag handed to the speech collaborator
        commands: Ordered keyword phrases per action
        responses: Spoken confirmations keyed by action value, plus
                   "not_understood", "no_previous", "listening"
        alert_templates: Alert message per severity, with {object} and {distance}
        distance_near: Distance phrase used below one meter
        distance_template: Distance phrase with {value}
        time_template: Spoken time with {hour}, {minute} and {meridiem}
        greeting: Auto-activation greeting
        salutations: "morning" / "afternoon" / "evening" prefixes
        category_labels: Spoken name per obstacle category
        status_labels: Banner text per worst severity, "clear" when empty
    """

    code: str
    language_tag: str
    commands: dict[Action, tuple[str, ...]]
    responses: dict[str, str]
    alert_templates: dict[Severity, str]
    distance_near: str
    distance_template: str
    time_template: str
    greeting: str
    salutations: dict[str, str]
    category_labels: dict[ObstacleCategory, str]
    status_labels: dict[str, str]

    def response(self, key: str) -> str:
        return self.responses[key]

    def label(self, category: ObstacleCategory) -> str:
        return self.category_labels.get(category, category.value)


ENGLISH = LocaleVocabulary(
    code="en",
    language_tag="en-IN",
    commands={
        Action.SOS: ("sos", "help", "emergency", "send sos"),
        Action.NAVIGATE: ("navigate", "navigation", "directions", "go to", "take me to"),
        Action.CAMERA: ("camera", "detect", "scan", "obstacle", "start camera"),
        Action.STOP: ("stop", "cancel", "pause", "end"),
        Action.HOME: ("home", "go home", "main", "dashboard"),
        Action.SETTINGS: ("settings", "options", "preferences"),
        Action.REPEAT: ("repeat", "say again", "again"),
        Action.WHERE: ("where am i", "my location", "location", "where"),
        Action.TIME: ("what time", "time", "clock"),
    },
    responses={
        "sos": "Opening SOS",
        "navigate": "Opening navigation",
        "camera": "Opening obstacle detection",
        "stop": "Stopped",
        "home": "Going home",
        "settings": "Opening settings",
        "where": "Showing your current location",
        "not_understood": "Command not understood. Please try again.",
        "no_previous": "There is no previous message to repeat.",
        "listening": "Listening...",
    },
    alert_templates={
        Severity.DANGER: "Danger! {object} {distance} ahead",
        Severity.WARNING: "Caution, {object} {distance} ahead",
        Severity.SAFE: "{object} detected, {distance} ahead",
    },
    distance_near="less than one meter",
    distance_template="{value} meters",
    time_template="The time is {hour}:{minute:02d} {meridiem}",
    greeting=(
        "Welcome to DrishtiAI. Tap Start Navigation to begin, "
        "or say a voice command."
    ),
    salutations={
        "morning": "Good Morning",
        "afternoon": "Good Afternoon",
        "evening": "Good Evening",
    },
    category_labels={
        ObstacleCategory.PERSON: "person",
        ObstacleCategory.BICYCLE: "bicycle",
        ObstacleCategory.CAR: "car",
        ObstacleCategory.MOTORCYCLE: "motorcycle",
        ObstacleCategory.STAIRS: "stairs",
        ObstacleCategory.POTHOLE: "pothole",
        ObstacleCategory.DOG: "dog",
        ObstacleCategory.CONE: "traffic cone",
        ObstacleCategory.BENCH: "bench",
        ObstacleCategory.POLE: "pole",
        ObstacleCategory.RICKSHAW: "auto rickshaw",
        ObstacleCategory.SPEED_BREAKER: "speed breaker",
    },
    status_labels={
        "clear": "Path is clear",
        "safe": "Path is clear",
        "warning": "Obstacle ahead",
        "danger": "DANGER",
    },
)

HINDI = LocaleVocabulary(
    code="hi",
    language_tag="hi-IN",
    commands={
        Action.SOS: ("मदद", "एसओएस", "आपातकाल", "बचाओ"),
        Action.NAVIGATE: ("नेविगेट", "दिशा", "रास्ता", "ले चलो"),
        Action.CAMERA: ("कैमरा", "स्कैन", "बाधा", "देखो"),
        Action.STOP: ("रुको", "बंद", "रोको"),
        Action.HOME: ("होम", "घर", "मुख्य"),
        Action.SETTINGS: ("सेटिंग", "विकल्प"),
        Action.REPEAT: ("दोहराओ", "फिर से", "दोबारा"),
        Action.WHERE: ("मैं कहां", "मैं कहाँ", "स्थान", "लोकेशन"),
        Action.TIME: ("समय", "टाइम", "कितने बजे"),
    },
    responses={
        "sos": "एसओएस खोल रहे हैं",
        "navigate": "नेविगेशन खोल रहे हैं",
        "camera": "कैमरा खोल रहे हैं",
        "stop": "रुक गया",
        "home": "होम पर जा रहे हैं",
        "settings": "सेटिंग्स खोल रहे हैं",
        "where": "आपका वर्तमान स्थान दिखा रहे हैं",
        "not_understood": "आदेश समझ नहीं आया। कृपया पुनः प्रयास करें।",
        "no_previous": "दोहराने के लिए कोई पिछला संदेश नहीं है।",
        "listening": "सुन रहा हूँ...",
    },
    alert_templates={
        Severity.DANGER: "खतरा! {object} {distance} आगे",
        Severity.WARNING: "सावधान, {object} {distance} आगे",
        Severity.SAFE: "{object} मिला, {distance} आगे",
    },
    distance_near="एक मीटर से कम",
    distance_template="{value} मीटर",
    time_template="अभी {hour} बजकर {minute:02d} मिनट हुए हैं",
    greeting=(
        "दृष्टिAI में आपका स्वागत है। नेविगेशन शुरू करें पर टैप करें "
        "या आवाज़ कमांड बोलें।"
    ),
    salutations={
        "morning": "सुप्रभात",
        "afternoon": "नमस्ते",
        "evening": "शुभ संध्या",
    },
    category_labels={
        ObstacleCategory.PERSON: "व्यक्ति",
        ObstacleCategory.BICYCLE: "साइकिल",
        ObstacleCategory.CAR: "कार",
        ObstacleCategory.MOTORCYCLE: "मोटरसाइकिल",
        ObstacleCategory.STAIRS: "सीढ़ियाँ",
        ObstacleCategory.POTHOLE: "गड्ढा",
        ObstacleCategory.DOG: "कुत्ता",
        ObstacleCategory.CONE: "ट्रैफिक कोन",
        ObstacleCategory.BENCH: "बेंच",
        ObstacleCategory.POLE: "खंभा",
        ObstacleCategory.RICKSHAW: "ऑटो रिक्शा",
        ObstacleCategory.SPEED_BREAKER: "स्पीड ब्रेकर",
    },
    status_labels={
        "clear": "रास्ता साफ है",
        "safe": "रास्ता साफ है",
        "warning": "आगे बाधा है",
        "danger": "खतरा",
    },
)

VOCABULARIES: dict[str, LocaleVocabulary] = {
    ENGLISH.code: ENGLISH,
    HINDI.code: HINDI,
}


def normalize_locale_code(locale: str) -> str:
    """Language part of a locale tag: "hi-IN" and "HI_in" both give "hi"."""
    return locale.strip().lower().replace("_", "-").split("-")[0]


def resolve_locale(locale: str | None) -> str:
    """
    Normalize a locale string to a supported code.

    Accepts region-qualified tags ("hi-IN", "en_US"). Unknown or empty
    locales fall back to English.
    """
    if locale:
        code = normalize_locale_code(locale)
        if code in VOCABULARIES:
            return code
    logger.warning(f"Unsupported locale {locale!r}, falling back to {DEFAULT_LOCALE}")
    return DEFAULT_LOCALE


def get_vocabulary(locale: str | None) -> LocaleVocabulary:
    """Look up the vocabulary for a locale, falling back to English."""
    if locale in VOCABULARIES:
        return VOCABULARIES[locale]
    return VOCABULARIES[resolve_locale(locale)]
