import math

from motia_studio.errors import InvalidDescriptionError

MIN_DESCRIPTION_LENGTH = 10

_NAME_KEYWORDS = (
    (("payment", "stripe"), "Payment Processing System"),
    (("todo", "task"), "Todo API"),
    (("webhook",), "Webhook Handler"),
    (("ai", "agent"), "AI Agent Workflow"),
    (("ecommerce", "shop"), "E-commerce Backend"),
)


def check_description(description: str) -> str:
    """Return the stripped description, rejecting ones too short to generate from."""
    stripped = (description or "").strip()
    if len(stripped) < MIN_DESCRIPTION_LENGTH:
        raise InvalidDescriptionError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters"
        )
    return stripped


def extract_project_name(description: str) -> str:
    """Pick a display name from keywords in the description."""
    words = description.lower()
    for keywords, name in _NAME_KEYWORDS:
        if any(keyword in words for keyword in keywords):
            return name
    return "Custom Backend API"


def estimate_generation_time(description: str) -> int:
    """Estimated generation time in seconds: 15s plus 5s per 100 chars, capped at 60s."""
    return min(15 + math.ceil(len(description) / 100) * 5, 60)
