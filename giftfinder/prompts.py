from typing import Any, Dict, List

from .config import MIN_GIFT_IDEAS
from .models import Criteria

GIFT_OPENER = "I need a gift suggestion for someone."

GIFT_INSTRUCTIONS = """
Please provide a list of at least {k} varied and diverse gift ideas.
For each idea, include its name, a brief description, and a direct purchase link.
Prioritize direct product links from major retailers like Amazon, Etsy, Target, Best Buy, or official brand websites.
If a direct product link is not feasible, provide a relevant search results page link on a major retailer.
Respond in JSON format as an array of objects, each with 'name', 'description', and 'purchaseLink' fields.
"""

MESSAGE_OPENER = "Write a heartfelt and creative gift card message or a short poem."

MESSAGE_INSTRUCTIONS = """
Make sure the message is suitable for the context and tone.
Keep it concise, around 50-100 words.
"""

GIFT_IDEAS_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "name": {"type": "STRING"},
            "description": {"type": "STRING"},
            "purchaseLink": {"type": "STRING"},
        },
        "propertyOrdering": ["name", "description", "purchaseLink"],
    },
}


def _flatten(block: str) -> str:
    return " ".join(line.strip() for line in block.strip().splitlines() if line.strip())


def price_range(min_price: str, max_price: str) -> str:
    """Returns the price range phrase, or "" when neither bound is set."""
    if min_price and max_price:
        return f"between ${min_price} and ${max_price}"
    if min_price:
        return f"above ${min_price}"
    if max_price:
        return f"up to ${max_price}"
    return ""


def _gift_clauses(c: Criteria) -> List[str]:
    prices = price_range(c.min_price, c.max_price)
    parts = [
        f"The occasion is {c.occasion}." if c.occasion else "",
        f"They are my {c.relationship}." if c.relationship else "",
        f"They are {c.age} years old." if c.age else "",
        f"Their gender is {c.gender}." if c.gender else "",
        f"Notable events in their life include {c.notable_events}." if c.notable_events else "",
        f"They are interested in {c.interests}." if c.interests else "",
        f"The price range should be {prices}." if prices else "",
    ]
    return [x for x in parts if x]


def _message_clauses(c: Criteria) -> List[str]:
    parts = [
        f"The occasion is {c.occasion}." if c.occasion else "",
        f"The recipient is my {c.relationship}." if c.relationship else "",
        f"They are {c.age} years old." if c.age else "",
        f"Their gender is {c.gender}." if c.gender else "",
        f"They are interested in {c.interests}." if c.interests else "",
        f"They have been busy with {c.notable_events}." if c.notable_events else "",
    ]
    return [x for x in parts if x]


def build_gift_prompt(criteria: Criteria, k: int = MIN_GIFT_IDEAS) -> str:
    parts = [GIFT_OPENER, *_gift_clauses(criteria), _flatten(GIFT_INSTRUCTIONS.format(k=k))]
    return " ".join(parts)


def build_message_prompt(criteria: Criteria) -> str:
    parts = [MESSAGE_OPENER, *_message_clauses(criteria), _flatten(MESSAGE_INSTRUCTIONS)]
    return " ".join(parts)


def article_for(word: str) -> str:
    if not word or not word.strip():
        return "a"
    return "an" if word.strip().lower()[0] in "aeiou" else "a"


def pronoun_verb(gender: str) -> str:
    return "are" if (gender or "").lower() == "they" else "is"


def possessive_for(gender: str) -> str:
    g = (gender or "").lower()
    if g == "he":
        return "his"
    if g == "she":
        return "her"
    return "their"
