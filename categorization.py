"""Keyword-based category inference for transaction descriptions.

Every transaction logged through the agent must land in one of a closed set
of expense categories. When the category supplied by the caller is missing
or outside that set, the description is matched against a fixed keyword
table and the first matching category wins.

The table is an ordered list rather than a dict lookup: several keywords
appear under more than one category ("store", "bus", "taxi", ...), and the
earlier entry always takes precedence.
"""

from typing import List, Tuple

FALLBACK_CATEGORY = "Services"

CATEGORY_KEYWORDS: List[Tuple[str, Tuple[str, ...]]] = [
    (
        "Food and Drinks",
        (
            "restaurant", "food", "meal", "dine", "cafe", "breakfast", "lunch",
            "dinner", "pizza", "burger", "snack", "eatery", "bar", "pub",
            "drink", "coffee", "tea", "juice", "wine", "beer", "cocktail",
            "brew", "taco", "sushi", "bakery", "mcdonald", "starbucks",
        ),
    ),
    (
        "Groceries",
        ("grocer", "supermarket", "grocery", "market", "store", "mart"),
    ),
    (
        "Shopping",
        (
            "shop", "store", "mall", "retail", "clothes", "apparel", "fashion",
            "electronics", "purchase", "buy",
        ),
    ),
    (
        "Travel",
        (
            "flight", "airline", "hotel", "taxi", "uber", "lyft", "bus",
            "train", "travel", "trip", "journey", "booking", "expedia",
            "airbnb",
        ),
    ),
    (
        "Services",
        (
            "service", "repair", "clean", "maintenance", "subscription",
            "consult", "fee", "support", "utility", "internet", "phone",
            "cell", "insurance",
        ),
    ),
    (
        "Entertainment",
        (
            "movie", "cinema", "theater", "concert", "music", "game",
            "netflix", "spotify", "show", "event", "ticket", "amusement",
            "park",
        ),
    ),
    (
        "Health",
        (
            "pharmacy", "doctor", "hospital", "clinic", "health", "medicine",
            "drug", "dentist", "optician", "fitness", "gym", "workout", "yoga",
        ),
    ),
    (
        "Transport",
        (
            "transport", "bus", "train", "taxi", "uber", "lyft", "metro",
            "subway", "cab", "ride", "commute", "fare",
        ),
    ),
]

# The only categories the agent path may assign.
REQUIRED_CATEGORIES: Tuple[str, ...] = tuple(name for name, _ in CATEGORY_KEYWORDS)

# Seeded alongside the required set; accepted on explicit inserts but never
# produced by classify().
PASS_THROUGH_CATEGORIES: Tuple[Tuple[str, str], ...] = (
    ("Rent", "Expense"),
    ("Salary", "Income"),
    ("Investments", "Income"),
    ("Freelance", "Income"),
)


def classify(description: str) -> str:
    """Map a free-text description to one of REQUIRED_CATEGORIES.

    Matching is a case-insensitive substring test. Descriptions that match
    nothing (including empty ones) fall back to "Services".
    """
    if not description or not description.strip():
        return FALLBACK_CATEGORY

    text = description.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return category

    return FALLBACK_CATEGORY


def is_required_category(name: str) -> bool:
    """True if ``name`` is exactly one of the required category names."""
    return name in REQUIRED_CATEGORIES


def resolve_category(category_hint: str, description: str) -> str:
    """Keep a valid category hint, otherwise infer one from the description."""
    if category_hint and is_required_category(category_hint):
        return category_hint
    return classify(description)
