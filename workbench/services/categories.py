from enum import Enum
from typing import Optional


class ComponentCategory(str, Enum):
    VITAMINS = "Witaminy"
    MINERALS = "Minerały"
    MACROELEMENTS = "Makroelementy"
    ENERGY = "Energia"
    ACTIVE_INGREDIENTS = "Składniki aktywne"


CATEGORY_COLORS = {
    ComponentCategory.VITAMINS: "success",
    ComponentCategory.MINERALS: "info",
    ComponentCategory.MACROELEMENTS: "primary",
    ComponentCategory.ENERGY: "warning",
    ComponentCategory.ACTIVE_INGREDIENTS: "secondary",
}

DEFAULT_COLOR = "default"


def parse_category(value: Optional[str]) -> Optional[ComponentCategory]:
    if not value:
        return None
    try:
        return ComponentCategory(value.strip())
    except ValueError:
        return None


def category_color(value: Optional[str]) -> str:
    """UI chip color for a component category; unknown categories get 'default'."""
    category = parse_category(value)
    if category is None:
        return DEFAULT_COLOR
    return CATEGORY_COLORS[category]
