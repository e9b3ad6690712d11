from typing import Dict, List, Optional

from teapot.domain.models import MenuItem

# Tab shown when the page opens
DEFAULT_TAB = "drinks"

DRINKS = [
    MenuItem(
        name="Passion Fruit Smoothie",
        price="$5.99",
        description="Fresh passion fruit blended with ice and honey",
        image="/images/passion.jpg",
        category="Smoothies",
    ),
    MenuItem(
        name="Mango Lassi",
        price="$4.99",
        description="Creamy mango smoothie with a hint of cardamom",
        image="/images/mango.jpg",
        category="Smoothies",
    ),
    MenuItem(
        name="Orange Juice",
        price="$3.99",
        description="Freshly squeezed orange juice with a touch of honey",
        image="/images/orange.jpg",
        category="Juices",
    ),
    MenuItem(
        name="Apple Cider",
        price="$4.99",
        description="Fresh apple juice with cinnamon and ginger",
        image="/images/apple.jpg",
        category="Juices",
    ),
    MenuItem(
        name="Watermelon Cooler",
        price="$5.99",
        description="Refreshing watermelon drink with mint and lime",
        image="/images/watermelon.jpg",
        category="Coolers",
    ),
    MenuItem(
        name="Avocado Smoothie",
        price="$6.99",
        description="Creamy avocado with banana and honey",
        image="/images/avocado.jpg",
        category="Smoothies",
    ),
]

SNACKS = [
    MenuItem(
        name="Mahamri",
        price="$2.99",
        description="Traditional Kenyan sweet bread, perfect with tea",
        image="/images/mahamri.jpg",
        category="Breads",
    ),
    MenuItem(
        name="Samosas",
        price="$3.99",
        description="Crispy pastry filled with spiced vegetables",
        image="/images/samosas.jpg",
        category="Snacks",
    ),
    MenuItem(
        name="Bhajia",
        price="$2.49",
        description="Crispy battered potato fritters with spices",
        image="/images/bhajia.jpg",
        category="Snacks",
    ),
    MenuItem(
        name="Matobosho",
        price="$3.99",
        description="Crispy, spicy potato chips with a hint of chili",
        image="/images/matobosho.jpg",
        category="Chips",
    ),
]

MENU_TABS: Dict[str, List[MenuItem]] = {
    "drinks": DRINKS,
    "snacks": SNACKS,
}

_BY_NAME: Dict[str, MenuItem] = {item.name: item for items in MENU_TABS.values() for item in items}


def items_for_tab(tab: str) -> List[MenuItem]:
    """Unknown tabs fall back to the default one."""
    return MENU_TABS.get(tab, MENU_TABS[DEFAULT_TAB])


def find_item(name: str) -> Optional[MenuItem]:
    return _BY_NAME.get(name)
