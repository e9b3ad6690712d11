import json
from decimal import Decimal

from teapot.application.cart_manager import CartManager
from teapot.domain.menu import find_item
from teapot.domain.models import MenuItem


def test_adding_same_item_twice_makes_one_line(cart_store):
    cart = CartManager("c1", cart_store)
    smoothie = find_item("Passion Fruit Smoothie")

    cart.add_item(smoothie)
    cart.add_item(smoothie)

    assert len(cart.lines) == 1
    assert cart.quantity_of("Passion Fruit Smoothie") == 2


def test_lines_keep_the_order_items_were_added(cart_store):
    cart = CartManager("c1", cart_store)
    for name in ["Samosas", "Mango Lassi", "Samosas", "Bhajia"]:
        cart.add_item(find_item(name))

    assert [line.item.name for line in cart.lines] == ["Samosas", "Mango Lassi", "Bhajia"]


def test_decrease_from_one_removes_the_line(cart_store):
    cart = CartManager("c1", cart_store)
    cart.add_item(find_item("Bhajia"))

    cart.decrease_quantity("Bhajia")

    assert cart.is_empty
    assert all(line.quantity > 0 for line in cart.lines)


def test_increase_and_decrease(cart_store):
    cart = CartManager("c1", cart_store)
    cart.add_item(find_item("Bhajia"))
    cart.increase_quantity("Bhajia")
    cart.increase_quantity("Bhajia")
    cart.decrease_quantity("Bhajia")

    assert cart.quantity_of("Bhajia") == 2


def test_unknown_names_are_ignored(cart_store):
    cart = CartManager("c1", cart_store)
    cart.add_item(find_item("Bhajia"))

    cart.remove_item("Chai")
    cart.increase_quantity("Chai")
    cart.decrease_quantity("Chai")

    assert [line.item.name for line in cart.lines] == ["Bhajia"]
    assert cart.quantity_of("Bhajia") == 1


def test_remove_item(cart_store):
    cart = CartManager("c1", cart_store)
    cart.add_item(find_item("Bhajia"))
    cart.add_item(find_item("Samosas"))

    cart.remove_item("Bhajia")

    assert [line.item.name for line in cart.lines] == ["Samosas"]


def test_empty_cart_totals_zero(cart_store):
    assert CartManager("c1", cart_store).total() == Decimal("0")


def test_total(cart_store):
    cart = CartManager("c1", cart_store)
    smoothie = MenuItem(name="Smoothie", price="$5.99")
    juice = MenuItem(name="Juice", price="$3.99")
    cart.add_item(smoothie)
    cart.add_item(smoothie)
    cart.add_item(juice)

    assert cart.total() == Decimal("15.97")


def test_unparsable_price_counts_as_zero(cart_store):
    cart = CartManager("c1", cart_store)
    cart.add_item(MenuItem(name="Mystery", price="market price"))
    cart.add_item(MenuItem(name="Juice", price="$3.99"))

    assert cart.total() == Decimal("3.99")


def test_cart_survives_restart(cart_store):
    cart = CartManager("c1", cart_store)
    cart.add_item(find_item("Samosas"))
    cart.add_item(find_item("Mango Lassi"))
    cart.add_item(find_item("Samosas"))
    cart.increase_quantity("Mango Lassi")
    cart.increase_quantity("Mango Lassi")
    before = [(line.item, line.quantity) for line in cart.lines]

    restored = CartManager("c1", cart_store)

    assert [(line.item, line.quantity) for line in restored.lines] == before


def test_every_mutation_is_persisted(cart_store):
    cart = CartManager("c1", cart_store)
    cart.add_item(find_item("Samosas"))
    assert cart_store.load("c1")[0]["quantity"] == 1

    cart.increase_quantity("Samosas")
    assert cart_store.load("c1")[0]["quantity"] == 2

    cart.remove_item("Samosas")
    assert cart_store.load("c1") == []


def test_stored_lines_use_order_item_shape(cart_store):
    cart = CartManager("c1", cart_store)
    cart.add_item(find_item("Orange Juice"))

    assert cart_store.load("c1") == [{
        "name": "Orange Juice",
        "price": "$3.99",
        "description": "Freshly squeezed orange juice with a touch of honey",
        "image": "/images/orange.jpg",
        "category": "Juices",
        "quantity": 1,
    }]


def test_carts_are_kept_apart(cart_store):
    CartManager("c1", cart_store).add_item(find_item("Samosas"))

    assert CartManager("c2", cart_store).is_empty


def test_unreadable_stored_lines_are_skipped(cart_store):
    cart_store._memory_store["cart:c1:orderItems"] = json.dumps([
        {"name": "Samosas", "price": "$3.99", "quantity": 2},
        {"name": "Broken", "price": "$1.00", "quantity": 0},
        "garbage",
    ])

    cart = CartManager("c1", cart_store)

    assert [(line.item.name, line.quantity) for line in cart.lines] == [("Samosas", 2)]


def test_clear_empties_cart_and_store(cart_store):
    cart = CartManager("c1", cart_store)
    cart.add_item(find_item("Samosas"))

    cart.clear()

    assert cart.is_empty
    assert cart_store.load("c1") == []
