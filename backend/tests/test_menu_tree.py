# backend/tests/test_menu_tree.py

import itertools
from types import SimpleNamespace

from app.services.menu_tree import build_menu_tree


def category(id, name):
    return SimpleNamespace(id=id, name=name)


def subcategory(id, name, category_id):
    return SimpleNamespace(id=id, name=name, category_id=category_id)


def item(id, name, category_id=None, subcategory_id=None):
    return SimpleNamespace(id=id, name=name, category_id=category_id, subcategory_id=subcategory_id)


CATEGORIES = [category(1, "Drinks"), category(2, "Food")]
SUBCATEGORIES = [subcategory(10, "Soda", 1), subcategory(11, "Juice", 1), subcategory(20, "Pizza", 2)]
ITEMS = [
    item(100, "Cola", subcategory_id=10),
    item(101, "Orange", subcategory_id=11),
    item(102, "Water", category_id=1),
    item(200, "Margherita", subcategory_id=20),
]


def test_tree_has_one_root_per_category():
    tree = build_menu_tree(CATEGORIES, SUBCATEGORIES, ITEMS)
    assert [(node.id, node.type) for node in tree] == [(1, "category"), (2, "category")]


def test_category_counts_include_subcategory_items():
    drinks, food = build_menu_tree(CATEGORIES, SUBCATEGORIES, ITEMS)
    assert drinks.sub_category_count == 2
    assert drinks.item_count == 3
    assert food.sub_category_count == 1
    assert food.item_count == 1


def test_items_hang_from_their_direct_parent():
    drinks, _ = build_menu_tree(CATEGORIES, SUBCATEGORIES, ITEMS)
    children = {(child.type, child.name): child for child in drinks.children}

    assert ("item", "Water") in children
    soda = children[("subcategory", "Soda")]
    assert [child.name for child in soda.children] == ["Cola"]
    assert soda.item_count == 1
    assert soda.sub_category_count is None


def test_item_nodes_carry_no_counts():
    _, food = build_menu_tree(CATEGORIES, SUBCATEGORIES, ITEMS)
    margherita = food.children[0].children[0]
    assert margherita.type == "item"
    assert margherita.item_count is None
    assert margherita.children == []


def test_orphans_are_dropped():
    subcategories = SUBCATEGORIES + [subcategory(99, "Lost", 42)]
    items = ITEMS + [item(300, "Ghost", subcategory_id=99), item(301, "Stray", category_id=42)]

    tree = build_menu_tree(CATEGORIES, subcategories, items)

    names = set()
    stack = list(tree)
    while stack:
        node = stack.pop()
        names.add(node.name)
        stack.extend(node.children)
    assert not {"Lost", "Ghost", "Stray"} & names


def test_empty_input_gives_empty_tree():
    assert build_menu_tree([], [], []) == []


def test_children_are_subcategories_then_items_by_id():
    drinks, _ = build_menu_tree(CATEGORIES, list(reversed(SUBCATEGORIES)), list(reversed(ITEMS)))
    assert [(child.type, child.id) for child in drinks.children] == [
        ("subcategory", 10),
        ("subcategory", 11),
        ("item", 102),
    ]


def test_roots_follow_category_input_order():
    tree = build_menu_tree(list(reversed(CATEGORIES)), SUBCATEGORIES, ITEMS)
    assert [node.name for node in tree] == ["Food", "Drinks"]


def test_input_order_does_not_change_the_tree():
    expected = build_menu_tree(CATEGORIES, SUBCATEGORIES, ITEMS)
    for subcategories in itertools.permutations(SUBCATEGORIES):
        for items in itertools.permutations(ITEMS):
            assert build_menu_tree(CATEGORIES, subcategories, items) == expected
