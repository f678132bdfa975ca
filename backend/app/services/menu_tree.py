# backend/app/services/menu_tree.py
"""
Construcción del árbol de menú a partir de las tres colecciones planas.

build_menu_tree recibe categorías, subcategorías e ítems ya consultados y
devuelve un bosque con un nodo raíz por categoría. Cada colección se recorre
una sola vez usando mapas indexados por id:

- Las subcategorías cuyo padre no está en la lista se descartan.
- Cada ítem cuelga de su subcategoría si la tiene, si no de su categoría;
  los ítems cuyo padre no está en el árbol se descartan.
- Las categorías cuentan sus subcategorías directas y sus ítems (directos y
  a través de sus subcategorías); las subcategorías cuentan sus ítems.
- Las raíces siguen el orden de entrada de las categorías. Los hijos se
  ordenan siempre igual (subcategorías antes que ítems, después por id), de
  modo que el árbol no depende del orden de las colecciones.
"""

import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

CHILD_TYPE_ORDER = {"subcategory": 0, "item": 1}


@dataclass
class MenuTreeNode:
    id: int
    type: str
    name: str
    children: List["MenuTreeNode"] = field(default_factory=list)
    sub_category_count: Optional[int] = None
    item_count: Optional[int] = None
    parent: Optional["MenuTreeNode"] = field(default=None, repr=False, compare=False)


def build_menu_tree(
    categories: Iterable[Any],
    subcategories: Iterable[Any],
    items: Iterable[Any],
) -> List[MenuTreeNode]:
    tree: List[MenuTreeNode] = []
    category_nodes: Dict[int, MenuTreeNode] = {}
    subcategory_nodes: Dict[int, MenuTreeNode] = {}

    for category in categories:
        node = MenuTreeNode(
            id=category.id,
            type="category",
            name=category.name,
            sub_category_count=0,
            item_count=0,
        )
        category_nodes[category.id] = node
        tree.append(node)

    for subcategory in subcategories:
        parent = category_nodes.get(subcategory.category_id)
        if parent is None:
            continue
        node = MenuTreeNode(
            id=subcategory.id,
            type="subcategory",
            name=subcategory.name,
            item_count=0,
            parent=parent,
        )
        parent.children.append(node)
        parent.sub_category_count += 1
        subcategory_nodes[subcategory.id] = node

    for item in items:
        if item.subcategory_id is not None:
            parent = subcategory_nodes.get(item.subcategory_id)
        elif item.category_id is not None:
            parent = category_nodes.get(item.category_id)
        else:
            parent = None
        if parent is None:
            continue

        parent.children.append(MenuTreeNode(id=item.id, type="item", name=item.name, parent=parent))
        parent.item_count += 1
        # Los ítems de una subcategoría también cuentan para su categoría
        if parent.parent is not None:
            parent.parent.item_count += 1

    for node in itertools.chain(category_nodes.values(), subcategory_nodes.values()):
        node.children.sort(key=lambda child: (CHILD_TYPE_ORDER[child.type], child.id))

    return tree
