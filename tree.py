from typing import Generic, Iterator, List, Optional, TypeVar

D = TypeVar("D")


class Node(Generic[D]):
    """
    A node in a search tree.
    - index: position of this node in its tree's node table.
    - parent: index of the parent node, None for the root. Never owning.
    - children: indices of child nodes, in insertion order.
    - visits: how many simulations have passed through this node.
    - value: sum of simulation results, from this node's point of view.
    - data: payload (for MCTS, the position this node represents).
    """
    def __init__(self, index: int, data: D, parent: Optional[int] = None):
        self.index = index
        self.data = data
        self.parent = parent
        self.children: List[int] = []
        self.visits = 0
        self.value = 0.0

    def is_leaf(self) -> bool:
        """Leaf node if it has no children."""
        return len(self.children) == 0

    def is_root(self) -> bool:
        """Root node if it has no parent."""
        return self.parent is None

    def __repr__(self):
        return (f"Node(index={self.index}, visits={self.visits}, value={self.value}, "
                f"children={len(self.children)})")


class Tree(Generic[D]):
    """
    Owns every node of one search tree in a flat table.

    Nodes refer to each other by index only, so the whole tree goes away
    with the Tree object. Nodes are never deleted from the table;
    ``remove_child`` only unlinks.
    """

    def __init__(self, root_data: D):
        self.nodes: List[Node[D]] = [Node(0, root_data)]

    @property
    def root(self) -> Node[D]:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node[D]:
        return self.nodes[index]

    def __iter__(self) -> Iterator[Node[D]]:
        return iter(self.nodes)

    def add_node(self, data: D, parent: Optional[Node[D]] = None) -> Node[D]:
        """Create a node, linking it under ``parent`` when one is given."""
        node = Node(len(self.nodes), data, parent.index if parent is not None else None)
        self.nodes.append(node)
        if parent is not None:
            parent.children.append(node.index)
        return node

    def add_child(self, parent: Node[D], data: D) -> Node[D]:
        return self.add_node(data, parent)

    def remove_child(self, parent: Node[D], child: Node[D]):
        parent.children.remove(child.index)
        child.parent = None

    def set_children(self, parent: Node[D], children: List[Node[D]]):
        for index in parent.children:
            self.nodes[index].parent = None
        parent.children = []
        for child in children:
            # A node has exactly one parent: unlink it from the old one first
            old_parent = self.parent_of(child)
            if old_parent is not None:
                old_parent.children.remove(child.index)
            child.parent = parent.index
            parent.children.append(child.index)

    def parent_of(self, node: Node[D]) -> Optional[Node[D]]:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def children_of(self, node: Node[D]) -> List[Node[D]]:
        return [self.nodes[index] for index in node.children]
