"""Unbalanced binary search tree mapping ordered keys to values.

Nodes keep a back-reference to their parent so deletion can rewire links in
place. Removing a node with two children relinks its inorder successor into
the vacated position; no key or value is ever copied between nodes, so every
surviving entry stays on the ``Node`` it was inserted on.

Not thread-safe. Callers sharing a tree across threads must serialize access,
and a visitor must not mutate the tree it is walking.
"""

import logging
from typing import TypeVar, Generic, Callable, Iterator, List, Optional, Tuple

from circular_queue import CircularQueue
from tree_errors import InvalidKeyError, TreeStructureError

logger = logging.getLogger(__name__)

K = TypeVar('K')
V = TypeVar('V')

Visitor = Callable[[K, V], None]


class BinarySearchTree(Generic[K, V]):
    class Node:
        def __init__(self, key: K, value: V,
                     parent: Optional['BinarySearchTree.Node'] = None) -> None:
            self.key: K = key
            self.value: V = value
            self.left: Optional['BinarySearchTree.Node'] = None
            self.right: Optional['BinarySearchTree.Node'] = None
            self.parent: Optional['BinarySearchTree.Node'] = parent

        def is_root(self) -> bool:
            return self.parent is None

        def is_leaf(self) -> bool:
            return self.left is None and self.right is None

        def has_left_child(self) -> bool:
            return self.left is not None

        def has_right_child(self) -> bool:
            return self.right is not None

        def is_left_child(self) -> bool:
            return self.parent is not None and self.parent.left is self

        def is_right_child(self) -> bool:
            return self.parent is not None and self.parent.right is self

        def __repr__(self) -> str:
            return f"Node({self.key!r}: {self.value!r})"

    def __init__(self, check_invariants: bool = False) -> None:
        """
        Args:
            check_invariants: run ``check_invariants()`` after every mutation.
                Walks the whole tree, so meant for debugging and tests.
        """
        self._root: Optional[BinarySearchTree.Node] = None
        self._size: int = 0
        self._check: bool = check_invariants

    # ------------------------------------------------------------------
    # Map operations
    # ------------------------------------------------------------------

    def put(self, key: K, value: V) -> None:
        """Insert ``key``, replacing the value if the key is already present."""
        if key is None:
            raise InvalidKeyError("put")

        if self._root is None:
            self._root = BinarySearchTree.Node(key, value)
            self._size += 1
            self._after_mutation()
            return

        node = self._root
        while True:
            if key < node.key:
                if node.left is None:
                    node.left = BinarySearchTree.Node(key, value, parent=node)
                    self._size += 1
                    break
                node = node.left
            elif key > node.key:
                if node.right is None:
                    node.right = BinarySearchTree.Node(key, value, parent=node)
                    self._size += 1
                    break
                node = node.right
            else:
                node.value = value
                break
        self._after_mutation()

    def insert(self, key: K, value: Optional[V] = None) -> None:
        self.put(key, value)  # type: ignore[arg-type]

    def get(self, key: K, default: Optional[V] = None) -> Optional[V]:
        if key is None:
            raise InvalidKeyError("get")
        node = self._find_node(key)
        if node is None:
            return default
        return node.value

    def contains(self, key: K) -> bool:
        if key is None:
            raise InvalidKeyError("contains")
        return self._find_node(key) is not None

    def remove(self, key: K) -> Optional[V]:
        """Remove ``key`` and return its value.

        Returns None without touching the tree when the key is absent.

        Raises:
            InvalidKeyError: if ``key`` is None. Nothing is searched or changed.
        """
        if key is None:
            raise InvalidKeyError("remove")

        target = self._find_node(key)
        if target is None:
            return None

        value = target.value

        if target.is_leaf():
            logger.debug("remove %r: leaf", key)
            self._transplant(target, None)
        elif target.right is None:
            logger.debug("remove %r: splice left child %r", key, target.left.key)
            self._transplant(target, target.left)
        elif target.left is None:
            logger.debug("remove %r: splice right child %r", key, target.right.key)
            self._transplant(target, target.right)
        else:
            successor = self._find_min(target.right)
            logger.debug("remove %r: two children, successor %r", key, successor.key)
            if successor.parent is not target:
                # successor has no left child; its right subtree takes its slot
                self._transplant(successor, successor.right)
                successor.right = target.right
                successor.right.parent = successor
            self._transplant(target, successor)
            successor.left = target.left
            successor.left.parent = successor

        target.parent = None
        target.left = None
        target.right = None
        self._size -= 1
        self._after_mutation()
        return value

    def _transplant(self, old: Node, new: Optional[Node]) -> None:
        # Puts ``new`` in ``old``'s slot under ``old``'s parent (or at the
        # root). ``new``'s children are left alone.
        parent = old.parent
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new
        if new is not None:
            new.parent = parent

    def min(self) -> K:
        if self._root is None:
            raise ValueError("min from empty tree")
        return self._find_min(self._root).key

    def max(self) -> K:
        if self._root is None:
            raise ValueError("max from empty tree")
        return self._find_max(self._root).key

    def root_key(self) -> Optional[K]:
        if self._root is None:
            return None
        return self._root.key

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._size == 0

    def clear(self) -> None:
        self._root = None
        self._size = 0

    def height(self) -> int:
        if self._root is None:
            return 0
        levels = 0
        queue: CircularQueue[BinarySearchTree.Node] = CircularQueue()
        queue.enqueue(self._root)
        while queue:
            levels += 1
            for _ in range(len(queue)):
                node = queue.dequeue()
                if node.left is not None:
                    queue.enqueue(node.left)
                if node.right is not None:
                    queue.enqueue(node.right)
        return levels

    def copy(self) -> 'BinarySearchTree[K, V]':
        """Return an independent tree with the same shape."""
        clone: BinarySearchTree[K, V] = BinarySearchTree(check_invariants=self._check)
        self.traverse_preorder(clone.put)
        return clone

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------

    def traverse_inorder(self, visitor: Visitor) -> None:
        """Visit left subtree, node, right subtree: ascending key order."""
        stack: List[BinarySearchTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            visitor(node.key, node.value)
            node = node.right

    def traverse_preorder(self, visitor: Visitor) -> None:
        if self._root is None:
            return
        stack: List[BinarySearchTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            visitor(node.key, node.value)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

    def traverse_postorder(self, visitor: Visitor) -> None:
        """Visit left subtree, right subtree, then the node itself."""
        stack: List[BinarySearchTree.Node] = []
        last_visited: Optional[BinarySearchTree.Node] = None
        node = self._root
        while stack or node is not None:
            if node is not None:
                stack.append(node)
                node = node.left
                continue
            top = stack[-1]
            if top.right is not None and top.right is not last_visited:
                node = top.right
            else:
                visitor(top.key, top.value)
                last_visited = stack.pop()

    def traverse_levelorder(self, visitor: Visitor) -> None:
        """Breadth-first, left to right within each level."""
        if self._root is None:
            return
        queue: CircularQueue[BinarySearchTree.Node] = CircularQueue()
        queue.enqueue(self._root)
        while queue:
            node = queue.dequeue()
            visitor(node.key, node.value)
            if node.left is not None:
                queue.enqueue(node.left)
            if node.right is not None:
                queue.enqueue(node.right)

    def in_order(self) -> List[K]:
        return self._collect_keys(self.traverse_inorder)

    def pre_order(self) -> List[K]:
        return self._collect_keys(self.traverse_preorder)

    def post_order(self) -> List[K]:
        return self._collect_keys(self.traverse_postorder)

    def level_order(self) -> List[K]:
        return self._collect_keys(self.traverse_levelorder)

    def keys(self) -> List[K]:
        return self.in_order()

    def values(self) -> List[V]:
        result: List[V] = []
        self.traverse_inorder(lambda key, value: result.append(value))
        return result

    def items(self) -> List[Tuple[K, V]]:
        result: List[Tuple[K, V]] = []
        self.traverse_inorder(lambda key, value: result.append((key, value)))
        return result

    def _collect_keys(self, traverse: Callable[[Visitor], None]) -> List[K]:
        result: List[K] = []
        traverse(lambda key, value: result.append(key))
        return result

    # ------------------------------------------------------------------
    # Invariant checking
    # ------------------------------------------------------------------

    def check_invariants(self) -> None:
        """Raise TreeStructureError unless the tree is structurally sound.

        Checks that the root has no parent, every child points back at its
        parent, no node is reachable twice, keys are strictly ordered, and
        the size counter matches the number of reachable nodes.
        """
        if self._root is None:
            if self._size != 0:
                self._fail(f"empty tree reports size {self._size}")
            return
        if self._root.parent is not None:
            self._fail("root has a parent", self._root.key)

        seen = set()
        # (node, exclusive lower bound, exclusive upper bound)
        stack = [(self._root, None, None)]
        while stack:
            node, low, high = stack.pop()
            if id(node) in seen:
                self._fail("node reachable more than once", node.key)
            seen.add(id(node))
            if low is not None and not low.key < node.key:
                self._fail(f"key not greater than ancestor {low.key!r}", node.key)
            if high is not None and not node.key < high.key:
                self._fail(f"key not less than ancestor {high.key!r}", node.key)
            for child, child_low, child_high in ((node.left, low, node), (node.right, node, high)):
                if child is None:
                    continue
                if child.parent is not node:
                    self._fail(f"parent link does not point at {node.key!r}", child.key)
                stack.append((child, child_low, child_high))

        if len(seen) != self._size:
            self._fail(f"size is {self._size} but {len(seen)} nodes are reachable")

    def _fail(self, message: str, key=None) -> None:
        logger.error("tree invariant violated: %s (key=%r)", message, key)
        raise TreeStructureError(message, key)

    def _after_mutation(self) -> None:
        if self._check:
            self.check_invariants()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find_node(self, key: K) -> Optional[Node]:
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                return node
        return None

    def _find_min(self, node: Node) -> Node:
        while node.left is not None:
            node = node.left
        return node

    def _find_max(self, node: Node) -> Node:
        while node.right is not None:
            node = node.right
        return node

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: K) -> bool:
        return self.contains(key)

    def __getitem__(self, key: K) -> V:
        if key is None:
            raise InvalidKeyError("__getitem__")
        node = self._find_node(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def __setitem__(self, key: K, value: V) -> None:
        self.put(key, value)

    def __delitem__(self, key: K) -> None:
        if key is None:
            raise InvalidKeyError("__delitem__")
        if self._find_node(key) is None:
            raise KeyError(key)
        self.remove(key)

    def __iter__(self) -> Iterator[K]:
        return iter(self.in_order())

    def __repr__(self) -> str:
        return f"BinarySearchTree({dict(self.items())})"

    def __str__(self) -> str:
        return f"BinarySearchTree(size={self._size})"
