"""A red-black tree holding items with unique keys."""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional


class DuplicateKeyError(ValueError):
    """Raised when inserting an item whose key is already in the tree."""


class _Node:
    __slots__ = ("data", "red", "left", "right", "parent")

    def __init__(self, data, red, nil):
        self.data = data
        self.red = red
        self.left = nil
        self.right = nil
        self.parent = nil


class RedBlackTree:
    """Balanced search tree; ``key(item)`` gives the unique, ordered key."""

    def __init__(self, key: Callable[[Any], Any]) -> None:
        if key is None:
            raise ValueError("a key function is required")
        self._key = key
        nil = _Node(None, False, None)
        nil.left = nil.right = nil.parent = nil
        self._nil = nil
        self._root = nil
        self._size = 0

    def insert(self, data) -> None:
        """Insert ``data``; raise DuplicateKeyError if its key exists."""
        nil = self._nil
        new_key = self._key(data)
        parent = nil
        node = self._root
        went_left = False
        while node is not nil:
            parent = node
            node_key = self._key(node.data)
            if new_key < node_key:
                node, went_left = node.left, True
            elif new_key > node_key:
                node, went_left = node.right, False
            else:
                raise DuplicateKeyError(new_key)
        z = _Node(data, True, nil)
        z.parent = parent
        if parent is nil:
            self._root = z
        elif went_left:
            parent.left = z
        else:
            parent.right = z
        self._insert_fixup(z)
        self._size += 1

    def find(self, key) -> Optional[Any]:
        """Return the item with ``key``, or None."""
        node = self._find_node(key)
        return None if node is None else node.data

    def __contains__(self, key) -> bool:
        return self._find_node(key) is not None

    def delete(self, key):
        """Remove and return the item with ``key``; KeyError if absent."""
        z = self._find_node(key)
        if z is None:
            raise KeyError(key)
        nil = self._nil
        y = z
        y_was_red = y.red
        if z.left is nil:
            x = z.right
            self._transplant(z, z.right)
        elif z.right is nil:
            x = z.left
            self._transplant(z, z.left)
        else:
            y = z.right
            while y.left is not nil:
                y = y.left
            y_was_red = y.red
            x = y.right
            if y.parent is z:
                x.parent = y
            else:
                self._transplant(y, y.right)
                y.right = z.right
                y.right.parent = y
            self._transplant(z, y)
            y.left = z.left
            y.left.parent = y
            y.red = z.red
        if not y_was_red:
            self._delete_fixup(x)
        self._size -= 1
        return z.data

    def __iter__(self) -> Iterator:
        nil = self._nil
        stack = []
        node = self._root
        while stack or node is not nil:
            while node is not nil:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node.data
            node = node.right

    def __len__(self) -> int:
        return self._size

    def check_invariants(self) -> int:
        """Verify the red-black properties and return the black height.

        Raises ValueError on the first violation found.
        """
        nil = self._nil
        if self._root.red:
            raise ValueError("root is red")
        if self._root is not nil and self._root.parent is not nil:
            raise ValueError("root has a parent")

        def walk(node) -> int:
            if node is nil:
                return 0
            for child in (node.left, node.right):
                if child is not nil and child.parent is not node:
                    raise ValueError("broken parent link")
                if node.red and child.red:
                    raise ValueError("red node with a red child")
            left_height = walk(node.left)
            if left_height != walk(node.right):
                raise ValueError("unequal black heights")
            return left_height + (0 if node.red else 1)

        height = walk(self._root)
        keys = [self._key(item) for item in self]
        if any(a >= b for a, b in zip(keys, keys[1:])):
            raise ValueError("keys out of order")
        if len(keys) != self._size:
            raise ValueError("size does not match node count")
        return height

    def _find_node(self, key):
        nil = self._nil
        node = self._root
        while node is not nil:
            node_key = self._key(node.data)
            if key < node_key:
                node = node.left
            elif key > node_key:
                node = node.right
            else:
                return node
        return None

    def _rotate_left(self, x) -> None:
        nil = self._nil
        y = x.right
        x.right = y.left
        if y.left is not nil:
            y.left.parent = x
        y.parent = x.parent
        if x.parent is nil:
            self._root = y
        elif x is x.parent.left:
            x.parent.left = y
        else:
            x.parent.right = y
        y.left = x
        x.parent = y

    def _rotate_right(self, x) -> None:
        nil = self._nil
        y = x.left
        x.left = y.right
        if y.right is not nil:
            y.right.parent = x
        y.parent = x.parent
        if x.parent is nil:
            self._root = y
        elif x is x.parent.right:
            x.parent.right = y
        else:
            x.parent.left = y
        y.right = x
        x.parent = y

    def _insert_fixup(self, z) -> None:
        while z.parent.red:
            grand = z.parent.parent
            if z.parent is grand.left:
                uncle = grand.right
                if uncle.red:
                    z.parent.red = False
                    uncle.red = False
                    grand.red = True
                    z = grand
                else:
                    if z is z.parent.right:
                        z = z.parent
                        self._rotate_left(z)
                    z.parent.red = False
                    z.parent.parent.red = True
                    self._rotate_right(z.parent.parent)
            else:
                uncle = grand.left
                if uncle.red:
                    z.parent.red = False
                    uncle.red = False
                    grand.red = True
                    z = grand
                else:
                    if z is z.parent.left:
                        z = z.parent
                        self._rotate_right(z)
                    z.parent.red = False
                    z.parent.parent.red = True
                    self._rotate_left(z.parent.parent)
        self._root.red = False

    def _transplant(self, u, v) -> None:
        if u.parent is self._nil:
            self._root = v
        elif u is u.parent.left:
            u.parent.left = v
        else:
            u.parent.right = v
        v.parent = u.parent

    def _delete_fixup(self, x) -> None:
        while x is not self._root and not x.red:
            if x is x.parent.left:
                w = x.parent.right
                if w.red:
                    w.red = False
                    x.parent.red = True
                    self._rotate_left(x.parent)
                    w = x.parent.right
                if not w.left.red and not w.right.red:
                    w.red = True
                    x = x.parent
                else:
                    if not w.right.red:
                        w.left.red = False
                        w.red = True
                        self._rotate_right(w)
                        w = x.parent.right
                    w.red = x.parent.red
                    x.parent.red = False
                    w.right.red = False
                    self._rotate_left(x.parent)
                    x = self._root
            else:
                w = x.parent.left
                if w.red:
                    w.red = False
                    x.parent.red = True
                    self._rotate_right(x.parent)
                    w = x.parent.left
                if not w.right.red and not w.left.red:
                    w.red = True
                    x = x.parent
                else:
                    if not w.left.red:
                        w.right.red = False
                        w.red = True
                        self._rotate_left(w)
                        w = x.parent.left
                    w.red = x.parent.red
                    x.parent.red = False
                    w.left.red = False
                    self._rotate_right(x.parent)
                    x = self._root
        x.red = False
        self._nil.red = False