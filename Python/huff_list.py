import heapq
import itertools
from typing import Iterator, List, Optional, Tuple


class ListNode:
    """One link of a TreeList, holding a HuffmanTree"""
    __slots__ = ['tree', 'next']

    def __init__(self, tree):
        self.tree = tree
        self.next: Optional['ListNode'] = None


class TreeList:
    """Singly linked list of trees kept sorted by ascending frequency.

    Equal frequencies keep their insertion order: a new tree goes in front of
    the first tree with a strictly greater frequency, or at the end.
    """

    def __init__(self):
        self.first: Optional[ListNode] = None

    def add(self, tree):
        new_node = ListNode(tree)

        if self.first is None:
            self.first = new_node
            return

        if tree.frequency < self.first.tree.frequency:
            new_node.next = self.first
            self.first = new_node
            return

        cur_node = self.first
        while cur_node.next is not None:
            if tree.frequency < cur_node.next.tree.frequency:
                new_node.next = cur_node.next
                cur_node.next = new_node
                return
            cur_node = cur_node.next

        # max frequency, cur_node is the last node
        cur_node.next = new_node

    def remove_top_tree(self):
        if self.first is None:
            return None

        top = self.first.tree
        self.first = self.first.next
        return top

    def has_exactly_one_tree(self) -> bool:
        return self.first is not None and self.first.next is None

    insert = add
    remove_minimum = remove_top_tree
    has_exactly_one = has_exactly_one_tree

    def __iter__(self) -> Iterator:
        node = self.first
        while node is not None:
            yield node.tree
            node = node.next

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return self.first is not None


class TreeQueue:
    """Min-heap with the same ordering and interface as TreeList.

    Entries are (frequency, sequence, tree); the sequence number breaks ties in
    insertion order, so a tree built through a TreeQueue is identical to one
    built through a TreeList.
    """

    def __init__(self):
        self._heap: List[Tuple[int, int, object]] = []
        self._sequence = itertools.count()

    def add(self, tree):
        heapq.heappush(self._heap, (tree.frequency, next(self._sequence), tree))

    def remove_top_tree(self):
        if not self._heap:
            return None
        return heapq.heappop(self._heap)[2]

    def has_exactly_one_tree(self) -> bool:
        return len(self._heap) == 1

    insert = add
    remove_minimum = remove_top_tree
    has_exactly_one = has_exactly_one_tree

    def __iter__(self) -> Iterator:
        return (entry[2] for entry in sorted(self._heap))

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
