"""Collaborator data structures.

Linked list, dynamic array, binary heap and disjoint-set union, each with
its conventional contract and immediate errors on precondition violations.
"""

from dsakit.structures.dsu import DSU
from dsakit.structures.heap import Heap, MaxHeap, MinHeap
from dsakit.structures.linked_list import LinkedList
from dsakit.structures.vector import Vector

__all__ = ["DSU", "Heap", "LinkedList", "MaxHeap", "MinHeap", "Vector"]
