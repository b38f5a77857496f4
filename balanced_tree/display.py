from __future__ import annotations

import argparse
import logging
import math

import numpy as np
from numpy import random

from .tree import AVLTree


def avl_height_bound(n: int) -> float:
    """Upper bound on the height of an AVL tree holding `n` nodes."""
    return 1.44 * math.log2(n + 2)


def shuffled_tree(n: int, seed: int) -> AVLTree[int]:
    rng = random.default_rng(seed)
    tree = AVLTree()
    for v in rng.permutation(n) + 1:
        tree.insert(int(v))
    return tree


def display_tree(tree: AVLTree):
    print(tree.print(), end="")
    n = len(tree)
    print(
        "{} nodes, height {} (bound {:.2f})".format(
            n, tree.height(), avl_height_bound(n)
        )
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="Build and display an AVL tree.")
    parser.add_argument("-n", type=int, default=15, help="number of values")
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--delete", type=int, default=4, help="values to delete")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    tree = shuffled_tree(args.n, args.seed)
    print("After inserting 1..{}:".format(args.n))
    display_tree(tree)

    rng = random.default_rng(args.seed + 1)
    victims = rng.choice(
        np.arange(1, args.n + 1), size=min(args.delete, args.n), replace=False
    )
    for v in victims:
        tree.delete(int(v))

    print("\nAfter deleting {}:".format(", ".join(map(str, sorted(victims)))))
    display_tree(tree)


if __name__ == "__main__":
    main()
