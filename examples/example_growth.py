"""Grow a few seeded trees without curses and print them with their stats.

Usage:
    python examples/example_growth.py [seed ...]
"""
import sys
from collections import Counter

import numpy as np

from bonsai import Tree, TreeOptions
from bonsai.render import BaseType, Canvas, Painter, tree_bounds

WIDTH, HEIGHT = 70, 26


def grow_and_render(seed):
    max_x, max_y = tree_bounds(WIDTH, HEIGHT, BaseType.LARGE)
    tree = Tree(TreeOptions(max_x=max_x, max_y=max_y, life_start=40, multiplier=6, seed=seed))
    ticks = tree.grow()

    canvas = Canvas(WIDTH, HEIGHT)
    canvas.draw_base(BaseType.LARGE)
    canvas.draw_message(f"seed {seed}")
    Painter(tree.options.leaves, tree.seed).paint_all(canvas, tree.drawables)
    return tree, ticks, canvas


if __name__ == "__main__":
    seeds = [int(s) for s in sys.argv[1:]] or [1, 2, 3]
    widths = []
    for seed in seeds:
        tree, ticks, canvas = grow_and_render(seed)
        print(canvas.to_text(color=sys.stdout.isatty()))

        kinds = Counter(d.branch_type.value for d in tree.drawables)
        xs = np.array([d.x for d in tree.drawables])
        widths.append(xs.max() - xs.min())
        print(f"ticks={ticks} branches={tree.branch_count} drawables={kinds}\n")

    print(f"crown width: mean={np.mean(widths):.1f} std={np.std(widths):.1f}")
