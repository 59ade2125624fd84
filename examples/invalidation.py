"""Show which caches are cleared when a single input changes."""

import logging

import lazygraph as lg

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

x1 = lg.create_input("x1")
x2 = lg.create_input("x2")
x3 = lg.create_input("x3")
graph = lg.add(x1, lg.add(x2, lg.add(x2, lg.add(x2, x3))))

x1.set(1)
x2.set(2)
x3.set(3)
print("Graph output =", graph.compute())
for entry in lg.traverse(graph):
    print("  " * entry.depth + lg.format_entry(entry))

x1.set(3)
print()
for entry in lg.traverse(graph):
    print("  " * entry.depth + lg.format_entry(entry))
