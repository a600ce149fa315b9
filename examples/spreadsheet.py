"""Recompute a small spreadsheet after editing one cell.

Run with ``python examples/spreadsheet.py`` to see which cells are recomputed.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

import incgraph as ig

console = Console(stderr=True)
logging.basicConfig(
    level=logging.DEBUG,
    format="%(message)s",
    handlers=[RichHandler(console=console, show_time=False, show_path=False)],
)

graph = ig.Graph()

price = graph.create_constant(12.5)
quantity = graph.create_constant(4)
tax_rate = graph.create_constant(0.2)

subtotal = graph.create(lambda ctx: ctx.require(price) * ctx.require(quantity))
tax = graph.create(lambda ctx: ctx.require(subtotal) * ctx.require(tax_rate))
total = graph.create(lambda ctx: (ctx.require(subtotal) + ctx.require(tax)) / ctx.args[0])

console.print(f"total per person (2 people): {graph.evaluate(total, [2])}")

graph.update(quantity, 6)
console.print(f"total per person (2 people): {graph.evaluate(total, [2])}")

ig.render_node_table(ig.list_nodes(graph), console)
ig.render_tree(ig.get_dependency_tree(graph, total), console)
