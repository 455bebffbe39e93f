"""
Diagrams of the binding structure of a term.

The term is first flattened into a table of nodes in prefix order
(`term_nodes`):

- a lambda node is followed by its body,
- an application node is followed by its function, and points to its argument (`arg`),
- a variable node points to the lambda that binds it (`ref`), or to nothing if it is free.

Then every variable gets a column, every node gets a range of rows
(`compute_layout`), and the diagram is drawn from that:

- a lambda is a horizontal bar over the columns of its variables,
- a variable is a vertical line hanging from its lambda (from the top if it is free),
- an application links the right edge of its function to its argument.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional

import polars as pl
import svg
from polars import Schema, String, UInt32

from .term import Abstraction, Application, Term, Variable

__all__ = ["SCHEMA", "Interval", "Diagram", "term_nodes", "compute_layout", "to_diagram"]

SCHEMA = Schema(
    {
        "id": UInt32,
        "kind": String,
        "ref": UInt32,
        "arg": UInt32,
        "name": String,
    },
)


@dataclass(frozen=True)
class Interval:
    """
    A closed range of integers, or the empty range when `values` is None.
    """

    values: Optional[tuple[int, int]] = None

    @staticmethod
    def point(i: int) -> Interval:
        return Interval((i, i))

    def __or__(self, other: Interval) -> Interval:
        if self.values is None:
            return other
        if other.values is None:
            return self
        return Interval(
            (min(self.values[0], other.values[0]), max(self.values[1], other.values[1]))
        )

    def __getitem__(self, index: int) -> int:
        assert self.values is not None, "interval is empty"
        return self.values[index]

    def shift(self, offset: int) -> Interval:
        if self.values is None:
            return self
        return Interval((self.values[0] + offset, self.values[1] + offset))


def _flatten(term: Term, rows: list[list[Any]], binders: dict[str, int]):
    node = len(rows)
    match term.resolve():
        case Variable(name):
            rows.append([node, "variable", binders.get(name), None, name])
        case Abstraction(param, body):
            rows.append([node, "lambda", None, None, param])
            _flatten(body, rows, {**binders, param: node})
        case Application(function, argument):
            rows.append([node, "application", None, None, None])
            _flatten(function, rows, binders)
            rows[node][3] = len(rows)
            _flatten(argument, rows, binders)


def term_nodes(term: Term) -> pl.DataFrame:
    """
    The nodes of `term` in prefix order, one row per node.
    """
    rows: list[list[Any]] = []
    _flatten(term, rows, {})
    return pl.from_records(rows, orient="row", schema=SCHEMA)


def compute_layout(
    nodes: pl.DataFrame,
) -> tuple[dict[int, Interval], dict[int, Interval]]:
    """
    Columns (`x`) and rows (`y`) covered by every node.

    Variables are numbered from 1, left to right.
    """
    kinds = nodes["kind"]

    # forward pass: rows, top-down
    y = {0: Interval.point(0)}
    for node, kind, arg in nodes.select("id", "kind", "arg").iter_rows():
        child = node + 1
        if kind == "lambda":
            y[child] = y[node].shift(1)
        elif kind == "application":
            # a curried application goes one row down, everything else stays on the row
            y[child] = y[node].shift(1 if kinds[child] == "application" else 0)
            y[arg] = y[node]

    # backward pass: columns, bottom-up
    x: dict[int, Interval] = {}
    next_var_x = int((kinds == "variable").sum())
    for node, kind, ref in (
        nodes.sort("id", descending=True).select("id", "kind", "ref").iter_rows()
    ):
        if kind == "variable":
            x[node] = Interval.point(next_var_x)
            next_var_x -= 1
            if ref is not None:
                x[ref] = x[node] | x.get(ref, Interval())
        else:
            child = node + 1
            x[node] = x[child] | x.get(node, Interval())
            y[node] = y[child] | y[node]
    return x, y


@dataclass
class Diagram:
    nodes: pl.DataFrame
    x: dict[int, Interval]
    y: dict[int, Interval]

    @property
    def width(self) -> int:
        """Number of variable columns"""
        return int((self.nodes["kind"] == "variable").sum())

    @property
    def height(self) -> int:
        """Number of rows"""
        return 1 + max(interval[1] for interval in self.y.values())

    def to_unicode(self) -> str:
        """
        Box-drawing rendering, two characters per column.
        """
        grid = [[" "] * (2 * self.width - 1) for _ in range(self.height)]

        def put(row: int, col: int, char: str):
            crossings = {("─", "│"): "┼", ("│", "─"): "┼"}
            grid[row][col] = crossings.get((grid[row][col], char), char)

        rows = list(self.nodes.select("id", "kind", "ref", "arg").iter_rows())
        for node, kind, _, _ in rows:
            if kind == "lambda":
                for col in range(2 * (self.x[node][0] - 1), 2 * self.x[node][1] - 1):
                    put(self.y[node][0], col, "─")
        for node, kind, ref, _ in rows:
            if kind == "variable":
                col = 2 * (self.x[node][0] - 1)
                top = 0
                if ref is not None:
                    top = self.y[ref][0] + 1
                    grid[self.y[ref][0]][col] = "┬"
                for row in range(top, self.y[node][0] + 1):
                    put(row, col, "│")
        for node, kind, _, arg in rows:
            if kind == "application":
                row = self.y[node][0]
                start = 2 * (self.x[node + 1][1] - 1)
                end = 2 * (self.x[arg][0] - 1)
                for col in range(start + 1, end):
                    put(row, col, "─")
                if grid[row][start] == "│":
                    grid[row][start] = "├"
                if grid[row][end] == "│":
                    grid[row][end] = "┤"
        return "\n".join("".join(line).rstrip() for line in grid)

    def elements(self) -> Iterable[svg.Element]:
        for node, kind, ref, arg in (
            self.nodes.select("id", "kind", "ref", "arg")
            .sort("id", descending=True)
            .iter_rows()
        ):
            yield from draw(self.x, self.y, node, kind, ref, arg)

    def to_svg(self, cell: int = 40) -> str:
        # prefered size in pixels
        H = self.height * cell
        W = self.width * cell
        return svg.SVG(
            xmlns="http://www.w3.org/2000/svg",
            viewBox=f"0 0 {self.width + 1} {self.height}",  # type: ignore
            width=W,
            height=H,
            elements=list(self.elements()),
        ).as_str()

    def _repr_html_(self):
        return f"<div>{self.to_svg()}</div>"


def draw(
    x: dict[int, Interval],
    y: dict[int, Interval],
    node: int,
    kind: str,
    ref: Optional[int],
    arg: Optional[int],
) -> Iterable[svg.Element]:
    x_node = x[node]
    y_node = y[node]
    if kind == "application":
        x_arg = x[arg]
        y_arg = y[arg]
        yield svg.Rect(
            x=0.1 + x_node[0],
            y=0.1 + y_node[0],
            width=0.8 + x_node[1] - x_node[0],
            height=0.8,
            fill="none",
            stroke="orange",
            stroke_width=0.1,
        )
        yield svg.Line(
            x1=0.5 + x_node[1],
            y1=0.5 + y_node[0],
            x2=0.5 + x_arg[0],
            y2=0.5 + y_arg[0],
            stroke="black",
            stroke_width=0.05,
        )
        yield svg.Circle(cx=0.5 + x_node[1], cy=0.5 + y_node[0], r=0.1, fill="black")
        return

    yield svg.Rect(
        x=0.1 + x_node[0],
        y=0.1 + y_node[0],
        width=0.8 + x_node[1] - x_node[0],
        height=0.8,
        fill="blue" if kind == "lambda" else "red",
        stroke="gray",
        stroke_width=0.05,
    )
    if kind == "variable":
        yield svg.Line(
            x1=x_node[0] + 0.5,
            y1=y_node[0] + 0.1,
            x2=x_node[0] + 0.5,
            y2=y[ref][0] + 0.9 if ref is not None else 0,
            stroke="gray" if ref is not None else "black",
            stroke_width=0.2,
        )


def to_diagram(term: Term) -> Diagram:
    nodes = term_nodes(term)
    x, y = compute_layout(nodes)
    return Diagram(nodes, x, y)
