"""Exceptions raised when a graph or its weights cannot be used for betweenness centrality."""

from __future__ import annotations


class InvalidGraphError(TypeError):
    """The supplied graph is not a usable `networkX` `Graph` or `DiGraph`."""


class MissingWeightError(KeyError):
    """An edge lacks the weight attribute requested for a weighted (shortest-distance) traversal."""

    def __init__(self, start_nd_key, end_nd_key, weight_key: str):
        self.start_nd_key = start_nd_key
        self.end_nd_key = end_nd_key
        self.weight_key = weight_key
        super().__init__(
            f'Edge {start_nd_key}-{end_nd_key} is missing the "{weight_key}" weight attribute. '
            "Either add the attribute to every edge or compute unweighted centralities."
        )

    def __str__(self) -> str:
        # KeyError otherwise wraps the message in quotes
        return str(self.args[0])
