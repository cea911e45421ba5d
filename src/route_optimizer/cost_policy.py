"""Cost policies: how an edge weight is inflated during relaxation."""
from typing import Union

from .config import Criterion


def extra_cost(criterion: Union[Criterion, str, None], edge_weight: float) -> float:
    """
    Surcharge added on top of the edge weight for the given criterion.

    cost -> 1.5 * w, time -> 0.5 * w, plain -> 0. Strings are resolved
    permissively, so an unrecognised name behaves as plain.
    """
    return Criterion.parse(criterion).surcharge_factor * edge_weight


def relaxation_cost(criterion: Union[Criterion, str, None], edge_weight: float) -> float:
    """Total cost of traversing one edge: the weight plus its surcharge."""
    return edge_weight + extra_cost(criterion, edge_weight)
