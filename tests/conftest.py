import pytest

from route_optimizer.config import Location, RawEdge


@pytest.fixture
def three_locations() -> dict[int, Location]:
    return {
        1: Location(1, "Depot"),
        2: Location(2, "Market Street"),
        3: Location(3, "Harbor"),
    }


@pytest.fixture
def line_edges() -> list[RawEdge]:
    """1 --10 (x2 traffic)-- 2 --5-- 3"""
    return [
        RawEdge(1, 2, 10.0, 2.0),
        RawEdge(2, 3, 5.0, 1.0),
    ]
