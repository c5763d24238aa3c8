"""Order routes by expected output."""

from typing import Optional

from swapquote.routing.base import Route


def rank_routes(routes: list[Route]) -> list[Route]:
    """Sort by expected output, best first.

    sorted() is stable, so routes with equal output keep arrival order.
    """
    return sorted(routes, key=lambda route: route.output_amount, reverse=True)


def best_route(ranked: list[Route]) -> Optional[Route]:
    return ranked[0] if ranked else None
