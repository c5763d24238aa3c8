"""FastAPI dependencies shared by the controllers."""

from fastapi import Depends

from swapquote.config import Settings, get_settings
from swapquote.routing.swapkit import SwapKitClient


def get_swapkit_client(settings: Settings = Depends(get_settings)) -> SwapKitClient:
    """Build an aggregator client from settings.

    Raises ConfigurationError when SWAPKIT_API_KEY is not set, which the app
    renders as a 500 before any upstream call is made.
    """
    return SwapKitClient.from_settings(settings)
