"""Web services wrapping the routing pipeline.

SECURITY: These services MUST NOT sign or broadcast transactions. They only
query the aggregator and prepare deposit instructions for the user.
"""

from swapquote.web.services.asset_service import AssetService
from swapquote.web.services.integration_service import IntegrationReporter
from swapquote.web.services.quote_service import QuoteService
from swapquote.web.services.status_service import StatusService

__all__ = [
    "QuoteService",
    "StatusService",
    "AssetService",
    "IntegrationReporter",
]
