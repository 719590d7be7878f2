from typing import Awaitable, Callable

from apisign.logging import get_logger
from apisign.schemas.envelope import PayloadT
from apisign.signing.processor import ProcessingResult, RequestProcessor

from fastapi import HTTPException, Request

LOGGER = get_logger(__name__)


def signed_request(
    processor: RequestProcessor[PayloadT],
) -> Callable[[Request], Awaitable[ProcessingResult[PayloadT]]]:
    """Creates a dependency that verifies the JSON body of a request.

    Usage::

        @app.post("/points")
        async def points(result: ProcessingResult = Depends(signed_request(processor))):
            ...

    The dependency answers 403 for any request that does not verify, without
    telling the caller which check failed.
    """

    async def dependency(request: Request) -> ProcessingResult[PayloadT]:
        body = await request.body()

        result = await processor.process_a(body)

        if not result.successful:
            error = result.error
            LOGGER.warning(
                f"host={request.client.host if request.client else '-'} path={request.url.path}: "
                f"rejected with {error.kind if error else 'unknown error'}"
            )
            raise HTTPException(403, "Access Denied")

        return result

    return dependency
