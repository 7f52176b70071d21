from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check() -> dict:
    """Health check endpoint.

    Used by load balancers and monitoring to verify the API is operational.

    Returns:
        dict: A simple status payload with "ok" when the service is healthy.
    """

    return {"status": "ok"}
