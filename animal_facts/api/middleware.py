import uuid

from fastapi import Request

from animal_facts.core.logging import request_id_var

REQUEST_ID_HEADER = "x-request-id"


async def request_id_middleware(request: Request, call_next):
    """Propagate the caller's x-request-id, or mint a uuid4, onto logs and the response."""
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response
