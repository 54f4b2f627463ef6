from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

OVERRIDE_PARAM = "_method"
OVERRIDABLE_METHODS = {"PUT", "PATCH", "DELETE"}


class MethodOverrideMiddleware(BaseHTTPMiddleware):
    """Let HTML forms reach PUT/DELETE routes via POST ?_method=PUT"""

    async def dispatch(self, request: Request, call_next):
        if request.method == "POST":
            override = request.query_params.get(OVERRIDE_PARAM, "").upper()
            if override in OVERRIDABLE_METHODS:
                request.scope["method"] = override
        return await call_next(request)
