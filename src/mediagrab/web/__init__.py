"""HTTP surface — thin FastAPI router over the core service.

Handlers only translate query parameters into service calls and
results into JSON or redirect responses.  No business logic lives here.
"""

from mediagrab.web.app import create_app

__all__: list[str] = ["create_app"]
