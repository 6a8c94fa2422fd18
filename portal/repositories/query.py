# portal/repositories/query.py
from typing import Any

import httpx
from postgrest.exceptions import APIError

from portal.core.errors import BackendError, translate_api_error


def execute(query: Any) -> Any:
    """
    Run a PostgREST query builder and translate backend errors.

    Transport failures (unreachable host, timeouts) surface as
    BackendError too. Returns the raw APIResponse; callers read `.data`.
    """
    try:
        return query.execute()
    except APIError as exc:
        raise translate_api_error(exc) from exc
    except httpx.HTTPError as exc:
        raise BackendError(str(exc)) from exc
