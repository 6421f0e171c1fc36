"""``requests`` backed implementation of :class:`~mediagrab.core.protocols.HttpClient`.

This module is the **only** place in the codebase that imports
``requests``.  Every call carries an explicit timeout, and every
``requests`` exception is caught here and re-raised as a typed
:class:`~mediagrab.exceptions.MediagrabError` subclass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

import requests

from mediagrab.exceptions import UpstreamFetchError, UpstreamParseError

logger = logging.getLogger(__name__)


class RequestsHttpClient:
    """Concrete :class:`HttpClient` backed by :mod:`requests`.

    Each call opens and closes its own :class:`requests.Session`, so
    cookies set by one upstream response never reach a later request
    and concurrent callers share no connection state.

    This class satisfies the :class:`~mediagrab.core.protocols.HttpClient`
    protocol structurally — no explicit inheritance required.

    Parameters
    ----------
    timeout:
        Seconds allowed for connecting and for reading the response.
    session_factory:
        Callable returning a fresh session per call, mainly for tests.
    """

    def __init__(
        self,
        timeout: float,
        *,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ) -> None:
        self._timeout: float = timeout
        self._session_factory: Callable[[], requests.Session] = session_factory

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def get_json(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        response = self._get(url, params=params)
        try:
            payload: Any = response.json()
        except ValueError as exc:
            raise UpstreamParseError(f"Invalid JSON from {url}") from exc

        if not isinstance(payload, dict):
            raise UpstreamParseError(
                f"Expected a JSON object from {url}, got {type(payload).__name__}",
            )
        return payload

    def get_text(
        self,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        return self._get(url, headers=headers).text

    # ------------------------------------------------------------------
    # Transport (safe boundary)
    # ------------------------------------------------------------------

    def _get(
        self,
        url: str,
        *,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> requests.Response:
        logger.debug("GET %s", url)
        try:
            with self._session_factory() as session:
                response = session.get(
                    url,
                    params=dict(params) if params else None,
                    headers=dict(headers) if headers else None,
                    timeout=self._timeout,
                )
            response.raise_for_status()
        except requests.exceptions.Timeout as exc:
            raise UpstreamFetchError(
                f"Request timed out after {self._timeout:g}s",
                hint="The upstream service did not answer in time.",
            ) from exc
        except requests.exceptions.HTTPError as exc:
            raise UpstreamFetchError(str(exc)) from exc
        except requests.exceptions.RequestException as exc:
            raise UpstreamFetchError(str(exc) or type(exc).__name__) from exc

        logger.debug("GET %s → %s", url, response.status_code)
        return response
