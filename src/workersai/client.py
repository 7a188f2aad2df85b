"""
Workers AI HTTP client.

A thin synchronous transport around ``httpx``: it builds the run URL and
headers, posts the body produced by :func:`encode_request` and hands the raw
response bytes to :func:`decode_response`.

One request per call.  Retries, streaming and catalog caching are left to the
caller; ``httpx.HTTPError`` propagates unchanged.

Usage::

    from workersai import ChatTurn, WorkersAIClient

    with WorkersAIClient() as client:  # reads CLOUDFLARE_ACCOUNT_ID / CLOUDFLARE_AUTH_TOKEN
        response = client.chat(
            "@cf/qwen/qwen3-30b-a3b-fp8",
            [ChatTurn(role="user", content="Why is pizza so good?")],
        )
        print(response.content)
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional, Sequence

import httpx
from pydantic import TypeAdapter

from workersai._shared.model_config import resolve_model_path
from workersai._shared.models import Message, ModelInfo, Tool
from workersai._shared.response_models import ChatResponse
from workersai.errors import APIStatusError
from workersai.llm_params import ModelParameters
from workersai.request_encoder import encode_request
from workersai.response_decoder import decode_response

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.cloudflare.com/client/v4"
MODELS_CATALOG_URL = "https://ai.cloudflare.com/api/models"

_CATALOG_ADAPTER = TypeAdapter(dict[str, ModelInfo])


class WorkersAIClient:
    """
    Client for the Workers AI ``run`` and model endpoints.

    Configuration falls back to environment variables:

    * ``account_id`` ← ``CLOUDFLARE_ACCOUNT_ID``
    * ``api_token`` ← ``CLOUDFLARE_AUTH_TOKEN``
    * ``base_url`` ← ``WORKERS_AI_BASE_URL`` (default :data:`DEFAULT_BASE_URL`)
    * ``debug`` ← ``WORKERS_AI_DEBUG == "true"``
    """

    def __init__(
        self,
        account_id: Optional[str] = None,
        api_token: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        debug: Optional[bool] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Args:
            account_id: Cloudflare account id.
            api_token: API token sent as a bearer token.
            base_url: API root, without a trailing slash.
            timeout: Request timeout in seconds (ignored with *http_client*).
            debug: Log request and response bodies at DEBUG level.
            http_client: Pre-configured ``httpx.Client``; the caller keeps
                ownership and must close it.
        """
        self.account_id = account_id or os.getenv("CLOUDFLARE_ACCOUNT_ID")
        self.api_token = api_token or os.getenv("CLOUDFLARE_AUTH_TOKEN")
        self.base_url = (
            base_url or os.getenv("WORKERS_AI_BASE_URL") or DEFAULT_BASE_URL
        ).rstrip("/")
        if debug is None:
            debug = os.getenv("WORKERS_AI_DEBUG") == "true"
        self.debug = debug

        if not self.account_id:
            raise ValueError("CLOUDFLARE_ACCOUNT_ID is required")
        if not self.api_token:
            raise ValueError("CLOUDFLARE_AUTH_TOKEN is required")

        self._owns_client = http_client is None
        self._http = http_client or httpx.Client(timeout=timeout)

    # ------------------------------------------------------------------ #
    # Lifecycle                                                            #
    # ------------------------------------------------------------------ #

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def __enter__(self) -> WorkersAIClient:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def set_debug(self, debug: bool) -> None:
        self.debug = debug

    # ------------------------------------------------------------------ #
    # Chat                                                                 #
    # ------------------------------------------------------------------ #

    def chat(
        self,
        model: str,
        messages: Sequence[Message],
        params: Optional[ModelParameters] = None,
    ) -> ChatResponse:
        """Send a conversation without tools."""
        return self.chat_with_tools(model, messages, None, params)

    def chat_with_tools(
        self,
        model: str,
        messages: Sequence[Message],
        tools: Optional[Sequence[Tool]],
        params: Optional[ModelParameters] = None,
    ) -> ChatResponse:
        """Send a conversation with a tool catalog and decode the reply."""
        url = f"{self._account_url()}/ai/run/{resolve_model_path(model)}"
        body = encode_request(model, messages, tools, params)

        self._debug_log("Request URL: %s", url)
        self._debug_log("Request Body: %s", body.decode("utf-8"))

        resp = self._http.post(url, content=body, headers=self._headers())
        self._debug_log("Response Body: %s", resp.text)
        self._raise_for_status(resp)

        response = decode_response(resp.content)
        self._debug_log(
            "Successfully parsed response. Detected format: %s", response.format.value
        )
        return response

    # ------------------------------------------------------------------ #
    # Models                                                               #
    # ------------------------------------------------------------------ #

    def get_model_info(self, model: str) -> ModelInfo:
        """Describe one model."""
        url = f"{self._account_url()}/ai/models/{model}"
        resp = self._http.get(url, headers=self._headers())
        self._raise_for_status(resp)
        return ModelInfo.model_validate_json(resp.content)

    def list_models(self) -> list[ModelInfo]:
        """Fetch the public model catalog, in catalog order."""
        resp = self._http.get(
            MODELS_CATALOG_URL, headers={"Content-Type": "application/json"}
        )
        self._raise_for_status(resp)
        return list(_CATALOG_ADAPTER.validate_json(resp.content).values())

    # ------------------------------------------------------------------ #
    # Internals                                                            #
    # ------------------------------------------------------------------ #

    def _account_url(self) -> str:
        return f"{self.base_url}/accounts/{self.account_id}"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_token}",
            "Content-Type": "application/json",
        }

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.status_code != httpx.codes.OK:
            logger.error(
                "API error - status: %d, body: %s", resp.status_code, resp.text
            )
            raise APIStatusError(resp.status_code, resp.text)

    def _debug_log(self, msg: str, *args: Any) -> None:
        if self.debug:
            logger.debug(msg, *args)
