"""
Shiva - Gemini Client
Thin async wrapper around the Gemini generateContent REST endpoint.
"""

import asyncio
import json
import logging
import time
from typing import List, Optional

import aiohttp

from config import GEMINI_API_KEY, GEMINI_API_URL, GENERATION_CONFIG
from prometheus_metrics import metrics_manager

logger = logging.getLogger("gemini")


class GeminiError(Exception):
    """Transport or HTTP failure talking to Gemini."""


def text_part(text: str) -> dict:
    return {"text": text}


def image_part(mime_type: str, data: str) -> dict:
    return {"inline_data": {"mime_type": mime_type, "data": data}}


def extract_text(data) -> Optional[str]:
    """Pull the first candidate's text out of a generateContent response.

    Returns None for any shape other than
    {"candidates": [{"content": {"parts": [{"text": ...}]}}]}.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text


class GeminiClient:
    """Sends chat contents to Gemini and returns the answer text."""

    def __init__(
        self,
        api_key: str = GEMINI_API_KEY,
        url: str = GEMINI_API_URL,
        generation_config: dict = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        self.api_key = api_key
        self.url = url
        self.generation_config = dict(generation_config or GENERATION_CONFIG)
        self._session = session

        if not api_key:
            logger.warning("GEMINI_API_KEY is not set - every request will fail")
        logger.info(f"Gemini endpoint: {url}")

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    def build_body(self, contents: List[dict]) -> dict:
        return {"contents": contents, "generationConfig": self.generation_config}

    async def generate(self, contents: List[dict]) -> Optional[str]:
        """Generate an answer.

        Returns:
            The answer text, or None if the response had no usable answer

        Raises:
            GeminiError: on network, HTTP or decoding failures
        """
        session = self._get_session()
        start_time = time.time()
        logger.debug(f"Sending request with {len(contents)} content turns")

        try:
            async with session.post(
                self.url,
                params={"key": self.api_key or ""},
                json=self.build_body(contents)
            ) as response:
                if response.status >= 400:
                    body = await response.text()
                    metrics_manager.record_api_request("http_error", time.time() - start_time)
                    raise GeminiError(f"HTTP {response.status}: {body[:300]}")
                data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            metrics_manager.record_api_request("transport_error", time.time() - start_time)
            raise GeminiError(f"{type(e).__name__}: {e}") from e
        except (json.JSONDecodeError, ValueError) as e:
            metrics_manager.record_api_request("bad_payload", time.time() - start_time)
            raise GeminiError(f"Undecodable response: {e}") from e

        text = extract_text(data)
        status = "ok" if text is not None else "empty"
        metrics_manager.record_api_request(status, time.time() - start_time)
        logger.info(f"Gemini {status} in {time.time() - start_time:.2f}s ({len(text) if text else 0} chars)")
        return text

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()
