# posture_coach/completion.py
"""
Completion clients: given a system prompt and a user prompt, return the raw
content string of the model's JSON answer.

Both clients make exactly one request per call (no retries) and report
failures with the exceptions below, which the analysis pipeline classifies.
"""
import logging
from typing import Optional, Protocol

import requests
from groq import APIError, APIStatusError
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_groq import ChatGroq

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

JSON_RESPONSE_FORMAT = {"type": "json_object"}


class CompletionError(Exception):
    pass


class MissingCredential(CompletionError):
    def __init__(self, provider: str):
        super().__init__("missing credential")
        self.provider = provider


class CompletionHTTPError(CompletionError):
    def __init__(self, status_code: int, body: str = ""):
        super().__init__(f"completion endpoint returned {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class CompletionTransportError(CompletionError):
    pass


class CompletionFormatError(CompletionError):
    """2xx answer whose envelope does not carry choices[0].message.content."""


class CompletionClient(Protocol):
    def complete(self, system_prompt: str, user_prompt: str) -> str:
        ...


class GatewayCompletionClient:
    """OpenAI-compatible /v1/chat/completions endpoint over plain HTTP."""

    def __init__(
        self,
        api_key: Optional[str],
        url: str,
        model: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        # None posts through the requests module, so no pool outlives the call
        self.session = session

    def build_payload(self, system_prompt: str, user_prompt: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "response_format": JSON_RESPONSE_FORMAT,
        }

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        if not self.api_key:
            raise MissingCredential("gateway")

        try:
            http = self.session if self.session is not None else requests
            response = http.post(
                self.url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=self.build_payload(system_prompt, user_prompt),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CompletionTransportError(str(e)) from e

        if not 200 <= response.status_code < 300:
            raise CompletionHTTPError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as e:
            raise CompletionFormatError("response body is not JSON") from e
        return _first_choice_content(data)


def _first_choice_content(data) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise CompletionFormatError("response has no choices[0].message.content") from e
    if not isinstance(content, str):
        raise CompletionFormatError("choices[0].message.content is not a string")
    return content


class GroqCompletionClient:
    """Groq chat model through LangChain, forced into JSON mode."""

    def __init__(self, api_key: Optional[str], model: str, timeout: float = 30.0, llm=None):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._llm = llm

    def _chat_model(self):
        if self._llm is None:
            self._llm = ChatGroq(
                api_key=self.api_key,
                model=self.model,
                temperature=0.2,
                max_retries=0,
                timeout=self.timeout,
            )
        return self._llm.bind(response_format=JSON_RESPONSE_FORMAT)

    def complete(self, system_prompt: str, user_prompt: str) -> str:
        if not self.api_key:
            raise MissingCredential("groq")

        messages = [
            SystemMessage(content=system_prompt),
            HumanMessage(content=user_prompt),
        ]
        try:
            resp = self._chat_model().invoke(messages)
        except APIStatusError as e:
            raise CompletionHTTPError(e.status_code, e.message) from e
        except APIError as e:
            raise CompletionTransportError(str(e)) from e

        content = resp.content if hasattr(resp, "content") else resp
        if not isinstance(content, str):
            raise CompletionFormatError("chat model returned non-text content")
        return content


def get_completion_client(settings: Optional[Settings] = None) -> CompletionClient:
    settings = settings or get_settings()
    if settings.completion_provider == "gateway":
        return GatewayCompletionClient(
            api_key=settings.ai_gateway_api_key,
            url=settings.ai_gateway_url,
            model=settings.ai_gateway_model,
            timeout=settings.completion_timeout,
        )
    if settings.completion_provider == "groq":
        return GroqCompletionClient(
            api_key=settings.groq_api_key,
            model=settings.groq_model,
            timeout=settings.completion_timeout,
        )
    raise ValueError(f"unknown completion provider: {settings.completion_provider!r}")
