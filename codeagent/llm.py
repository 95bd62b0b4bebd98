"""A small client for chat-completion APIs."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

import requests

from .config import Config, invalidate_session
from .parser import parse_code, parse_code_request

FORMAT_QUERY = (
    "The user requests to format the code below and has included a message in their request: "
)
START_QUERY = "This is a start query to verify the API key is valid. Simply respond with 'OK'."
ASSISTANT_PROMPT = "You are a helpful assistant."
FORMATTER_PROMPT = "You are a code formatter. Output only the cleaned code."

_ERROR_PREFIXES = {
    400: "bad request",
    429: "too many requests",
    500: "internal server error",
    503: "service unavailable",
}


@dataclass(frozen=True)
class Message:
    """One chat message: a role ("user", "system", "assistant") and its text."""

    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


def system_prompt(content: str) -> Message:
    return Message(role="system", content=content)


def user_prompt(content: str) -> Message:
    return Message(role="user", content=content)


class APIError(Exception):
    """An error response from the chat API."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


def handle_error_code(code: int, detail: str, cfg: Config) -> APIError:
    """Map an HTTP status to an APIError.

    A 401 discards the stored session instead, which raises SessionInvalidated.
    """
    if code == 401:
        invalidate_session(cfg)
    prefix = _ERROR_PREFIXES.get(code, "unknown error")
    return APIError(f"{prefix}: {detail}", code)


class Client:
    """Sends chat requests for the model and endpoint held in a config."""

    def __init__(self, cfg: Config, session: requests.Session | None = None):
        if not cfg.api_key:
            raise ValueError("API Key is empty")
        self.cfg = cfg
        self.api_key = cfg.api_key
        self.base_url = cfg.session.api.base_url + cfg.session.api.completion_path
        self.model = cfg.session.model
        self._http = session if session is not None else requests.Session()

    def send(self, messages: Iterable[Message]) -> bytes:
        """Post the messages and return the raw response body."""
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [message.to_dict() for message in messages],
        }
        headers = {
            "Authorization": "Bearer " + self.api_key,
            "Content-Type": "application/json",
        }
        response = self._http.post(self.base_url, json=payload, headers=headers)
        try:
            if response.status_code != 200:
                status = f"{response.status_code} {response.reason or ''}".rstrip()
                detail = f"failed: {status}\n{response.text}"
                raise handle_error_code(response.status_code, detail, self.cfg)
            return response.content
        finally:
            response.close()


def on_start_query(client: Client) -> bytes:
    """Send a trivial request to check that the API key is accepted."""
    return client.send([user_prompt(START_QUERY)])


def query(client: Client, text: str) -> bytes:
    return client.send([user_prompt(text), system_prompt(ASSISTANT_PROMPT)])


def format_code(client: Client, text: str, code: str, lang: str) -> bytes:
    """Ask the model to format ``code`` following the user's message ``text``."""
    content = parse_code_request(FORMAT_QUERY, text, parse_code(code, lang))
    return client.send([user_prompt(content), system_prompt(FORMATTER_PROMPT)])