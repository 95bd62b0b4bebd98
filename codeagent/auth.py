"""First-run login: collect user details and check the API key."""

from __future__ import annotations

import sys
from typing import TextIO

import requests

from .config import Config, init_session, invalidate_session
from .console import welcome
from .llm import APIError, Client, on_start_query
from .prompts import prompt_api_key, prompt_model, prompt_username
from .spinner import show_loader, stop_loader

LOADER_DELAY = 3.0


def validate_user(cfg: Config, stream: TextIO | None = None) -> None:
    """Send a start query with the configured key.

    If the key is rejected the stored config is removed and
    SessionInvalidated is raised.
    """
    out = stream if stream is not None else sys.stdout
    client = Client(cfg)
    try:
        response = on_start_query(client)
    except (APIError, requests.RequestException) as exc:
        print(f"Invalid API key. Please try again. Error: {exc}", file=out)
        invalidate_session(cfg)
        return
    print(response.decode("utf-8", errors="replace"), file=out)
    welcome(cfg.name, out)


def authenticate_user(
    cfg: Config, reader: TextIO | None = None, stream: TextIO | None = None
) -> Config:
    """Ask for name, model and API key, verify them and save the config."""
    name = prompt_username(reader, stream)
    model = prompt_model(reader, stream)
    api_key = prompt_api_key(reader, stream)

    cfg.name = name
    cfg.api_key = api_key
    cfg.session = init_session(name, model)

    spinner = show_loader("Verifying API Key...", stream)
    try:
        validate_user(cfg, stream)
    except BaseException:
        spinner.stop()
        raise
    stop_loader(spinner, LOADER_DELAY)

    cfg.update_config()
    return cfg