"""
Dispatcher factory. Reads config, returns a ready Dispatcher.
"""

import requests

from config.settings import Config
from llm.dispatcher import Dispatcher

USER_AGENT = "ask-llm/0.1"


def create_dispatcher(config: Config, timeout: float | None = None) -> Dispatcher:
    """One session per process; the CLI sends at most one request on it."""
    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    return Dispatcher(config, session=session, timeout=timeout)
