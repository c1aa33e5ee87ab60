# mod_core/daemon_client.py
from typing import Optional

import requests

from .config import DEFAULT_HOST, DEFAULT_PORT

DAEMON_URL = f"http://{DEFAULT_HOST}:{DEFAULT_PORT}"


def request_conversion(text: str, url: str = DAEMON_URL, escape_snippet: bool = False,
                       tail_child: Optional[str] = None, timeout: float = 10) -> str:
    payload = {
        "text": text,
        "escape_snippet": escape_snippet,
        "tail_child": tail_child,
    }
    try:
        response = requests.post(f"{url.rstrip('/')}/convert", json=payload, timeout=timeout)
        response.raise_for_status()
        return response.json().get("output", "").strip()
    except requests.RequestException as e:
        return f"ERROR: {str(e)}"
