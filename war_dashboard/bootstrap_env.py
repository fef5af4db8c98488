"""
Bootstrap environment for Streamlit Cloud & local dev:
- Copy st.secrets into uppercase os.environ keys (nested tables -> PREFIX_CHILD)
- Write an inline GOOGLE_CREDENTIALS_JSON secret to a temp file and point
  GOOGLE_APPLICATION_CREDENTIALS at it
- Finally, load .env (existing env vars win)
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from typing import Any, Iterator, Mapping, Tuple

import streamlit as st
from dotenv import load_dotenv

CREDENTIALS_TMP_NAME = "war-dashboard-google-credentials.json"


def _sanitize_key(key: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def flatten_secrets(prefix: str, val: Any) -> Iterator[Tuple[str, str]]:
    if isinstance(val, Mapping):
        for k, v in val.items():
            yield from flatten_secrets(f"{prefix}_{k}", v)
    else:
        yield _sanitize_key(prefix), str(val)


def _secrets_dict() -> dict:
    # st.secrets raises when no secrets.toml exists
    try:
        items = getattr(st, "secrets", None)
        if not items:
            return {}
        try:
            return items.to_dict()  # type: ignore[attr-defined]
        except AttributeError:
            return dict(items)
    except Exception:
        return {}


def bridge_secrets_to_env(secrets: Mapping[str, Any]) -> None:
    for key, value in secrets.items():
        if key == "GOOGLE_CREDENTIALS_JSON":
            continue
        for flat_k, flat_v in flatten_secrets(key, value):
            os.environ.setdefault(flat_k, flat_v)


def materialize_google_credentials(secrets: Mapping[str, Any]) -> str | None:
    """Write the service-account JSON secret to disk if no usable file is configured.

    Returns the path that GOOGLE_APPLICATION_CREDENTIALS now points to, or
    None when nothing was written.
    """
    existing_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    if existing_path and os.path.exists(existing_path):
        return None

    creds = secrets.get("GOOGLE_CREDENTIALS_JSON")
    if not creds:
        return None
    if isinstance(creds, Mapping):
        json_text = json.dumps(dict(creds))
    else:
        try:
            json.loads(str(creds))
        except ValueError:
            return None
        json_text = str(creds)

    tmp_path = os.path.join(tempfile.gettempdir(), CREDENTIALS_TMP_NAME)
    with open(tmp_path, "w", encoding="utf-8") as f:
        f.write(json_text)
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = tmp_path
    return tmp_path


def ensure_env() -> None:
    """Idempotent: make sure env vars and creds are available.
    Safe to call multiple times, both inside and outside Streamlit runtime.
    """
    secrets = _secrets_dict()
    bridge_secrets_to_env(secrets)
    materialize_google_credentials(secrets)
    load_dotenv()


# Execute on import for the Streamlit main process, but also allow explicit calls elsewhere.
ensure_env()
