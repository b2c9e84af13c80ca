import logging
import re
from typing import Any

LOG_EXTRA_FIELDS = (
    "status",
    "duration_ms",
    "error_type",
)

# httpx logs full request URLs, and ours carry the credential in the query.
_ACCESS_TOKEN_RE = re.compile(r"(access_token=)[^&\s\"']+")


def redact_token(text: str) -> str:
    return _ACCESS_TOKEN_RE.sub(r"\1***", text)


class ZenHubLogFormatter(logging.Formatter):
    """
    logfmt lines for ZenHub client logs.

    `zenhub_call` events render as `call="GET repositories/1/board"` followed
    by status, duration and error type. Any `access_token` value in a message
    is masked.
    """

    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = redact_token(record.getMessage())
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        method = getattr(record, "method", None)
        endpoint = getattr(record, "endpoint", None)
        if method and endpoint:
            kv.append(f"call={self._fmt_val(f'{method} {endpoint}')}")
        elif endpoint:
            kv.append(f"endpoint={self._fmt_val(endpoint)}")

        for key in LOG_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info:
            kv.append(f"exc_type={record.exc_info[0].__name__}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        s = str(val)
        if " " in s or "=" in s:
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO") -> None:
    """Route all logging (httpx included) through one ZenHubLogFormatter handler."""

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(ZenHubLogFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "redact_token", "ZenHubLogFormatter", "LOG_EXTRA_FIELDS"]
