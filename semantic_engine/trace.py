import json
import logging
import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

log = logging.getLogger("semantic-trace")

DEFAULT_LOG_DIR = os.path.join(os.getcwd(), "logs")
DEFAULT_LOG_FILE = "semantic_trace.jsonl"

def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()

def new_trace_context() -> Dict[str, Any]:
    return {
        "request_id": str(uuid.uuid4()),
        "timestamp": utc_now_iso(),
    }

class TraceLogger:
    """
    One JSON line per analysis run.
    Fail-safe: a failed write is logged and never blocks the analysis.
    """
    def __init__(self, log_dir: Optional[str] = None, filename: str = DEFAULT_LOG_FILE) -> None:
        self.log_dir = log_dir or DEFAULT_LOG_DIR
        self.filename = filename
        self.path = os.path.join(self.log_dir, self.filename)

    def write(self, trace_obj: Dict[str, Any]) -> None:
        try:
            os.makedirs(self.log_dir, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(json.dumps(trace_obj, ensure_ascii=False) + "\n")
        except OSError as e:
            log.warning(f"Trace write failed ({self.path}): {e}")
