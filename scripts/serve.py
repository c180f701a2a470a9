from __future__ import annotations

import sys
from pathlib import Path

# Allow running as: python scripts/serve.py
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

import uvicorn

from user_api.settings import get_settings


def main() -> int:
    s = get_settings()
    uvicorn.run("user_api.main:app", host=s.host, port=s.port, log_level=s.log_level.lower())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
