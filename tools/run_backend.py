"""Launch the BST Quest backend with Uvicorn.

Works from a source checkout without installing the package: the
``backend`` directory is put on ``sys.path`` before Uvicorn imports
``bst_quest.main:app``.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

import uvicorn


def _prepare_backend_path() -> Path:
    backend_dir = Path(__file__).resolve().parents[1] / "backend"
    if not backend_dir.exists():
        raise RuntimeError(f"backend directory not found at {backend_dir}")

    backend_path = str(backend_dir)
    if backend_path not in sys.path:
        sys.path.insert(0, backend_path)
    return backend_dir


def main() -> None:
    parser = argparse.ArgumentParser(description="Run the BST Quest backend")
    parser.add_argument("--host", default=os.getenv("BST_HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("BST_PORT", "8000")))
    parser.add_argument("--log-level", default="info")
    args = parser.parse_args()

    _prepare_backend_path()

    uvicorn.run(
        "bst_quest.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        workers=1,
    )


if __name__ == "__main__":
    main()
