"""Console-script entrypoint; the CLI lives in `prun.runner.main`."""

from __future__ import annotations

from prun.runner.main import main

__all__ = ["main"]


if __name__ == "__main__":
    raise SystemExit(main())
