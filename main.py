from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str((Path(__file__).resolve().parent / "src")))

from api import run  # type: ignore  # after sys.path tweak

if __name__ == "__main__":
    run(sensor="simulated")
