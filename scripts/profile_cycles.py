"""CLI that runs a callable for a number of profiled cycles."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import hydra
from omegaconf import DictConfig

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tickprof.runners.cycles import run_profiled_cycles  # noqa: E402
from tickprof.utils.env import load_env_file  # noqa: E402
from tickprof.utils.hydra import as_yaml  # noqa: E402

load_env_file()


@hydra.main(version_base=None, config_path="../configs", config_name="config")
def main(cfg: DictConfig) -> None:
    print(as_yaml(cfg))
    result = run_profiled_cycles(cfg)
    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
