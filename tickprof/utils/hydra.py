"""Hydra/OmegaConf utility helpers."""

from __future__ import annotations

from omegaconf import DictConfig, OmegaConf


def as_yaml(cfg: DictConfig) -> str:
    return OmegaConf.to_yaml(cfg, resolve=True)


def select_profiler_config(cfg: DictConfig) -> DictConfig:
    """Return the ``profiler`` subtree of a CLI config, or an empty node."""

    node = OmegaConf.select(cfg, "profiler")
    return node if node is not None else OmegaConf.create({})
