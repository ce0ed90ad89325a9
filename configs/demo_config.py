# configs/demo_config.py
from __future__ import annotations
import os
from common.config import SimulationConfig, CodeConfig, ChannelConfig, RunConfig

OUTPUT_ROOT = "outputs"

def _code_cfg() -> CodeConfig:
    scheme = os.getenv("ECC_SCHEME", "hamming74").strip().lower()
    k = int(os.getenv("ECC_K", "4"))
    return CodeConfig(scheme=scheme, data_bits=k)

def _chan_cfg() -> ChannelConfig:
    seed = os.getenv("ECC_SEED")
    return ChannelConfig(
        flip_prob=float(os.getenv("ECC_P", "0.05")),
        seed=int(seed) if seed not in (None, "") else 12345,
    )

def build_config() -> SimulationConfig:
    return SimulationConfig(
        code=_code_cfg(),
        chan=_chan_cfg(),
        run=RunConfig(
            trials=1000,
            p_values=[0.01, 0.02, 0.05, 0.1, 0.2],
            output_root=OUTPUT_ROOT,
            verbose=False,
        ),
    )
