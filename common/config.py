"""
Configuration dataclasses for the code lab: which code, which channel, how to run.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Literal, List

Scheme = Literal["hamming74", "hamming", "repeat"]

MAX_K_VALUE = 32

def env_flag(name: str, default: str = "0") -> bool:
    v = str(os.getenv(name, default)).strip().lower()
    return v in {"1", "true", "yes", "y", "on"}

# ---------- Code / Channel / Run ----------
@dataclass
class CodeConfig:
    scheme: Scheme = "hamming74"
    # only used by the parametric Hamming construction
    data_bits: int = 4
    max_data_bits: int = MAX_K_VALUE

@dataclass
class ChannelConfig:
    # binary symmetric channel: per-bit flip probability
    flip_prob: float = 0.05
    seed: Optional[int] = 12345

@dataclass
class RunConfig:
    trials: int = 1000
    # sweep points for run_error_sweep.py
    p_values: List[float] = field(default_factory=lambda: [0.01, 0.02, 0.05, 0.1, 0.2])
    output_root: str = "outputs"
    verbose: bool = False
    # 環境変数 ECC_TQDM=1 で進捗バー
    show_progress: bool = field(default_factory=lambda: env_flag("ECC_TQDM", "0"))

@dataclass
class SimulationConfig:
    code: CodeConfig = field(default_factory=CodeConfig)
    chan: ChannelConfig = field(default_factory=ChannelConfig)
    run: RunConfig = field(default_factory=RunConfig)
