# examples/run_error_sweep.py
"""
Binary-symmetric-channel sweep: for each scheme and flip probability, encode
random words, corrupt them, decode, and count residual word/bit errors.
Settings come from configs/demo_config.py; CLI flags override them.
"""
from __future__ import annotations
import os, sys, time, argparse
import numpy as np

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from common.config import SimulationConfig
from common.metrics import bit_errors, summarize_trials
from common.run_utils import make_output_dir, write_json
from common.utils import random_word
from channel.channel_model import bsc_channel
from data_link_layer.error_correction import ErrorCorrectionCode, make_code

from configs import demo_config as CFG

def _progress(total: int, desc: str, enabled: bool):
    if not enabled:
        return None
    try:
        from tqdm.auto import tqdm
    except Exception:
        return None
    return tqdm(total=total, desc=desc, unit="word", leave=False)

def run_point(code: ErrorCorrectionCode, p: float, trials: int, rng: np.random.Generator,
              show_progress: bool = False) -> dict:
    k = code.data_length()
    n_word_err = 0; n_bit_err = 0; n_raw_flips = 0
    bar = _progress(trials, f"{code.name()} p={p:.3f}", show_progress)
    for _ in range(trials):
        data = random_word(k, rng)
        sent = code.encode(data)
        received, flipped = bsc_channel(sent, p, rng=rng)
        n_raw_flips += len(flipped)
        res = code.check_and_correct(received)
        be = bit_errors(data, res.extracted_data)
        n_bit_err += be
        n_word_err += int(be > 0)
        if bar is not None:
            bar.update(1)
    if bar is not None:
        bar.close()
    out = summarize_trials(trials, n_word_err, n_bit_err, k)
    out["p"] = float(p)
    out["raw_flips_per_word"] = float(n_raw_flips / max(1, trials))
    return out

def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--schemes", type=str, nargs="+", default=["hamming74", "hamming", "repeat"])
    ap.add_argument("--k", type=int, default=None, help="k for the parametric Hamming code")
    ap.add_argument("--p", type=float, nargs="+", default=None)
    ap.add_argument("--trials", type=int, default=None)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--output_root", type=str, default=None)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args()

    cfg: SimulationConfig = CFG.build_config()
    if args.k is not None:
        cfg.code.data_bits = int(args.k)
    if args.p is not None:
        cfg.run.p_values = [float(x) for x in args.p]
    if args.trials is not None:
        cfg.run.trials = int(args.trials)
    if args.seed is not None:
        cfg.chan.seed = int(args.seed)
    if args.output_root is not None:
        cfg.run.output_root = args.output_root
    cfg.run.verbose = cfg.run.verbose or args.verbose

    rng = np.random.default_rng(cfg.chan.seed)
    results = []
    for scheme in args.schemes:
        code = make_code(scheme, k=cfg.code.data_bits, verbose=cfg.run.verbose)
        t0 = time.time()
        for p in cfg.run.p_values:
            row = run_point(code, p, cfg.run.trials, rng, show_progress=cfg.run.show_progress)
            row.update({"scheme": scheme, "code": code.name(),
                        "n": code.code_length(), "k": code.data_length()})
            results.append(row)
            if cfg.run.verbose:
                print(f"[sweep] {code.name():>28s} p={p:.3f} WER={row['wer']:.4f} BER={row['ber']:.5f}")
        print(f"--- {code.name()} finished in {time.time() - t0:.1f}s ---")

    cfg.code.scheme = args.schemes[0] if len(args.schemes) == 1 else cfg.code.scheme
    out_dir = make_output_dir(cfg, tag="sweep", output_root=cfg.run.output_root)
    out_json = os.path.join(out_dir, "sweep.json")
    write_json(out_json, results)

    print("=== BSC Sweep Report ===")
    print(f"{'code':>28s} {'p':>6s} {'WER':>8s} {'BER':>9s}")
    for row in results:
        print(f"{row['code']:>28s} {row['p']:>6.3f} {row['wer']:>8.4f} {row['ber']:>9.5f}")
    print(f"Saved: {out_json}")

if __name__ == "__main__":
    main()
