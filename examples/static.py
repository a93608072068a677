from __future__ import annotations

"""Static shoebox example.

This script:
1) Builds a shoebox room from reflection coefficients or a T60.
2) Simulates RIRs for a small microphone line and one or more sources.
3) Saves the RIR tensor (nsample, n_mic, n_src) as ``rirs.npy``.
"""

import argparse
import sys
from pathlib import Path

import numpy as np

try:
    from shoeboxrir import (
        LoggingConfig,
        MicrophoneArray,
        Room,
        SimulationConfig,
        Source,
        get_logger,
        setup_logging,
        simulate_rir,
    )
except ModuleNotFoundError:  # allow running without installation
    ROOT = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(ROOT / "src"))
    from shoeboxrir import (
        LoggingConfig,
        MicrophoneArray,
        Room,
        SimulationConfig,
        Source,
        get_logger,
        setup_logging,
        simulate_rir,
    )

MIC_SPACING = 0.08


def main() -> None:
    """Run the static simulation and save the RIRs."""
    parser = argparse.ArgumentParser(description="Static RIR for a shoebox room")
    parser.add_argument("--room", type=float, nargs=3, default=[6.0, 4.0, 3.0])
    parser.add_argument(
        "--source",
        type=float,
        nargs=3,
        action="append",
        help="Source position in metres (repeatable).",
    )
    parser.add_argument("--mic-center", type=float, nargs=3, default=[3.0, 2.0, 1.5])
    parser.add_argument("--num-mics", type=int, default=4)
    parser.add_argument("--fs", type=float, default=16000.0)
    parser.add_argument("--beta", type=float, default=None, help="Uniform reflection coefficient.")
    parser.add_argument("--t60", type=float, default=0.4)
    parser.add_argument("--max-order", type=int, default=-1)
    parser.add_argument("--nsample", type=int, default=None)
    parser.add_argument("--mic-pattern", default="omni")
    parser.add_argument("--orientation", type=float, default=0.0)
    parser.add_argument("--no-hpf", action="store_false", dest="high_pass")
    parser.add_argument("--no-lpf", action="store_false", dest="low_pass_interp")
    parser.add_argument("--workers", type=int, default=None)
    parser.add_argument("--out-dir", type=Path, default=Path("outputs"))
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    setup_logging(LoggingConfig(level=args.log_level))
    logger = get_logger("examples.static")

    if args.beta is not None:
        room = Room.shoebox(args.room, fs=args.fs, beta=[args.beta] * 6)
    else:
        room = Room.from_t60(args.room, fs=args.fs, t60=args.t60)

    sources = Source.from_positions(args.source or [[1.0, 1.0, 1.2]])
    center = np.asarray(args.mic_center)
    offsets = (np.arange(args.num_mics) - (args.num_mics - 1) / 2) * MIC_SPACING
    mic_pos = np.stack([center + [dx, 0.0, 0.0] for dx in offsets])
    mics = MicrophoneArray.from_positions(mic_pos.tolist())

    config = SimulationConfig(
        max_order=args.max_order,
        nsample=args.nsample,
        mic_pattern=args.mic_pattern,
        orientation=args.orientation,
        high_pass=args.high_pass,
        low_pass_interp=args.low_pass_interp,
        max_workers=args.workers,
    )
    result = simulate_rir(room=room, sources=sources, mics=mics, config=config)
    if result.beta_hat is not None:
        logger.info("beta_hat: %.4f", result.beta_hat)
    logger.info("rirs shape: %s", tuple(result.rirs.shape))

    args.out_dir.mkdir(parents=True, exist_ok=True)
    out_path = args.out_dir / "rirs.npy"
    np.save(out_path, result.rirs.cpu().numpy())
    logger.info("saved: %s", out_path)


if __name__ == "__main__":
    main()
