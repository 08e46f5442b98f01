#!/usr/bin/env python3
"""Classify every window of an accelerometer recording.

Reads a CSV with acc_x, acc_y, acc_z (and optionally timestamp) columns,
slices it into windows per the config, runs the model on each window and
writes one row per window.

Usage:
    python scripts/classify_recording.py recording.csv -c configs/adapter.yaml -o results.csv
"""

from __future__ import annotations

import argparse
from pathlib import Path

import pandas as pd
from omegaconf import DictConfig
from tqdm import tqdm

from edgemotion.data import WindowConfig, create_windows, load_recording
from edgemotion.models import InferenceEngine, create_adapter_from_config
from edgemotion.utils import get_logger, load_adapter_config, setup_logging_from_config

logger = get_logger("scripts.classify_recording")


def classify_recording(
    recording: Path,
    config: DictConfig,
    engine: InferenceEngine | None = None,
) -> pd.DataFrame:
    """Classify each full window of ``recording``; the adapter is closed on return.

    ``engine`` replaces the model named by ``model.path``.
    """
    window_config = WindowConfig(
        window_size=config.window.size,
        overlap=config.window.overlap,
        sampling_rate=config.window.sampling_rate,
    )
    data, timestamps = load_recording(recording)
    windows, window_timestamps = create_windows(data, window_config, timestamps)
    logger.info(f"{recording.name}: {len(data)} samples -> {len(windows)} windows")

    rows = []
    with create_adapter_from_config(config, engine=engine) as adapter:
        for i, window in enumerate(tqdm(windows, desc="Classifying", unit="window")):
            result = adapter.classify(window)
            row = {
                "window": i,
                "start": window_timestamps[i] if window_timestamps is not None else i * window_config.step_samples,
                "label": result.label,
                "confidence": result.confidence,
            }
            for name, score in zip(adapter.labels, result.scores):
                row[f"score_{name}"] = score
            rows.append(row)

    return pd.DataFrame(rows)


def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("recording", type=Path, help="CSV recording to classify")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Adapter YAML config")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output CSV path")
    parser.add_argument("overrides", nargs="*", help="Config overrides, e.g. model.path=m.tflite")
    args = parser.parse_args()

    config = load_adapter_config(args.config, overrides=args.overrides)
    setup_logging_from_config(config)

    results = classify_recording(args.recording, config)
    if results.empty:
        logger.warning("Recording is shorter than one window; nothing to classify")
        return

    counts = results["label"].value_counts()
    for label, count in counts.items():
        logger.info(f"  {label}: {count} windows")

    output = args.output or args.recording.with_name(f"{args.recording.stem}_predictions.csv")
    results.to_csv(output, index=False)
    logger.info(f"Wrote {len(results)} predictions to {output}")


if __name__ == "__main__":
    main()
