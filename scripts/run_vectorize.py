"""
Vectorize a record set for downstream classification.

This script is a convenience wrapper around
`textseq.pipeline.vectorize_records`, which:

- loads the configured record CSV
- cleans the free-text fields
- builds a vocabulary for each configured vocabulary field
- converts the text into padded integer sequences
- encodes the label field

The padded matrices, labels and vocabularies are written to a compressed
.npz file under the artifacts directory.

Usage (from project root):

    python -m scripts.run_vectorize
    # or
    python scripts/run_vectorize.py --output artifacts/vectorized.npz
"""

from __future__ import annotations

import argparse
import os
from typing import Dict

import numpy as np

from textseq.data.datasets import load_data_config, load_records
from textseq.pipeline import VectorizedRecords, vectorize_records
from textseq.utils.pipeline_utils import ensure_dir_exists, get_logger, load_pipeline_config


def parse_args() -> argparse.Namespace:
    """
    Parse command-line arguments.
    """
    parser = argparse.ArgumentParser(
        description="Clean, tokenize and pad the free-text fields of a record set."
    )
    parser.add_argument(
        "--data-config",
        type=str,
        default="config/data.yaml",
        help="Path to data config YAML (default: config/data.yaml).",
    )
    parser.add_argument(
        "--pipeline-config",
        type=str,
        default="config/pipeline.yaml",
        help="Path to pipeline config YAML (default: config/pipeline.yaml).",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output .npz path (default: <artifacts_dir>/vectorized.npz).",
    )
    return parser.parse_args()


def _to_arrays(result: VectorizedRecords) -> Dict[str, np.ndarray]:
    arrays: Dict[str, np.ndarray] = {"labels": result.labels}
    for name, matrix in result.sequences.items():
        arrays[f"{name}_sequences"] = matrix
        # Token at position i has index i + 1.
        arrays[f"{name}_vocabulary"] = np.array(
            result.encodings[name].vocabulary.tokens, dtype=str
        )
    return arrays


def main() -> None:
    args = parse_args()

    pipeline_cfg = load_pipeline_config(args.pipeline_config)
    logger = get_logger(
        name="run_vectorize",
        config=pipeline_cfg,
        log_file_suffix="vectorize",
    )

    logger.info("=" * 80)
    logger.info(
        "Configs: data=%s, pipeline=%s",
        args.data_config,
        args.pipeline_config,
    )

    data_cfg = load_data_config(args.data_config)
    records = load_records(args.data_config)
    logger.info("Loaded %d records.", len(records))

    result = vectorize_records(records, data_cfg=data_cfg, logger=logger)

    output_path = args.output
    if output_path is None:
        artifacts_dir = (pipeline_cfg.get("paths", {}) or {}).get("artifacts_dir", "artifacts")
        output_path = os.path.join(artifacts_dir, "vectorized.npz")
    ensure_dir_exists(os.path.dirname(output_path))

    np.savez_compressed(output_path, **_to_arrays(result))
    logger.info("Saved vectorized records to %s", output_path)


if __name__ == "__main__":
    main()
