#!/usr/bin/env python3


import logging
import sys

from chrono_probe.experiments.aggregate import summarize
from chrono_probe.experiments.config import ExperimentConfig, load_config
from chrono_probe.experiments.runner import ExperimentRunner

logger = logging.getLogger("chrono_probe.main")


def main(config_file: str = "config.yaml") -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(config_file)
    cfg = ExperimentConfig.from_dict(config)
    # Each run gets its own timestamped directory, old results are kept
    runner = ExperimentRunner(cfg.results_folder)
    result = runner.run(cfg)
    for row in summarize(result.measurements):
        logger.info(
            "%s: log-log slope=%s intercept=%s",
            row["algorithm"],
            row.get("loglog_slope"),
            row.get("loglog_intercept"),
        )
    logger.info("Experiment completed, results in %s", result.output_dir)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else "config.yaml")
