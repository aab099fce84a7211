"""
Command-line runner for the compatibility engine.

Usage:
    python -m compatibility.run --profiles data/profiles.csv --seeker u1 --mode near
    python -m compatibility.run --config configs/config.yaml --seeker u1 --mode report

Modes:
- score:  itemized match score of --candidate against the seeker's preferences
- mutual: the seeker's mutual matches in the pool
- near:   the seeker's near matches in the pool
- report: pool diagnostics for the seeker

Results are printed as JSON, or written to --output.
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Optional

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

MODES = ["score", "mutual", "near", "report"]


def setup_logging(log_level: str) -> None:
    """Configure logging level from config."""
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(level)


def run(
    config_path: Optional[str],
    seeker_id: str,
    mode: str,
    profiles_path: Optional[str] = None,
    candidate_id: Optional[str] = None,
    max_failed: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Run one engine operation over a profile export.

    Args:
        config_path: Path to the configuration YAML file (optional)
        seeker_id: User id of the seeker
        mode: One of MODES
        profiles_path: Profile export path (overrides data.profiles.path)
        candidate_id: Candidate user id (score mode)
        max_failed: Near-match budget (overrides config)

    Returns:
        JSON-serializable result dictionary
    """
    from .configs import load_config, validate_config, get_config_value, EngineConfig
    from .data_loading import load_profiles, find_profile
    from .evaluation import create_pool_report
    from .near_match import find_near_matches
    from .scoring import calculate_match_score, find_mutual_matches

    config: Dict[str, Any] = {}
    if config_path:
        config = load_config(config_path)
        for issue in validate_config(config):
            logger.warning(f"Config issue: {issue}")

    engine_config = EngineConfig.from_config(config)
    engine_config.validate()
    setup_logging(engine_config.log_level)

    profiles_path = profiles_path or get_config_value(config, "data.profiles.path")
    if not profiles_path:
        raise ValueError("No profile export given (use --profiles or data.profiles.path)")
    delimiter = get_config_value(config, "data.profiles.delimiter", ",")

    profiles = load_profiles(profiles_path, delimiter=delimiter)
    seeker = find_profile(profiles, seeker_id)

    if mode == "score":
        if candidate_id is None:
            raise ValueError("score mode requires --candidate")
        candidate = find_profile(profiles, candidate_id)
        score = calculate_match_score(seeker, candidate)
        return {"seeker_id": seeker.user_id, "candidate_id": candidate.user_id, **score.to_dict()}

    if mode == "mutual":
        matches = find_mutual_matches(seeker, profiles)
        return {"seeker_id": seeker.user_id, "mutual_matches": [m.user_id for m in matches]}

    if mode == "near":
        results = find_near_matches(seeker, profiles, max_failed, config=engine_config)
        return {"seeker_id": seeker.user_id, "near_matches": [r.to_dict() for r in results]}

    if mode == "report":
        quantiles = get_config_value(config, "report.quantiles", [0.1, 0.25, 0.5, 0.75, 0.9])
        if max_failed is not None:
            engine_config.max_failed_criteria = max_failed
        report = create_pool_report(seeker, profiles, engine_config, quantiles)
        logger.info("\n" + report.summary())
        return report.to_dict()

    raise ValueError(f"Unknown mode: {mode}")


def main(argv=None):
    """Main entry point for the command-line runner."""
    parser = argparse.ArgumentParser(
        description="Run compatibility matching for one seeker"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--profiles",
        type=str,
        default=None,
        help="Profile export (CSV or JSON); overrides data.profiles.path"
    )
    parser.add_argument(
        "--seeker",
        type=str,
        required=True,
        help="User id of the seeker"
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="near",
        help="Operation to run"
    )
    parser.add_argument(
        "--candidate",
        type=str,
        default=None,
        help="Candidate user id (score mode)"
    )
    parser.add_argument(
        "--max-failed",
        type=int,
        default=None,
        help="Near-match budget of relaxable failed criteria (overrides config)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write JSON result to this file instead of stdout"
    )

    args = parser.parse_args(argv)

    try:
        result = run(
            args.config,
            args.seeker,
            args.mode,
            profiles_path=args.profiles,
            candidate_id=args.candidate,
            max_failed=args.max_failed,
        )
    except Exception as e:
        logger.exception(f"Run failed with error: {e}")
        return 1

    if args.output:
        with open(args.output, "w") as f:
            json.dump(result, f, indent=2)
        logger.info(f"Saved result to {args.output}")
    else:
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
