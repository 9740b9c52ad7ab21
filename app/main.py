import argparse
import json
from collections.abc import Sequence
from dataclasses import asdict

from app.analysis.exceptions import ComparisonError
from app.analysis.stats import summarize_documents
from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.analysis_repository import AnalysisRepository
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.processor.processor import build_analyzer, build_processor
from app.worker.job_runner import JobRunner
from app.worker.worker import Worker


def run_worker(settings: Settings) -> int:
    job_repo = JobRepository(settings.max_job_attempts)
    processor = build_processor(settings, job_repo)
    job_runner = JobRunner(processor, job_repo, settings)
    Worker(job_repo, job_runner, settings).run()
    return 0


def run_compare(settings: Settings, ref1: int, ref2: int) -> int:
    analyzer = build_analyzer(settings)
    try:
        result = analyzer.compare(ref1, ref2)
    except ComparisonError as exc:
        Log.error(f"Comparison failed: {exc}")
        return 1
    print(json.dumps(result.to_payload(), indent=2))
    return 0


def run_stats(owner_id: int) -> int:
    stats = summarize_documents(AnalysisRepository().list_by_owner(owner_id))
    print(json.dumps(asdict(stats), indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="docanalysis", description="Document analysis worker")
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("worker", help="poll and process analysis jobs (default)")
    compare = commands.add_parser("compare", help="compare two stored documents")
    compare.add_argument("ref1", type=int)
    compare.add_argument("ref2", type=int)
    stats = commands.add_parser("stats", help="document statistics for an owner")
    stats.add_argument("owner_id", type=int)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: initialize pool -> run the selected command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        if args.command == "compare":
            return run_compare(settings, args.ref1, args.ref2)
        if args.command == "stats":
            return run_stats(args.owner_id)
        return run_worker(settings)
    finally:
        close_pool()


if __name__ == "__main__":
    raise SystemExit(main())
