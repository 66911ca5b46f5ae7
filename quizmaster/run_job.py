"""
Run one background job by hand, outside its schedule.

Usage: python -m quizmaster.run_job <job-name>
"""
import argparse
import asyncio
import sys

from quizmaster.config import settings
from quizmaster.database.db import ENGINE
from quizmaster.exceptions import UnknownJob
from quizmaster.repeated_tasks.context import build_job_context
from quizmaster.repeated_tasks.registry import JOB_REGISTRY, JobRunner


async def run(job_name: str) -> None:
    try:
        await JobRunner(JOB_REGISTRY, build_job_context(ENGINE, settings)).trigger(job_name)
    finally:
        await ENGINE.dispose()


def print_available_jobs() -> None:
    print("Available jobs:")
    for name in JOB_REGISTRY.manual_names():
        print(f"  - {name}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run a QuizMaster background job now.")
    parser.add_argument("job_name", nargs="?", help="name of the job to run")
    args = parser.parse_args(argv)

    if not args.job_name:
        print("Please specify a job name")
        print_available_jobs()
        return 1

    print(f"Running job: {args.job_name}")
    try:
        asyncio.run(run(args.job_name))
    except UnknownJob as e:
        print(str(e))
        print_available_jobs()
        return 1
    except Exception as e:
        print(f"Job '{args.job_name}' failed: {e}")
        return 1

    print(f"Job '{args.job_name}' completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
