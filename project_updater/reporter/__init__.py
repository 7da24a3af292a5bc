"""Project Updater reporter -- step feedback and the final summary.

Quick usage::

    from project_updater.reporter import ProgressReporter, print_report

    reporter = ProgressReporter()
    with reporter.track(step):
        result = await runner.run(step)
    reporter.step_finished(result)
    print_report(stats.finish(time.monotonic()))
"""

from project_updater.reporter.progress import ProgressReporter, describe_result, past_tense
from project_updater.reporter.report import print_report, render_report

__all__ = [
    "ProgressReporter",
    "describe_result",
    "past_tense",
    "print_report",
    "render_report",
]
