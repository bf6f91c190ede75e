"""
Demo scenarios driving the progress display with sample data.
"""

import time

from rich.style import Style

from .progress import Progress
from .utils.logging import setup_logging

_INFO = Style(color="cyan")


def demo_single(delay: float) -> None:
    """One bar with the default template."""
    progress = Progress(title="Single gauge", label="progress", goal=100)
    for value in range(101):
        progress.update(value, force_render=value == 100)
        time.sleep(delay)
    progress.complete()


def demo_multi(delay: float) -> None:
    """Three stacked bars advancing at different rates."""
    progress = Progress(
        title="Downloading files...",
        symbol_complete="=",
        symbol_incomplete="-",
        progress_template="[{bar}] {label} {percent}% (in {elapsed}s) {value}/{goal}",
        hide_cursor=True,
    )
    progress.install_exit_hook()
    for step in range(1, 101):
        done = [step, min(step * 3, 100), min(step * 2, 100)]
        progress.update(
            [
                [done[0], {"label": "file1", "symbol_complete": "*", "symbol_incomplete": "."}],
                [done[1], {"label": "file2", "clear_on_complete": True}],
                [done[2], {"label": "file3"}],
            ],
            force_render=all(value >= 100 for value in done),
        )
        time.sleep(delay)
    progress.complete()
    progress.remove_exit_hook()


def demo_log(delay: float) -> None:
    """Log messages interleaved above a pair of bars."""
    progress = Progress(title="Gauges with logging...", label="progress =", hide_cursor=True)
    progress.install_exit_hook()
    for value in range(101):
        progress.update([value, [value, {"label": "progress *"}]], force_render=value == 100)
        if value % 20 == 0:
            progress.log(_INFO.render(f"info: {value:3d}% complete"))
        time.sleep(delay)
    progress.complete()
    progress.remove_exit_hook()


def demo_intermediate(delay: float) -> None:
    """Sub-cell precision with a partial-fill glyph ramp."""
    progress = Progress(
        goal=1000,
        symbol_complete="█",
        symbol_incomplete=" ",
        symbol_intermediate=["▏", "▎", "▍", "▌", "▋", "▊", "▉"],
        progress_template="{percent}% |{bar}| {value}/{goal} ({rate}/s, eta {eta}s)",
    )
    for value in range(0, 1001, 2):
        progress.update(value, force_render=value == 1000)
        time.sleep(delay / 5)
    progress.complete()


DEMOS = {
    "single": demo_single,
    "multi": demo_multi,
    "log": demo_log,
    "intermediate": demo_intermediate,
}


def cli():
    """CLI entry point with argument parsing."""
    import argparse

    parser = argparse.ArgumentParser(
        description="ttygauge demo - live terminal progress bars",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "scenario",
        nargs="?",
        choices=sorted(DEMOS),
        default="single",
        help="Which demo to run",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.03,
        help="Seconds between updates",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log render decisions to stdout",
    )

    args = parser.parse_args()
    if args.verbose:
        setup_logging(verbose=True)

    try:
        DEMOS[args.scenario](args.delay)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    cli()
