"""Progress indication utilities using Rich library.

Polling commands run for a whole file interval (five minutes by default).
When a collector is started by hand in a terminal a spinner shows that it
is working; under a scheduler a single status line is logged instead.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Callable, Iterator, Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

if TYPE_CHECKING:
    from logging import Logger

SetDescriptionFunc = Callable[[str], None]


def is_interactive_terminal(console: Optional[Console] = None) -> bool:
    """Detect if progress output would go to an interactive terminal."""
    console = console or Console(stderr=True)
    return console.is_terminal


@contextmanager
def progress_context(
    description: str,
    logger: Optional["Logger"] = None,
    transient: bool = True,
) -> Iterator[SetDescriptionFunc]:
    """Context manager for an indeterminate wait with automatic TTY detection.

    Args:
        description: Text shown next to the spinner or logged once.
        logger: Logger for non-interactive mode status messages.
        transient: If True, the spinner is cleared when the block exits.

    Yields:
        set_description(desc) to update the spinner text.

    Example:
        >>> with progress_context("Polling sar for 300s", logger=logger):
        ...     executor.execute(["sar", "1", "300"])
    """
    console = Console(stderr=True)
    if not is_interactive_terminal(console):
        if logger is not None:
            logger.status(f"{description}...")

        def noop_set_description(desc: str) -> None:
            pass

        yield noop_set_description
        return

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        transient=transient,
    )

    try:
        progress.start()
        task_id = progress.add_task(description, total=None)

        def set_description_func(desc: str) -> None:
            progress.update(task_id, description=desc)

        yield set_description_func
    finally:
        progress.stop()
