"""Progress scaling for multi-phase workflows."""

from bundlefs.engine.models import ProgressCallback, ProgressEvent


def subprogress(on_progress: ProgressCallback, start_percent: float, end_percent: float) -> ProgressCallback:
    """Map a 0-100% progress stream onto ``start_percent``..``end_percent``.

    Example:
        # the mirror phase covers 20% to 40% of the whole install
        ditto(src, dst, DittoOptions(on_progress=subprogress(on_progress, 20, 40)))

    Args:
        on_progress: Parent callback receiving the rescaled events.
        start_percent: Parent percentage at which the phase starts.
        end_percent: Parent percentage at which the phase ends.

    Returns:
        Callback accepting ProgressEvent from the phase.
    """
    span = end_percent - start_percent

    def scaled(event: ProgressEvent) -> None:
        percent = start_percent + (event.percent / 100) * span
        on_progress(ProgressEvent(percent=percent, done=event.done, total=event.total))

    return scaled
