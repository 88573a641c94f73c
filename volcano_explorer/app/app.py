"""Dash app factory and server-side state."""

from __future__ import annotations

import atexit
import logging
import threading
from dataclasses import dataclass, field

from ..annotations import AnnotationTracker, UniProtClient
from ..config import ExplorerConfig
from ..explorer.session import VolcanoSession

logger = logging.getLogger(__name__)


@dataclass
class ServerState:
    """Mutable server-side state for the single-user Dash app.

    Callbacks run on the server's worker threads; each one holds ``lock``
    while it reads or mutates the session and the annotation tracker.
    """

    session: VolcanoSession
    annotations: UniProtClient | None = None
    tracker: AnnotationTracker = field(default_factory=AnnotationTracker)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def regenerate(self, seed: int | None = None) -> None:
        """New dataset; any pending description lookup becomes stale."""
        with self.lock:
            self.session.on_regenerate(seed)
            self.tracker.clear()

    def close(self) -> None:
        if self.annotations is not None:
            self.annotations.close()


# Module-level singleton — set by create_app()
state: ServerState | None = None


@atexit.register
def _shutdown() -> None:
    if state is not None:
        state.close()


def create_app(config: ExplorerConfig | None = None) -> "dash.Dash":
    """Create and configure the Dash application.

    Parameters
    ----------
    config : ExplorerConfig, optional
        Startup settings; defaults are used when omitted.

    Returns
    -------
    dash.Dash
    """
    import dash

    from .layout import build_layout
    from . import callbacks

    global state
    config = config or ExplorerConfig()
    if state is not None:
        state.close()
    annotations = (
        UniProtClient(timeout=config.annotation_timeout)
        if config.annotations_enabled
        else None
    )
    state = ServerState(session=VolcanoSession(config), annotations=annotations)
    logger.info(
        "Session ready: %d observations, seed=%s",
        len(state.session.dataset),
        state.session.seed,
    )

    app = dash.Dash(
        __name__,
        title="Volcano Explorer",
        suppress_callback_exceptions=True,
    )
    app.layout = build_layout(state)
    callbacks.register(app)

    return app
