"""Textual integration for bindflow. Opt-in — requires textual.

Pushes node values into Textual widgets through guarded effects. Nothing
here is needed by the core engine, and the core never imports it.

Like the rest of bindflow this is single-threaded: set() the inputs from the
app's own thread (a worker should hand values over with call_from_thread
and set them there). A guarded effect only decides whether the widget tree
can be touched right now.

Pause state is owned by this module: an app id is in _paused_apps exactly
while inside its pause() context, and the app object itself is never mutated.
"""

import logging
from contextlib import contextmanager

from textual.css.query import NoMatches

from bindflow.binding import check_arity
from bindflow.effect import Effect

logger = logging.getLogger("bindflow.textual")

# keyed by id(app) so several apps can coexist (tests build many)
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Hold back guarded effects for app, e.g. while its widgets are replaced."""
    _paused_apps.add(id(app))
    try:
        yield
    finally:
        _paused_apps.discard(id(app))


def is_safe(app) -> bool:
    """True when app is running and not paused, so widget queries can succeed."""
    return app.is_running and id(app) not in _paused_apps


def effect(app, fn, *inputs, fire_immediately=True):
    """Effect that writes node values into app's widgets.

    fn(*values) is skipped while the app is paused or not running, and a
    NoMatches raised by a widget query inside fn is logged and dropped.
    Any other exception propagates to whoever triggered the update.
    """
    check_arity(fn, len(inputs))

    def _guarded(*values):
        if not is_safe(app):
            return
        try:
            fn(*values)
        except NoMatches as exc:
            logger.debug("Widget gone, skipping %s: %s", fn, exc)

    return Effect(_guarded, *inputs, fire_immediately=fire_immediately)
