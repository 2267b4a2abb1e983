# playback.py
#
# Timer-free playback cursor over a finished trace. Whoever owns the clock
# (a UI loop, the CLI replay command) calls tick() once per `delay`.

from algostep.config import DEFAULT_SPEED_MS


class PlaybackCursor:
    """
    Cursor into a precomputed step list.
    - load() with a different step list, or reset(), moves the cursor back to 0
    - tick() advances one step while playing and not yet at the last index
    - on_finish fires once when the last index is reached while playing
    """

    def __init__(self, steps=None, speed=DEFAULT_SPEED_MS, on_finish=None):
        self.steps = steps if steps is not None else []
        self.set_speed(speed)
        self.on_finish = on_finish
        self.index = 0
        self.playing = False
        self._finished_notified = False

    # --- Controls ---
    def load(self, steps):
        if steps is not self.steps:
            self.steps = steps
            self.reset()

    def reset(self):
        self.index = 0
        self._finished_notified = False

    def play(self):
        self.playing = True
        self._check_finished()

    def pause(self):
        self.playing = False

    def set_speed(self, speed):
        self.speed = max(0, speed)

    # --- State ---
    @property
    def delay(self):
        """Seconds to wait between ticks."""
        return self.speed / 1000.0

    @property
    def last_index(self):
        return len(self.steps) - 1

    @property
    def is_finished(self):
        return bool(self.steps) and self.index >= self.last_index

    @property
    def current(self):
        if not self.steps:
            return None
        return self.steps[self.index]

    def tick(self):
        """Advance one step. Returns True if the cursor moved."""
        if not self.playing or not self.steps:
            return False
        if self.index >= self.last_index:
            self._check_finished()
            return False
        self.index += 1
        self._check_finished()
        return True

    def _check_finished(self):
        if self.playing and self.is_finished and not self._finished_notified:
            self._finished_notified = True
            if self.on_finish:
                self.on_finish()
