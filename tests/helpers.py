"""Deterministic random source for tile placement tests."""


class ScriptedRandom:
    """
    Random source replaying fixed draws.

    Parameters
    ----------
    indices : list[int]
        Values returned by successive ``integers`` calls.
    floats : list[float]
        Values returned by successive ``random`` calls.
    """

    def __init__(self, indices, floats):
        self._indices = iter(indices)
        self._floats = iter(floats)

    def integers(self, high):
        index = next(self._indices)
        if not 0 <= index < high:
            raise AssertionError(f"Scripted index {index} outside [0, {high})")
        return index

    def random(self):
        return next(self._floats)
