import json
import math

import numpy as np

from sensory_bars.config import BIN_COUNT, NOISE_FLOOR_KEY, NOISE_FLOOR_LENGTH_KEY


def _is_number(x):
    return isinstance(x, (int, float)) and not isinstance(x, bool) and math.isfinite(x)


class NoiseFloorStore:
    def __init__(self, store, bin_count: int = BIN_COUNT):
        """
        Persists the ambient noise floor through a key/value store.

        Two keys are used: the JSON-encoded vector and its JSON-encoded length.

        Args:
            store: Object with get(key) -> str | None and set(key, str).
            bin_count: Expected vector length; shorter stored vectors are ignored.
        """
        self.store = store
        self.bin_count = bin_count

    def load(self, floor: np.ndarray) -> bool:
        """
        Copies a stored noise floor into ``floor`` (in place).

        Returns:
            True if a usable entry was found. Missing, malformed or short entries
            leave ``floor`` untouched and return False.
        """
        try:
            raw = self.store.get(NOISE_FLOOR_KEY)
            raw_len = self.store.get(NOISE_FLOOR_LENGTH_KEY)
        except OSError as e:
            print(f"Error reading noise floor: {e}")
            return False
        if not raw or not raw_len:
            return False

        try:
            values = json.loads(raw)
            length = json.loads(raw_len)
        except ValueError:
            return False

        if not _is_number(length) or length < self.bin_count:
            return False

        try:
            if isinstance(values, dict):
                # Browser-serialized Float32Array: {"0": ..., "1": ..., ...}
                loaded = [values[str(i)] for i in range(self.bin_count)]
            elif isinstance(values, list):
                loaded = values[: self.bin_count]
            else:
                return False
        except KeyError:
            return False

        if len(loaded) < self.bin_count or not all(_is_number(v) for v in loaded):
            return False

        print("loading ambient_noise_floor from storage")
        floor[: self.bin_count] = np.asarray(loaded, dtype=np.float64)
        return True

    def save(self, floor: np.ndarray) -> None:
        """Writes the vector and its length, overwriting any previous entry."""
        values = [float(v) for v in floor]
        try:
            encoded = json.dumps(values, allow_nan=False)
        except ValueError as e:
            print(f"Not saving non-finite noise floor: {e}")
            return
        self.store.set(NOISE_FLOOR_KEY, encoded)
        self.store.set(NOISE_FLOOR_LENGTH_KEY, json.dumps(len(values)))
