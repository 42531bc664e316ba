import json
import os


class JsonFileStore:
    """Flat string key/value storage kept in a single JSON file."""

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            print(f"Error reading storage {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> str | None:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> bool:
        data = self._read_all()
        data[key] = value
        try:
            with open(self.path, "w") as f:
                json.dump(data, f, indent=4)
        except OSError as e:
            print(f"Error writing storage {self.path}: {e}")
            return False
        return True


class MemoryStore:
    """In-process stand-in for JsonFileStore (headless runs and tests)."""

    def __init__(self, data: dict[str, str] | None = None):
        self.data = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        return True
