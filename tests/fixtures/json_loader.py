import copy
import json
from functools import reduce
from pathlib import Path
from typing import Any, Dict


class TestDataLoader:
    """Reads tests/fixtures/test_data.json once per session"""

    _data: Dict[str, Any] = None

    @classmethod
    def load(cls) -> Dict[str, Any]:
        if cls._data is None:
            with open(Path(__file__).parent / "test_data.json") as f:
                cls._data = json.load(f)
        return cls._data

    @classmethod
    def get(cls, path: str) -> Any:
        # "tenant_registration.owner" walks nested objects
        return reduce(lambda node, key: node[key], path.split("."), cls.load())

    @classmethod
    def get_copy(cls, path: str) -> Any:
        return copy.deepcopy(cls.get(path))
