"""Concurrency tests for LocalFileCache shared between threads."""

import base64
import json
from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from pathlib import Path

from kvcache import LocalFileCache


class TestLocalFileCacheThreads:
    """Tests for one LocalFileCache used from many threads."""

    def test_concurrent_gets_distinct_keys(self, tmp_path: Path) -> None:
        """Test parallel reads of distinct keys all see their own value."""
        cache = LocalFileCache(tmp_path)
        keys = [f"key:{i}" for i in range(50)]
        for key in keys:
            cache.set(key, {"key": key, "payload": "x" * 500}, ttl=timedelta(hours=1))

        def read(key: str) -> bool:
            for _ in range(20):
                item = cache.get(key)
                if item is None or item.value["key"] != key:
                    return False
            return True

        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(read, keys))

        assert all(results)

    def test_concurrent_writes_never_torn(self, tmp_path: Path) -> None:
        """Test parallel writes to one key leave only whole records."""
        cache = LocalFileCache(tmp_path)
        payload = "y" * 4096

        def write(i: int) -> None:
            cache.set("shared", {"i": i, "payload": payload}, ttl=timedelta(hours=1))

        def read(_: int) -> None:
            item = cache.get("shared")
            if item is not None:
                assert item.value["payload"] == payload

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(write, i) for i in range(100)]
            futures += [pool.submit(read, i) for i in range(100)]
            for future in futures:
                future.result()

        lines = cache.path_for("shared").read_bytes().splitlines()
        assert len(lines) == 100
        first = json.loads(base64.b64decode(json.loads(lines[0])["value"]))
        assert cache.get("shared").value == first
