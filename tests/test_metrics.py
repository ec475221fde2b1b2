"""Tests for the metrics singleton."""

import threading
import time
from functools import lru_cache
from unittest.mock import patch

from recipe_scan.observability import metrics as metrics_module
from recipe_scan.observability.metrics import PipelineMetrics, get_metrics


class TestGetMetrics:
    """Tests for get_metrics."""

    def test_returns_same_instance(self) -> None:
        assert get_metrics() is get_metrics()
        assert isinstance(get_metrics(), PipelineMetrics)

    def test_concurrent_first_use_builds_once(self) -> None:
        built = []

        @lru_cache()
        def slow_build():
            time.sleep(0.01)
            instance = object()
            built.append(instance)
            return instance

        barrier = threading.Barrier(8)
        results = []
        errors = []

        def call():
            barrier.wait()
            try:
                results.append(get_metrics())
            except Exception as e:
                errors.append(e)

        with patch.object(metrics_module, "_build_metrics", slow_build):
            threads = [threading.Thread(target=call) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        assert errors == []
        assert len(built) == 1
        assert all(result is built[0] for result in results)
        assert len(results) == 8
