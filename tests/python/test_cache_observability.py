import unittest

import numpy as np

import cachematrix
from cachematrix import cache_solve, make_cache_matrix
from cachematrix._internal.observability import CacheObservability


class TestCacheObservability(unittest.TestCase):
    def setUp(self):
        cachematrix.clear_cache_traces()

    def tearDown(self):
        cachematrix.clear_cache_traces()

    def test_miss_then_hit_records(self):
        c = make_cache_matrix([[2.0, 0.0], [0.0, 2.0]])
        cache_solve(c)
        cache_solve(c)

        miss = cachematrix.last_cache_trace("miss")
        hit = cachematrix.last_cache_trace("hit")
        latest = cachematrix.last_cache_trace()

        self.assertIsNotNone(miss)
        self.assertIsNotNone(hit)
        self.assertEqual(miss.get("op"), "cache_solve")
        self.assertEqual(miss.get("shape"), (2, 2))
        self.assertTrue(str(miss.get("solver", "")).endswith("inv"))
        self.assertIsNone(hit.get("solver"))
        self.assertEqual(latest.get("trace_tag"), hit.get("trace_tag"))
        self.assertTrue(hit["trace_tag"].startswith("cache_solve:hit"))
        self.assertEqual(cachematrix.cache_stats(), {"hit": 1, "miss": 1, "error": 0})
        self.assertEqual([t["outcome"] for t in cachematrix.cache_traces()], ["miss", "hit"])

    def test_error_record_keeps_exception_type(self):
        c = make_cache_matrix([[1.0, 1.0], [1.0, 1.0]])
        with self.assertRaises(np.linalg.LinAlgError):
            cache_solve(c)

        err = cachematrix.last_cache_trace("error")
        self.assertIsNotNone(err)
        self.assertIn("LinAlgError", err.get("error"))
        self.assertIsNone(cachematrix.last_cache_trace("miss"))

    def test_clear_resets_everything(self):
        cache_solve(make_cache_matrix([[2.0]]))
        cachematrix.clear_cache_traces()
        self.assertIsNone(cachematrix.last_cache_trace())
        self.assertEqual(cachematrix.cache_traces(), [])
        self.assertEqual(cachematrix.cache_stats()["miss"], 0)

    def test_returned_records_are_copies(self):
        cache_solve(make_cache_matrix([[2.0]]))
        trace = cachematrix.last_cache_trace()
        trace["outcome"] = "tampered"
        self.assertEqual(cachematrix.last_cache_trace()["outcome"], "miss")

    def test_history_is_bounded(self):
        obs = CacheObservability(history_limit=3)
        for _ in range(5):
            obs.record("cache_solve", "hit")
        self.assertEqual(len(obs.history()), 3)
        self.assertEqual(obs.stats()["hit"], 5)

        obs.set_history_limit(2)
        self.assertEqual(len(obs.history()), 2)

    def test_unknown_outcome_rejected(self):
        with self.assertRaises(ValueError):
            CacheObservability().record("cache_solve", "maybe")


if __name__ == "__main__":
    unittest.main()
