"""Unit tests for the WriteGuard critical sections."""

import threading

from labstock.domain.service.write_guard import REQUESTS_KEY, WriteGuard, item_key, shared_guard


class TestWriteGuard:

    def test_same_key_is_reentrant(self):
        guard = WriteGuard()
        with guard.hold(REQUESTS_KEY):
            with guard.hold(REQUESTS_KEY):
                pass

    def test_nested_keys_in_lock_order(self):
        guard = WriteGuard()
        with guard.hold(REQUESTS_KEY):
            with guard.hold(item_key("a")):
                pass

    def test_same_key_excludes_other_threads(self):
        guard = WriteGuard()
        counter = {"value": 0}

        def bump():
            for _ in range(200):
                with guard.hold(item_key("x")):
                    current = counter["value"]
                    counter["value"] = current + 1

        threads = [threading.Thread(target=bump) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter["value"] == 1600

    def test_shared_guard_is_a_singleton(self):
        assert shared_guard() is shared_guard()
        assert item_key("abc") == "item:abc"
