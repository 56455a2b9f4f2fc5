"""Unit tests for app.services.member_cache: get/put/evict and thread safety."""

import threading
import unittest
import uuid

from app.services.member_cache import MemberCache
from app.services.members import to_response
from tests.helpers import make_member


class TestMemberCacheBasics(unittest.TestCase):
    def setUp(self) -> None:
        self.cache = MemberCache()
        self.member = to_response(make_member())

    def test_get_missing_returns_none(self) -> None:
        self.assertIsNone(self.cache.get(uuid.uuid4()))

    def test_put_then_get(self) -> None:
        self.cache.put(self.member.id, self.member)
        self.assertIs(self.cache.get(self.member.id), self.member)
        self.assertEqual(len(self.cache), 1)

    def test_put_overwrites(self) -> None:
        other = to_response(make_member(first_name="Johnny"))
        self.cache.put(self.member.id, self.member)
        self.cache.put(self.member.id, other)
        self.assertEqual(self.cache.get(self.member.id).first_name, "Johnny")

    def test_evict_removes_entry(self) -> None:
        self.cache.put(self.member.id, self.member)
        self.cache.evict(self.member.id)
        self.assertIsNone(self.cache.get(self.member.id))
        self.assertEqual(len(self.cache), 0)

    def test_evict_missing_is_noop(self) -> None:
        self.cache.evict(uuid.uuid4())

    def test_clear(self) -> None:
        self.cache.put(self.member.id, self.member)
        self.cache.clear()
        self.assertEqual(len(self.cache), 0)


class TestMemberCacheConcurrency(unittest.TestCase):
    """Concurrent get/put/evict from many threads neither raises nor corrupts entries."""

    def test_concurrent_operations(self) -> None:
        cache = MemberCache()
        responses = [to_response(make_member(email=f"m{i}@example.com")) for i in range(20)]
        errors: list[BaseException] = []
        start = threading.Barrier(8)

        def worker(offset: int) -> None:
            try:
                start.wait()
                for n in range(500):
                    value = responses[(n + offset) % len(responses)]
                    cache.put(value.id, value)
                    got = cache.get(value.id)
                    if got is not None and got.id != value.id:
                        raise AssertionError("cache returned a different member")
                    if n % 3 == 0:
                        cache.evict(value.id)
            except BaseException as e:  # collected and asserted on the main thread
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])
        self.assertLessEqual(len(cache), len(responses))


if __name__ == "__main__":
    unittest.main()
