import unittest
from datetime import datetime, timedelta, timezone

from gdrivenav.util.time import expiry_from_now, from_naive_utc, normalize_dt, now_utc


class TestUtilTime(unittest.TestCase):
    def test_now_utc_is_tz_aware(self) -> None:
        dt = now_utc()
        self.assertIsNotNone(dt.tzinfo)
        self.assertEqual(dt.tzinfo, timezone.utc)

    def test_normalize_dt_rejects_naive(self) -> None:
        naive = datetime(2025, 1, 1, 12, 0, 0)
        with self.assertRaises(ValueError):
            normalize_dt(naive)

    def test_normalize_dt_rejects_non_datetime(self) -> None:
        with self.assertRaises(TypeError):
            normalize_dt("2025-01-01")  # type: ignore[arg-type]

    def test_from_naive_utc_attaches_utc(self) -> None:
        dt = from_naive_utc(datetime(2025, 1, 1, 12, 0, 0))
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))

    def test_from_naive_utc_converts_aware(self) -> None:
        jst = timezone(timedelta(hours=9))
        dt = from_naive_utc(datetime(2025, 1, 1, 21, 0, 0, tzinfo=jst))
        self.assertEqual(dt, datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc))
        self.assertEqual(dt.tzinfo, timezone.utc)

    def test_expiry_from_now(self) -> None:
        now = datetime(2025, 1, 1, tzinfo=timezone.utc)
        self.assertEqual(expiry_from_now(3600, now), now + timedelta(hours=1))


if __name__ == "__main__":
    unittest.main()
