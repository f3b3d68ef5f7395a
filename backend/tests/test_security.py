"""
PrayerSpot Backend — Password Hashing Unit Tests
==================================================
"""

from prayerspot.security import ALGORITHM, hash_password, verify_password


class TestPasswordHashing:

    def test_hash_never_contains_the_password(self):
        stored = hash_password("p1-secret")

        assert "p1-secret" not in stored
        assert stored.startswith(f"{ALGORITHM}$")

    def test_same_password_gets_a_fresh_salt(self):
        assert hash_password("p1") != hash_password("p1")

    def test_correct_password_verifies(self):
        stored = hash_password("p1")

        assert verify_password("p1", stored) is True

    def test_wrong_password_is_rejected(self):
        stored = hash_password("p1")

        assert verify_password("p2", stored) is False

    def test_iteration_count_travels_with_the_hash(self):
        stored = hash_password("p1", iterations=2000)

        assert stored.split("$")[1] == "2000"
        assert verify_password("p1", stored) is True

    def test_malformed_stored_value_is_rejected(self):
        assert verify_password("p1", "p1") is False
        assert verify_password("p1", "md5$1$zz$zz") is False
        assert verify_password("p1", f"{ALGORITHM}$0$00$00") is False
