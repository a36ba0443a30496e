"""Tests for userhub.repositories.user_repository against in-memory SQLite, plus failure wrapping."""

import unittest
from datetime import datetime
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from support import create_request, make_session, update_request
from userhub.core.exceptions import ConflictError, InternalError
from userhub.models import AccountStatus, User, UserRole
from userhub.repositories.user_repository import UserRepository
from userhub.schemas.user import UserPagination


LONG_AGO = datetime(2000, 1, 1, 12, 0, 0)


def _db_down() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


class RepositoryTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = make_session()
        self.repo = UserRepository(self.db)

    def tearDown(self) -> None:
        self.db.close()

    def _backdate(self, *users: User) -> None:
        """Stamp every timestamp on the given users to LONG_AGO."""
        for user in users:
            user.created_at = user.updated_at = LONG_AGO
            user.photograph.created_at = user.photograph.updated_at = LONG_AGO
        self.db.commit()

    def _seed(self, *usernames: str) -> list[User]:
        return [
            self.repo.create(create_request(username=name, source=f"s3://photos/{name}.png"))
            for name in usernames
        ]


class TestCreate(RepositoryTestCase):
    def test_creates_active_user_with_photograph(self) -> None:
        user = self.repo.create(
            create_request(username="alice", password="x" * 8, source="s", media_type="image/png")
        )
        self.assertIsNotNone(user.user_id)
        self.assertEqual(user.username, "alice")
        self.assertEqual(user.user_role, UserRole.USER)
        self.assertEqual(user.account_status, AccountStatus.ACTIVE)
        self.assertEqual(user.photograph.source, "s")
        self.assertEqual(user.photograph.media_type, "image/png")
        self.assertEqual(user.photograph.user_id, user.user_id)

    def test_stamps_timestamps(self) -> None:
        user = self.repo.create(create_request())
        self.assertIsNotNone(user.created_at)
        self.assertEqual(user.created_at, user.updated_at)
        self.assertEqual(user.photograph.created_at, user.created_at)

    def test_duplicate_username_raises_conflict(self) -> None:
        self.repo.create(create_request(username="alice"))
        with self.assertRaises(ConflictError):
            self.repo.create(create_request(username="alice"))
        # Session is usable again after the rollback.
        self.assertEqual(self.repo.count(), 1)

    def test_commit_failure_rolls_back_and_raises_internal_error(self) -> None:
        session = MagicMock()
        session.commit.side_effect = _db_down()
        with self.assertRaises(InternalError) as ctx:
            UserRepository(session).create(create_request())
        self.assertEqual(ctx.exception.message, "Error saving user")
        session.rollback.assert_called_once()


class TestFindAll(RepositoryTestCase):
    def test_first_page_ordered_by_username(self) -> None:
        self._seed("carol", "alice", "bob")
        page = self.repo.find_all(UserPagination(page=0, size=10, sort="username", order="asc"))
        self.assertEqual([u.username for u in page.results], ["alice", "bob", "carol"])
        self.assertEqual(page.total_items, 3)

    def test_descending_order(self) -> None:
        self._seed("carol", "alice", "bob")
        page = self.repo.find_all(UserPagination(sort="username", order="desc"))
        self.assertEqual([u.username for u in page.results], ["carol", "bob", "alice"])

    def test_size_limits_results_and_total_items_counts_page_only(self) -> None:
        self._seed(*[f"user{i:02d}" for i in range(12)])
        page = self.repo.find_all(UserPagination(page=0, size=10))
        self.assertEqual(len(page.results), 10)
        self.assertEqual(page.total_items, 10)

    def test_offset_is_page_times_size(self) -> None:
        self._seed(*[f"user{i:02d}" for i in range(12)])
        page = self.repo.find_all(UserPagination(page=1, size=10))
        self.assertEqual([u.username for u in page.results], ["user10", "user11"])
        self.assertEqual(page.total_items, 2)

    def test_excludes_inactive_users(self) -> None:
        alice, bob = self._seed("alice", "bob")
        self.repo.deactivate(bob.user_id)
        page = self.repo.find_all(UserPagination())
        self.assertEqual([u.username for u in page.results], ["alice"])

    def test_search_is_case_insensitive_substring(self) -> None:
        self._seed("Alice", "malice", "bob")
        page = self.repo.find_all(UserPagination(search="ALI"))
        self.assertEqual(sorted(u.username for u in page.results), ["Alice", "malice"])

    def test_search_wildcards_are_literal(self) -> None:
        self._seed("alice", "100%real")
        page = self.repo.find_all(UserPagination(search="%"))
        self.assertEqual([u.username for u in page.results], ["100%real"])

    def test_equal_timestamps_page_without_repeats_or_gaps(self) -> None:
        users = self._seed("dave", "carol", "bob", "alice", "erin")
        ids = [u.user_id for u in users]
        self._backdate(*users)
        seen = []
        for page in range(3):
            result = self.repo.find_all(
                UserPagination(page=page, size=2, sort="created_at", order="desc")
            )
            seen.extend(u.user_id for u in result.results)
        self.assertEqual(seen, sorted(ids))

    def test_includes_photograph(self) -> None:
        self._seed("alice")
        page = self.repo.find_all(UserPagination())
        self.assertEqual(page.results[0].photograph.source, "s3://photos/alice.png")

    def test_echoes_pagination(self) -> None:
        pagination = UserPagination(page=2, size=5, sort="created_at", order="desc", search="x")
        page = self.repo.find_all(pagination)
        self.assertIs(page.pagination, pagination)
        self.assertEqual(page.results, [])

    def test_database_failure_raises_internal_error(self) -> None:
        session = MagicMock()
        session.query.side_effect = _db_down()
        with self.assertRaises(InternalError) as ctx:
            UserRepository(session).find_all(UserPagination())
        self.assertEqual(ctx.exception.message, "Error listing users")
        self.assertIsInstance(ctx.exception.__cause__, OperationalError)


class TestCount(RepositoryTestCase):
    def test_counts_all_active_matches_across_pages(self) -> None:
        users = self._seed(*[f"user{i:02d}" for i in range(12)])
        self._seed("bob")
        self.repo.deactivate(users[0].user_id)
        self.assertEqual(self.repo.count("USER"), 11)
        self.assertEqual(self.repo.count(), 12)


class TestFindOne(RepositoryTestCase):
    def test_returns_active_user_with_photograph(self) -> None:
        (alice,) = self._seed("alice")
        found = self.repo.find_one(alice.user_id)
        self.assertEqual(found.username, "alice")
        self.assertEqual(found.photograph.media_id, alice.photograph.media_id)

    def test_missing_id_returns_none(self) -> None:
        self.assertIsNone(self.repo.find_one(999))

    def test_inactive_user_returns_none(self) -> None:
        (alice,) = self._seed("alice")
        self.repo.deactivate(alice.user_id)
        self.assertIsNone(self.repo.find_one(alice.user_id))

    def test_database_failure_raises_internal_error(self) -> None:
        session = MagicMock()
        session.query.side_effect = _db_down()
        with self.assertRaises(InternalError) as ctx:
            UserRepository(session).find_one(1)
        self.assertEqual(ctx.exception.message, "Error fetching user by ID")


class TestFindUserByUsername(RepositoryTestCase):
    def test_returns_credential_projection(self) -> None:
        self.repo.create(create_request(username="alice", password="secret-hash"))
        row = self.repo.find_user_by_username("alice")
        self.assertEqual(row.username, "alice")
        self.assertEqual(row.password, "secret-hash")
        self.assertEqual(row.user_role, UserRole.USER)
        self.assertEqual(set(row._fields), {"username", "password", "user_role"})

    def test_lookup_is_case_sensitive(self) -> None:
        self._seed("alice")
        self.assertIsNone(self.repo.find_user_by_username("ALICE"))

    def test_inactive_user_returns_none(self) -> None:
        (alice,) = self._seed("alice")
        self.repo.deactivate(alice.user_id)
        self.assertIsNone(self.repo.find_user_by_username("alice"))

    def test_database_failure_raises_internal_error(self) -> None:
        session = MagicMock()
        session.query.side_effect = _db_down()
        with self.assertRaises(InternalError):
            UserRepository(session).find_user_by_username("alice")


class TestUpdate(RepositoryTestCase):
    def test_updates_username_and_photograph(self) -> None:
        (alice,) = self._seed("alice")
        media_id = alice.photograph.media_id
        updated = self.repo.update(
            alice.user_id,
            update_request(media_id, username="alicia", source="new-src", media_type="image/webp"),
        )
        self.assertEqual(updated.username, "alicia")
        self.assertEqual(updated.photograph.media_id, media_id)
        self.assertEqual(updated.photograph.source, "new-src")
        self.assertEqual(updated.photograph.media_type, "image/webp")

    def test_update_moves_updated_at_forward(self) -> None:
        (alice,) = self._seed("alice")
        self._backdate(alice)
        updated = self.repo.update(alice.user_id, update_request(alice.photograph.media_id))
        self.assertGreater(updated.updated_at, LONG_AGO)
        self.assertGreater(updated.photograph.updated_at, LONG_AGO)
        self.assertEqual(updated.created_at, LONG_AGO)

    def test_foreign_photograph_id_raises_and_changes_nothing(self) -> None:
        alice, bob = self._seed("alice", "bob")
        alice_id, bob_media = alice.user_id, bob.photograph.media_id
        with self.assertRaises(InternalError) as ctx:
            self.repo.update(alice_id, update_request(bob_media, username="mallory"))
        self.assertEqual(ctx.exception.message, "Error updating user")
        self.assertEqual(self.repo.find_one(alice_id).username, "alice")

    def test_missing_user_raises_internal_error(self) -> None:
        with self.assertRaises(InternalError):
            self.repo.update(999, update_request(1))

    def test_taken_username_raises_conflict(self) -> None:
        alice, _ = self._seed("alice", "bob")
        with self.assertRaises(ConflictError):
            self.repo.update(alice.user_id, update_request(alice.photograph.media_id, username="bob"))


class TestDeactivate(RepositoryTestCase):
    def test_flips_status_to_inactive(self) -> None:
        (alice,) = self._seed("alice")
        user = self.repo.deactivate(alice.user_id)
        self.assertEqual(user.account_status, AccountStatus.INACTIVE)

    def test_moves_updated_at_forward(self) -> None:
        (alice,) = self._seed("alice")
        self._backdate(alice)
        user = self.repo.deactivate(alice.user_id)
        self.assertGreater(user.updated_at, LONG_AGO)
        self.assertEqual(user.created_at, LONG_AGO)

    def test_deactivated_user_is_no_longer_found(self) -> None:
        (alice,) = self._seed("alice")
        self.repo.deactivate(alice.user_id)
        self.assertIsNone(self.repo.find_one(alice.user_id))

    def test_row_is_kept(self) -> None:
        (alice,) = self._seed("alice")
        self.repo.deactivate(alice.user_id)
        self.assertEqual(self.db.query(User).count(), 1)

    def test_missing_user_raises_internal_error(self) -> None:
        with self.assertRaises(InternalError) as ctx:
            self.repo.deactivate(999)
        self.assertEqual(ctx.exception.message, "Error deactivating user")


if __name__ == "__main__":
    unittest.main()
