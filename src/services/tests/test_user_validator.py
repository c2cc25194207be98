"""Unit tests for the UserValidator validation layer."""

import unittest
from unittest.mock import MagicMock

from adapter.crypto.passwords import BcryptPasswordHasher
from adapter.crypto.token_hasher import HMACTokenHasher
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import InvalidIDError, NotFoundError
from domain.model.user import User
from services.user_validator import UserValidator, run_user_val_fns


class TestRunUserValFns(unittest.TestCase):

    def test_runs_in_order(self):
        calls = []
        run_user_val_fns(User(), lambda u: calls.append(1), lambda u: calls.append(2))
        self.assertEqual(calls, [1, 2])

    def test_stops_at_first_error(self):
        later = MagicMock()

        def failing(user):
            raise InvalidIDError()

        with self.assertRaises(InvalidIDError):
            run_user_val_fns(User(), failing, later)
        later.assert_not_called()


class TestUserValidator(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.token_hasher = HMACTokenHasher('test-secret')
        self.password_hasher = BcryptPasswordHasher('test-pepper', rounds=4)
        self.validator = UserValidator(self.repo, self.token_hasher, self.password_hasher)

    # ── create ────────────────────────────────────────────────

    def test_create_hashes_password_and_clears_plaintext(self):
        user = User(email='a@example.com', password='secret')
        self.validator.create(user)

        self.assertEqual(user.password, '')
        self.assertTrue(self.password_hasher.verify(user.password_hash, 'secret'))

    def test_create_mints_remember_token(self):
        user = User(email='a@example.com', password='secret')
        self.validator.create(user)

        self.assertTrue(user.remember)
        self.assertEqual(user.remember_hash, self.token_hasher.hash(user.remember))
        self.assertEqual(self.repo.by_id(user.id).remember_hash, user.remember_hash)

    def test_create_keeps_supplied_remember_token(self):
        user = User(email='a@example.com', remember='my-token')
        self.validator.create(user)

        self.assertEqual(user.remember, 'my-token')
        self.assertEqual(user.remember_hash, self.token_hasher.hash('my-token'))

    def test_create_without_password_skips_hashing(self):
        user = User(email='a@example.com')
        self.validator.create(user)

        self.assertEqual(user.password_hash, '')

    def test_create_uses_token_factory(self):
        validator = UserValidator(
            self.repo, self.token_hasher, self.password_hasher,
            token_factory=lambda: 'fixed-token',
        )
        user = User(email='a@example.com')
        validator.create(user)

        self.assertEqual(user.remember, 'fixed-token')

    def test_create_failure_in_step_skips_store(self):
        self.password_hasher = MagicMock()
        self.password_hasher.hash.side_effect = ValueError("bad input")
        repo = MagicMock()
        validator = UserValidator(repo, self.token_hasher, self.password_hasher)

        with self.assertRaises(ValueError):
            validator.create(User(email='a@example.com', password='secret'))
        repo.create.assert_not_called()

    # ── update ────────────────────────────────────────────────

    def test_update_without_token_keeps_remember_hash(self):
        user = User(email='a@example.com', password='secret')
        self.validator.create(user)
        original_hash = user.remember_hash

        stored = self.validator.by_id(user.id)
        stored.name = 'Renamed'
        self.validator.update(stored)

        self.assertEqual(stored.remember, '')
        self.assertEqual(self.repo.by_id(user.id).remember_hash, original_hash)

    def test_update_rehashes_new_token(self):
        user = User(email='a@example.com')
        self.validator.create(user)

        stored = self.validator.by_id(user.id)
        stored.remember = 'new-token'
        self.validator.update(stored)

        self.assertEqual(self.repo.by_id(user.id).remember_hash, self.token_hasher.hash('new-token'))

    def test_update_rehashes_new_password(self):
        user = User(email='a@example.com', password='old')
        self.validator.create(user)

        stored = self.validator.by_id(user.id)
        stored.password = 'new'
        self.validator.update(stored)

        password_hash = self.repo.by_id(user.id).password_hash
        self.assertEqual(stored.password, '')
        self.assertTrue(self.password_hasher.verify(password_hash, 'new'))
        self.assertFalse(self.password_hasher.verify(password_hash, 'old'))

    # ── delete ────────────────────────────────────────────────

    def test_delete_rejects_non_positive_ids(self):
        repo = MagicMock()
        validator = UserValidator(repo, self.token_hasher, self.password_hasher)

        for bad_id in (0, -1):
            with self.assertRaises(InvalidIDError):
                validator.delete(bad_id)
        repo.delete.assert_not_called()

    def test_delete_removes_user(self):
        user = User(email='a@example.com')
        self.validator.create(user)
        self.validator.delete(user.id)

        with self.assertRaises(NotFoundError):
            self.validator.by_id(user.id)

    # ── by_remember ───────────────────────────────────────────

    def test_by_remember_hashes_token(self):
        repo = MagicMock()
        validator = UserValidator(repo, self.token_hasher, self.password_hasher)

        validator.by_remember('plain-token')

        repo.by_remember_hash.assert_called_once_with(self.token_hasher.hash('plain-token'))

    def test_by_remember_finds_created_user(self):
        user = User(email='a@example.com')
        self.validator.create(user)

        self.assertEqual(self.validator.by_remember(user.remember).id, user.id)

    # ── pass-through ──────────────────────────────────────────

    def test_pass_through_operations(self):
        repo = MagicMock()
        validator = UserValidator(repo, self.token_hasher, self.password_hasher)

        validator.by_id(1)
        validator.by_email('a@example.com')
        validator.by_age(30)
        validator.auto_migrate()
        validator.destructive_reset()
        validator.close()

        repo.by_id.assert_called_once_with(1)
        repo.by_email.assert_called_once_with('a@example.com')
        repo.by_age.assert_called_once_with(30)
        repo.auto_migrate.assert_called_once()
        repo.destructive_reset.assert_called_once()
        repo.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
