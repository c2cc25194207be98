"""MongoDB implementation of UserRepository."""

from datetime import datetime, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError
from adapter.mongodb import COUNTERS_COLLECTION_NAME, USERS_COLLECTION_NAME
from adapter.mongodb.indexes import create_index_safe
from domain.model.errors import DuplicateError, NotFoundError, StoreError
from domain.model.user import User

logger = getLogger(__name__)

# Fields written to the users collection. Plaintext password and
# remember token are deliberately absent.
_PERSISTED_FIELDS = ('name', 'email', 'age', 'password_hash', 'remember_hash')


def _duplicate_field(e: DuplicateKeyError) -> str | None:
    key_pattern = (e.details or {}).get('keyPattern') or {}
    return next(iter(key_pattern), None)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.db = db
        self.collection = db[USERS_COLLECTION_NAME]
        self.counters = db[COUNTERS_COLLECTION_NAME]
        self._closed = False

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("user repository is closed")

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            name=doc.get('name', ''),
            email=doc['email'],
            age=doc.get('age', 0),
            password_hash=doc.get('password_hash', ''),
            remember_hash=doc.get('remember_hash', ''),
            created_at=doc.get('created_at'),
            updated_at=doc.get('updated_at'),
        )

    def _next_id(self) -> int:
        """Atomically increment the users sequence. IDs are never reused."""
        counter = self.counters.find_one_and_update(
            {'_id': USERS_COLLECTION_NAME},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return counter['seq']

    # ── write operations ─────────────────────────────────────

    def create(self, user: User) -> None:
        """Insert the user and backfill id, created_at and updated_at."""
        self._check_open()
        try:
            user_id = self._next_id()
            now = datetime.now(timezone.utc)
            user_doc = {field: getattr(user, field) for field in _PERSISTED_FIELDS}
            user_doc.update({'_id': user_id, 'created_at': now, 'updated_at': now})
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            field = _duplicate_field(e)
            logger.warning("User creation failed: duplicate key", extra={"field": field})
            raise DuplicateError(field) from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"error": str(e)})
            raise StoreError(f"Failed to create user: {e}") from e

        user.id = user_id
        user.created_at = now
        user.updated_at = now
        logger.info("User created", extra={"userId": user_id})

    def update(self, user: User) -> None:
        """Overwrite the stored fields of the user with the given ID."""
        self._check_open()
        now = datetime.now(timezone.utc)
        fields = {field: getattr(user, field) for field in _PERSISTED_FIELDS}
        fields['updated_at'] = now
        try:
            doc = self.collection.find_one_and_update(
                {'_id': user.id},
                {'$set': fields},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError as e:
            field = _duplicate_field(e)
            logger.warning("User update failed: duplicate key", extra={"userId": user.id, "field": field})
            raise DuplicateError(field) from e
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user.id, "error": str(e)})
            raise StoreError(f"Failed to update user: {e}") from e

        if doc is None:
            raise NotFoundError()
        user.created_at = doc.get('created_at')
        user.updated_at = now
        logger.debug("User updated", extra={"userId": user.id})

    def delete(self, user_id: int) -> None:
        self._check_open()
        try:
            result = self.collection.delete_one({'_id': user_id})
        except PyMongoError as e:
            logger.error("Failed to delete user", extra={"userId": user_id, "error": str(e)})
            raise StoreError(f"Failed to delete user: {e}") from e

        if result.deleted_count == 0:
            raise NotFoundError()
        logger.info("User deleted", extra={"userId": user_id})

    # ── read operations ──────────────────────────────────────

    def _first(self, query: dict) -> User:
        """Return the first user matching query (lowest ID) or raise NotFoundError."""
        self._check_open()
        try:
            doc = self.collection.find_one(query, sort=[('_id', 1)])
        except PyMongoError as e:
            logger.error("Failed to query users", extra={"fields": sorted(query), "error": str(e)})
            raise StoreError(f"Failed to query users: {e}") from e
        if doc is None:
            raise NotFoundError()
        return self._to_domain(doc)

    def by_id(self, user_id: int) -> User:
        return self._first({'_id': user_id})

    def by_email(self, email: str) -> User:
        return self._first({'email': email})

    def by_remember_hash(self, remember_hash: str) -> User:
        return self._first({'remember_hash': remember_hash})

    def by_age(self, age: int) -> User:
        return self._first({'age': age})

    # ── lifecycle ────────────────────────────────────────────

    def close(self) -> None:
        self._closed = True
        self.db.client.close()

    def auto_migrate(self) -> None:
        """Create the unique indexes on email and remember_hash."""
        self._check_open()
        try:
            ok = all([
                create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True),
                create_index_safe(
                    self.collection, [('remember_hash', 1)], 'idx_users_remember_hash', unique=True
                ),
                create_index_safe(self.collection, [('age', 1)], 'idx_users_age'),
            ])
        except PyMongoError as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            raise StoreError(f"Failed to create users indexes: {e}") from e
        if not ok:
            raise StoreError("Failed to create users indexes")

    def destructive_reset(self) -> None:
        """Drop the users collection and its ID sequence, then rebuild indexes."""
        self._check_open()
        try:
            self.collection.drop()
            self.counters.delete_one({'_id': USERS_COLLECTION_NAME})
        except PyMongoError as e:
            logger.error("Failed to reset users collection", extra={"error": str(e)})
            raise StoreError(f"Failed to reset users collection: {e}") from e
        logger.warning("Users collection dropped")
        self.auto_migrate()
