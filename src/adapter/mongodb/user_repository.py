"""MongoDB implementation of UserRepository."""

import uuid
from dataclasses import asdict
from datetime import datetime, timezone
from logging import getLogger

from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from adapter.mongodb.connection import USERS_COLLECTION_NAME
from domain.model.errors import DomainError, DuplicateError, NotFoundError
from domain.model.schemas import clean_user
from domain.model.user import PROFILE_FIELDS, NewUser, Profile, User, UserRole, merge_profile, normalize_email

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        try:
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True)
            create_index_safe(self.collection, [('created_at', -1)], 'idx_users_created_at')
            create_index_safe(self.collection, [('is_active', 1)], 'idx_users_is_active')
            return True
        except Exception as e:
            logger.error("Failed to create users indexes", extra={"error": str(e)})
            return False

    # ── helpers ──────────────────────────────────────────────

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            username=doc['username'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            password_hash=doc.get('password_hash'),
            profile=Profile(**(doc.get('profile') or {})),
            role=UserRole(doc.get('role', UserRole.USER.value)),
            is_active=doc.get('is_active', True),
            last_login=doc.get('last_login'),
        )

    # ── write operations ─────────────────────────────────────

    def create(self, draft: NewUser) -> User:
        """Insert a new user; the unique email index decides duplicates."""
        draft = clean_user(draft)

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)
        user_doc = {
            '_id': user_id,
            'username': draft.username,
            'email': draft.email,
            'password_hash': draft.password_hash,
            'profile': asdict(draft.profile),
            'role': draft.role.value,
            'is_active': draft.is_active,
            'last_login': None,
            'created_at': now,
            'updated_at': now,
        }

        try:
            self.collection.insert_one(user_doc)
        except DuplicateKeyError as e:
            logger.warning("User creation failed: email already exists", extra={"email": draft.email})
            raise DuplicateError("User already exists") from e
        except PyMongoError as e:
            logger.error("Failed to create user", extra={"email": draft.email, "error": str(e)})
            raise DomainError("Failed to create user") from e

        logger.info("User created", extra={"userId": user_id, "email": draft.email})
        return self._to_domain(user_doc)

    def update(self, user_id: str, patch: dict) -> User:
        """Validate the merged record, then $set only the patched fields.

        A dict under 'profile' updates just those profile keys (dotted $set);
        a Profile replaces the whole profile.
        """
        current = self.get_by_id(user_id)
        if not current:
            raise NotFoundError("User not found")

        profile = patch.get('profile', current.profile)
        if isinstance(profile, dict):
            profile = merge_profile(current.profile, profile)
        draft = clean_user(NewUser(
            username=patch.get('username', current.username),
            email=current.email,
            password_hash=current.password_hash,
            profile=profile,
            role=patch.get('role', current.role),
            is_active=patch.get('is_active', current.is_active),
        ))

        changes: dict = {'updated_at': datetime.now(timezone.utc)}
        if 'username' in patch:
            changes['username'] = draft.username
        if 'role' in patch:
            changes['role'] = draft.role.value
        if 'is_active' in patch:
            changes['is_active'] = draft.is_active
        if isinstance(patch.get('profile'), dict):
            for key in patch['profile']:
                if key in PROFILE_FIELDS:
                    changes[f'profile.{key}'] = getattr(draft.profile, key)
        elif 'profile' in patch:
            changes['profile'] = asdict(draft.profile)

        try:
            doc = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': changes},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to update user", extra={"userId": user_id, "error": str(e)})
            raise DomainError("Failed to update user") from e

        if doc is None:
            raise NotFoundError("User not found")

        logger.info("User updated", extra={"userId": user_id, "fields": sorted(patch)})
        return self._to_domain(doc)

    def update_last_login(self, user_id: str, when: datetime) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': when, 'updated_at': when}}
            )
            if result.matched_count > 0:
                logger.debug("Updated last_login", extra={"userId": user_id})
                return True
            return False
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        email = normalize_email(email)
        try:
            doc = self.collection.find_one({'email': email})
            if doc:
                return self._to_domain(doc)
            return None
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"email": email, "error": str(e)})
            return None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
            if doc:
                return self._to_domain(doc)
            return None
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            return None

    def list_active(self) -> list[User]:
        try:
            docs = self.collection.find({'is_active': True}).sort('created_at', -1)
            return [self._to_domain(doc) for doc in docs]
        except PyMongoError as e:
            logger.error("Failed to list active users", extra={"error": str(e)})
            return []
